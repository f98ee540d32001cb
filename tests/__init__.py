"""
Architecture Artifacts Test Suite
==================================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/          → Tests for archartifacts.core (config, events, exceptions)
    ├── test_services/      → One module per capability, plus shared plumbing
    ├── test_server/        → Application factory and command line
    ├── test_registry.py    → ServiceRegistry lifecycle
    └── conftest.py         → Shared pytest fixtures and backing-store doubles

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_services/     # Run only capability tests
    pytest -k redis                 # Run only Redis-related tests
"""
