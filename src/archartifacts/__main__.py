"""Run the services server: ``python -m archartifacts [--config artifacts.yaml]``."""

from __future__ import annotations

import argparse
from typing import Optional

import uvicorn

from archartifacts.core.config import load_config
from archartifacts.server.app import create_app


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="archartifacts",
        description="Run the Architecture Artifacts services server.",
    )
    parser.add_argument("--config", help="Path to a YAML config file (default: artifacts.yaml)")
    parser.add_argument("--host", help="Override the configured bind address")
    parser.add_argument("--port", type=int, help="Override the configured port")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.host,
        port=args.port or config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
