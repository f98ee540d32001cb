"""
Tests for the logging capability
==================================

Covers line formatting, the console and file sinks, the level helpers on
LoggerService and the /api/logging routes.
"""

import re
import socket
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from archartifacts.core.config import ServiceConfig
from archartifacts.core.exceptions import ConfigurationError
from archartifacts.services.logger import create_logger
from archartifacts.services.logger.base import format_log_line
from archartifacts.services.logger.console import ConsoleLogger
from archartifacts.services.logger.file import FileLogger
from archartifacts.services.logger.singleton import LoggerService


LINE_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z - (?P<host>.+?) - (?P<logname>.+?) - (?P<message>.*)$"
)


# =============================================================================
# Test: Line Format
# =============================================================================
class TestFormatLogLine:
    def test_line_has_timestamp_host_logname_message(self) -> None:
        match = LINE_PATTERN.match(format_log_line("deploy", "release rolled out"))
        assert match is not None
        assert match["host"] == socket.gethostname()
        assert match["logname"] == "deploy"
        assert match["message"] == "release rolled out"

    def test_non_string_message_is_stringified(self) -> None:
        assert format_log_line("app", 42).endswith(" - app - 42")


# =============================================================================
# Test: Sinks
# =============================================================================
class TestConsoleLogger:
    async def test_log_returns_line_and_emits(self, emitter, recorder) -> None:
        logger = ConsoleLogger({}, emitter)
        line = await logger.log("app", "hello")

        assert LINE_PATTERN.match(line)
        assert recorder.payloads("log:log") == [
            {"logname": "app", "message": "hello", "line": line}
        ]


class TestFileLogger:
    async def test_appends_lines(self, tmp_path: Path) -> None:
        target = tmp_path / "logs" / "app.log"
        logger = FileLogger({"filename": str(target)})

        first = await logger.log("app", "one")
        second = await logger.log("app", "two")

        assert target.read_text(encoding="utf-8").splitlines() == [first, second]

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "deep" / "nested" / "app.log"
        logger = FileLogger({"filename": str(target)})
        assert logger.path == target
        assert target.parent.is_dir()

    def test_requires_filename(self) -> None:
        with pytest.raises(ConfigurationError):
            FileLogger({})


# =============================================================================
# Test: Factory and Service
# =============================================================================
class TestCreateLogger:
    def test_default_is_console(self) -> None:
        assert isinstance(create_logger(), ConsoleLogger)

    def test_file(self, tmp_path: Path) -> None:
        logger = create_logger("file", {"filename": str(tmp_path / "a.log")})
        assert isinstance(logger, FileLogger)

    def test_unknown_falls_back_to_console(self) -> None:
        assert isinstance(create_logger("syslog"), ConsoleLogger)


class TestLoggerService:
    async def test_level_helpers_use_level_as_logname(self, tmp_path: Path) -> None:
        target = tmp_path / "app.log"
        service = LoggerService()
        service.initialize("file", {"filename": str(target)})

        await service.info("started")
        await service.warning("slow")
        await service.error("failed")

        lines = target.read_text(encoding="utf-8").splitlines()
        assert [LINE_PATTERN.match(l)["logname"] for l in lines] == ["info", "warning", "error"]


# =============================================================================
# Test: Routes
# =============================================================================
class TestLoggerRoutes:
    def test_log_object_body(self, make_app, tmp_path: Path) -> None:
        target = tmp_path / "app.log"
        app = make_app(logging=ServiceConfig(type="file", options={"filename": str(target)}))
        with TestClient(app) as client:
            response = client.post(
                "/api/logging/log", json={"logname": "deploy", "message": "done"}
            )
            assert response.status_code == 200
            assert response.text == "OK"

        assert target.read_text(encoding="utf-8").rstrip().endswith(" - deploy - done")

    def test_bare_string_body_uses_default_logname(self, client: TestClient, recorder) -> None:
        client.post("/api/logging/log", json="plain message")
        assert recorder.payloads("log:log")[0]["logname"] == "default"
        assert recorder.payloads("log:log")[0]["message"] == "plain message"

    def test_missing_message_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/api/logging/log", json={"logname": "deploy"})
        assert response.status_code == 400
        assert response.text == "Bad Request: Missing message"

    def test_status(self, client: TestClient) -> None:
        assert client.get("/api/logging/status").json() == "logging api running"
