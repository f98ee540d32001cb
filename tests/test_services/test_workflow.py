"""
Tests for the workflow capability
===================================

Steps are registered as plain callables; each test builds the engine it
needs with a small step table.
"""

import pytest
from fastapi.testclient import TestClient

from archartifacts.core.config import ServiceConfig
from archartifacts.core.exceptions import WorkflowError
from archartifacts.services.workflow import create_workflow
from archartifacts.services.workflow.provider import WorkflowProvider


def _double(n):
    return n * 2


def _inc(n):
    return n + 1


def _explode(n):
    raise ValueError("bad input")


def _make_engine(emitter=None) -> WorkflowProvider:
    """Engine preloaded with double/inc/explode steps."""
    return WorkflowProvider(
        {"steps": {"double": _double, "inc": _inc, "explode": _explode}}, emitter
    )


# =============================================================================
# Test: Definition
# =============================================================================
class TestWorkflowDefinition:
    def test_steps_loaded_from_options(self) -> None:
        assert _make_engine().list_steps() == ["double", "explode", "inc"]

    def test_register_step_requires_callable(self) -> None:
        engine = WorkflowProvider()
        with pytest.raises(TypeError):
            engine.register_step("broken", "not a function")

    async def test_define_returns_name(self, emitter, recorder) -> None:
        engine = _make_engine(emitter)
        assert await engine.define_workflow("calc", ["double", "inc"]) == "calc"
        assert engine.get_workflow("calc") == ["double", "inc"]
        assert engine.list_workflows() == ["calc"]
        assert recorder.payloads("workflow:defined") == [
            {"workflow_name": "calc", "steps": ["double", "inc"]}
        ]

    async def test_unknown_step_rejected(self) -> None:
        engine = _make_engine()
        with pytest.raises(WorkflowError) as exc_info:
            await engine.define_workflow("calc", ["double", "triple"])
        assert exc_info.value.error_code == "UNKNOWN_STEP"
        assert exc_info.value.details["unknown_steps"] == ["triple"]
        assert engine.get_workflow("calc") is None

    async def test_redefine_replaces(self) -> None:
        engine = _make_engine()
        await engine.define_workflow("calc", ["double"])
        await engine.define_workflow("calc", ["inc"])
        assert await engine.run_workflow("calc", 5) == 6


# =============================================================================
# Test: Execution
# =============================================================================
class TestWorkflowExecution:
    async def test_steps_run_in_order(self) -> None:
        engine = _make_engine()
        await engine.define_workflow("calc", ["double", "inc"])
        assert await engine.run_workflow("calc", 5) == 11

    async def test_async_steps(self) -> None:
        engine = WorkflowProvider()

        async def fetch(data):
            return {"fetched": data}

        engine.register_step("fetch", fetch)
        await engine.define_workflow("pipeline", ["fetch"])
        assert await engine.run_workflow("pipeline", "page") == {"fetched": "page"}

    async def test_empty_workflow_returns_input(self) -> None:
        engine = WorkflowProvider()
        await engine.define_workflow("noop", [])
        assert await engine.run_workflow("noop", {"x": 1}) == {"x": 1}

    async def test_events_in_order(self, emitter, recorder) -> None:
        engine = _make_engine(emitter)
        await engine.define_workflow("calc", ["double"])
        recorder.clear()

        await engine.run_workflow("calc", 2)

        assert recorder.names() == [
            "workflow:start",
            "workflow:step:start",
            "workflow:step:end",
            "workflow:complete",
        ]
        assert recorder.payloads("workflow:complete") == [
            {"workflow_name": "calc", "final_data": 4}
        ]

    async def test_status_callback_reports_progress(self) -> None:
        engine = _make_engine()
        await engine.define_workflow("calc", ["double", "inc"])
        reports = []

        await engine.run_workflow("calc", 1, reports.append)

        assert [r["status"] for r in reports] == [
            "step_start",
            "step_end",
            "step_start",
            "step_end",
            "workflow_complete",
        ]
        assert reports[-1]["final_data"] == 3
        assert reports[2]["step_index"] == 2

    async def test_unknown_workflow(self, emitter, recorder) -> None:
        engine = _make_engine(emitter)
        with pytest.raises(WorkflowError) as exc_info:
            await engine.run_workflow("ghost")
        assert exc_info.value.error_code == "WORKFLOW_NOT_FOUND"
        assert recorder.payloads("workflow:error") == [
            {"workflow_name": "ghost", "error": "Workflow 'ghost' not found."}
        ]

    async def test_failing_step_stops_run(self, emitter, recorder) -> None:
        engine = _make_engine(emitter)
        await engine.define_workflow("calc", ["double", "explode", "inc"])
        reports = []

        with pytest.raises(WorkflowError) as exc_info:
            await engine.run_workflow("calc", 1, reports.append)

        error = exc_info.value
        assert error.error_code == "STEP_FAILED"
        assert error.step_name == "explode"
        assert isinstance(error.__cause__, ValueError)
        assert reports[-1]["status"] == "step_error"
        assert "workflow:complete" not in recorder.names()
        assert recorder.payloads("workflow:step:error")[0]["error"] == "bad input"

    def test_factory(self, emitter, recorder) -> None:
        assert isinstance(create_workflow(None, {}, emitter), WorkflowProvider)
        assert recorder.names() == ["workflow:instantiated"]


# =============================================================================
# Test: Routes
# =============================================================================
class TestWorkflowRoutes:
    def _make_workflow_app(self, make_app):
        return make_app(
            workflow=ServiceConfig(options={"steps": {"double": _double, "inc": _inc}})
        )

    def test_define_and_start(self, make_app, recorder) -> None:
        with TestClient(self._make_workflow_app(make_app)) as client:
            response = client.post(
                "/api/workflow/defineworkflow", json={"name": "calc", "steps": ["double", "inc"]}
            )
            assert response.json() == {"workflowId": "calc"}

            response = client.post("/api/workflow/start", json={"name": "calc", "data": 5})
            assert response.status_code == 200
            assert response.json() == {"workflowId": "calc", "result": 11}

        statuses = [p["status"] for p in recorder.payloads("workflow-status")]
        assert statuses[-1] == "workflow_complete"

    def test_missing_name_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/api/workflow/start", json={"data": 1})
        assert response.status_code == 400
        assert response.text == "Bad Request: Missing workflow name"

    def test_unknown_workflow_is_server_error(self, client: TestClient) -> None:
        response = client.post("/api/workflow/start", json={"name": "ghost"})
        assert response.status_code == 500
        assert response.text == "Workflow 'ghost' not found."

    def test_unknown_step_is_server_error(self, client: TestClient) -> None:
        response = client.post(
            "/api/workflow/defineworkflow", json={"name": "calc", "steps": ["nope"]}
        )
        assert response.status_code == 500

    @pytest.mark.parametrize("steps", ["double", 3, {"double": 1}, ["double", 2]])
    def test_steps_must_be_list_of_names(self, make_app, recorder, steps) -> None:
        with TestClient(self._make_workflow_app(make_app)) as client:
            response = client.post(
                "/api/workflow/defineworkflow", json={"name": "calc", "steps": steps}
            )
        assert response.status_code == 400
        assert response.text == "Bad Request: Steps must be a list of step names"
        assert "workflow:defined" not in recorder.names()

    def test_null_steps_define_empty_workflow(self, client: TestClient) -> None:
        response = client.post("/api/workflow/defineworkflow", json={"name": "noop", "steps": None})
        assert response.json() == {"workflowId": "noop"}
        response = client.post("/api/workflow/start", json={"name": "noop", "data": "x"})
        assert response.json() == {"workflowId": "noop", "result": "x"}

    def test_status(self, client: TestClient) -> None:
        assert client.get("/api/workflow/status").json() == "workflow api running"
