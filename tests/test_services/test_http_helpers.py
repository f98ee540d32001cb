"""
Tests for archartifacts.services.http
=======================================

The helpers are exercised on a throwaway FastAPI app so the response
mapping is checked end to end without any provider.
"""

import json

import pytest
from fastapi import APIRouter, FastAPI, Request
from fastapi.testclient import TestClient

from archartifacts.core.exceptions import (
    ProviderError,
    RequestValidationError,
    ServiceNotInitializedError,
)
from archartifacts.services import CacheService
from archartifacts.services.http import (
    MISSING,
    add_status_route,
    is_blank,
    is_missing,
    mount_router,
    provider_source,
    read_json_body,
    respond_json,
    respond_ok,
    server_error,
)


def _make_client(emitter=None) -> TestClient:
    """App with one route per helper outcome."""
    router = APIRouter()

    async def succeed():
        return {"ok": True}

    async def fail():
        raise ProviderError("backend unavailable")

    async def reject():
        raise RequestValidationError("Bad Request: Missing thing")

    @router.post("/ok")
    async def ok():
        return await respond_ok(succeed())

    @router.get("/json")
    async def as_json():
        return await respond_json(succeed())

    @router.get("/fail")
    async def failing():
        return await respond_json(fail())

    @router.get("/reject")
    async def rejecting():
        return await respond_ok(reject())

    @router.post("/echo")
    async def echo(request: Request):
        body = await read_json_body(request)
        return {"missing": body is MISSING}

    add_status_route(router, "testing", emitter)
    app = FastAPI()
    mount_router({"app": app}, router)
    return TestClient(app)


# =============================================================================
# Test: Outcome Mapping
# =============================================================================
class TestResponseMapping:
    def test_mutation_answers_ok_text(self) -> None:
        response = _make_client().post("/ok")
        assert response.status_code == 200
        assert response.text == "OK"
        assert response.headers["content-type"].startswith("text/plain")

    def test_read_answers_json(self) -> None:
        response = _make_client().get("/json")
        assert response.json() == {"ok": True}

    def test_provider_error_is_500_with_message(self) -> None:
        response = _make_client().get("/fail")
        assert response.status_code == 500
        assert response.text == "backend unavailable"

    def test_validation_error_is_400(self) -> None:
        response = _make_client().get("/reject")
        assert response.status_code == 400
        assert response.text == "Bad Request: Missing thing"

    def test_server_error_helper(self) -> None:
        response = server_error(RuntimeError("boom"))
        assert response.status_code == 500
        assert response.body == b"boom"


# =============================================================================
# Test: Body Parsing
# =============================================================================
class TestBodyParsing:
    def test_empty_body_is_missing(self) -> None:
        assert _make_client().post("/echo").json() == {"missing": True}

    def test_json_body_is_not_missing(self) -> None:
        assert _make_client().post("/echo", json=0).json() == {"missing": False}

    @pytest.mark.parametrize("value", [MISSING, None])
    def test_is_missing(self, value) -> None:
        assert is_missing(value) is True
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["", 0, False, [], {}, "x"])
    def test_falsy_values_are_present(self, value) -> None:
        assert is_missing(value) is False

    def test_empty_text_is_blank(self) -> None:
        assert is_blank("") is True
        assert is_blank(0) is False
        assert is_blank("x") is False


# =============================================================================
# Test: Status Route and Mounting
# =============================================================================
class TestStatusAndMounting:
    def test_status_route(self, emitter, recorder) -> None:
        response = _make_client(emitter).get("/api/testing/status")
        assert json.loads(response.text) == "testing api running"
        assert recorder.names() == ["api-testing-status"]

    def test_mount_without_app(self) -> None:
        assert mount_router({}, APIRouter()) is False
        assert mount_router({"app": "not an app"}, APIRouter()) is False

    def test_capability_router_mounted_once(self) -> None:
        app = FastAPI()
        first, second = APIRouter(), APIRouter()

        @first.get("/which")
        async def which_first():
            return "first"

        @second.get("/which")
        async def which_second():
            return "second"

        assert mount_router({"app": app}, first, "testing") is True
        assert mount_router({"app": app}, second, "testing") is True

        assert [r.path for r in app.routes].count("/which") == 1
        assert TestClient(app).get("/which").json() == "first"


# =============================================================================
# Test: Provider Source
# =============================================================================
class TestProviderSource:
    def test_without_service_returns_provider(self) -> None:
        provider = object()
        assert provider_source({}, provider)() is provider

    def test_with_service_resolves_each_call(self) -> None:
        service = CacheService()
        source = provider_source({"service": service}, None)

        first = service.initialize()
        assert source() is first

        service.reset()
        second = service.initialize()
        assert source() is second
        assert second is not first

    def test_uninitialized_service_raises(self) -> None:
        source = provider_source({"service": CacheService()}, None)
        with pytest.raises(ServiceNotInitializedError):
            source()
