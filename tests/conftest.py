"""Shared FastAPI app and clients for the JSON:API middleware tests."""

from typing import Any

import pytest
from fastapi import FastAPI, HTTPException, Response
from fastapi.testclient import TestClient

from fastapi_jsonapi_media import JSONAPISettings, register_jsonapi

JSONAPI = "application/vnd.api+json"


def build_app(settings: JSONAPISettings | None = None, **kwargs: Any) -> FastAPI:
    app = FastAPI()

    @app.get("/ok")
    async def ok() -> dict[str, Any]:
        return {"data": {"id": "ok", "type": "response"}}

    @app.options("/ok")
    async def ok_options() -> dict[str, Any]:
        return {"allow": ["GET", "OPTIONS"]}

    @app.post("/post")
    async def post() -> dict[str, Any]:
        return {"data": {"id": "post", "type": "response"}}

    @app.put("/put")
    async def put() -> dict[str, Any]:
        return {"data": {"id": "put", "type": "response"}}

    @app.get("/auth")
    async def auth() -> None:
        raise HTTPException(
            status_code=401, detail="need auth", headers={"WWW-Authenticate": "Bearer"}
        )

    @app.get("/conflict")
    async def conflict() -> None:
        raise HTTPException(status_code=409, detail={"code": "conflict", "ids": [1, 2]})

    @app.delete("/delete", status_code=204)
    async def delete() -> Response:
        return Response(status_code=204)

    @app.get("/items/{item_id}")
    async def item(item_id: int) -> dict[str, Any]:
        return {"data": {"id": str(item_id), "type": "items"}}

    @app.get("/explode")
    async def explode() -> None:
        raise RuntimeError("boom")

    @app.get("/docs-like")
    async def docs_like() -> Response:
        return Response("<html></html>", media_type="text/html")

    register_jsonapi(app, settings, **kwargs)
    return app


def make_client(app: FastAPI) -> TestClient:
    """Client without httpx's default ``Accept: */*`` header."""
    client = TestClient(app)
    client.headers.pop("accept", None)
    return client


@pytest.fixture
def client() -> TestClient:
    return make_client(build_app(JSONAPISettings(), meta={"test": True}))


@pytest.fixture
def plain_client() -> TestClient:
    return make_client(build_app(JSONAPISettings()))


@pytest.fixture
def jsonapi_headers() -> dict[str, str]:
    return {"accept": JSONAPI}
