"""Example FastAPI app enforcing the JSON:API media type.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload

Try:
    curl -i -H 'Accept: application/vnd.api+json' localhost:8000/articles/1
    curl -i localhost:8000/articles/1
"""
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response

from fastapi_jsonapi_media import JSONAPISettings, register_jsonapi
from fastapi_jsonapi_media.logging_setup import configure_logging

configure_logging("DEBUG")

ARTICLES: dict[str, dict[str, Any]] = {
    "1": {"title": "JSON:API paints my bikeshed!", "body": "The shortest article. Ever."},
}

app = FastAPI(title="JSON:API media type example")
register_jsonapi(
    app,
    JSONAPISettings(exempt_paths=("/docs", "/openapi.json")),
    meta={"copyright": "Example Corp."},
)


def _resource(article_id: str) -> dict[str, Any]:
    return {"type": "articles", "id": article_id, "attributes": ARTICLES[article_id]}


@app.get("/articles")
async def list_articles() -> dict[str, Any]:
    return {"data": [_resource(article_id) for article_id in ARTICLES]}


@app.get("/articles/{article_id}")
async def retrieve_article(article_id: str) -> dict[str, Any]:
    if article_id not in ARTICLES:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
    return {"data": _resource(article_id)}


@app.post("/articles", status_code=201)
async def create_article(request: Request) -> dict[str, Any]:
    document = await request.json()
    article_id = str(len(ARTICLES) + 1)
    ARTICLES[article_id] = dict(document.get("data", {}).get("attributes", {}))
    return {"data": _resource(article_id)}


@app.delete("/articles/{article_id}", status_code=204)
async def destroy_article(article_id: str) -> Response:
    if ARTICLES.pop(article_id, None) is None:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
    return Response(status_code=204)
