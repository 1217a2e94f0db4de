"""FastAPI adapter exposing the parse entry points over HTTP."""
from __future__ import annotations

import logging
from typing import Any

import uvicorn
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from pydantic import BaseModel

from whowhere.parse_manager import ParseManager, get_parse_manager
from whowhere.settings import get_api_bind_host, get_api_port


class TextRequest(BaseModel):
    text: str = ""


class AnnotationsRequest(BaseModel):
    annotations: str | dict[str, Any] | list[Any] | None = None


def include_routes(app: FastAPI, manager: ParseManager, *, prefix: str = "") -> None:
    """Register the parse routes.

    Handlers are plain functions so they run in the server thread pool:
    extraction and resolution block.
    """

    router = APIRouter(prefix=prefix, tags=["Parse"])

    @router.get("/healthz")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @router.get("/version")
    def version() -> dict[str, str]:
        return {"version": manager.version}

    @router.get("/parse/text")
    def parse_text_query(q: str = "") -> dict[str, Any]:
        return manager.parse_from_text(q)

    @router.post("/parse/text")
    def parse_text(payload: TextRequest) -> dict[str, Any]:
        return manager.parse_from_text(payload.text)

    @router.post("/parse/nlp")
    def parse_nlp(payload: AnnotationsRequest) -> dict[str, Any]:
        return manager.parse_from_nlp_json(payload.annotations)

    app.include_router(router)


def create_app(manager: ParseManager | None = None) -> FastAPI:
    """Create the FastAPI application, using the default manager if none given."""

    manager = manager or get_parse_manager()
    app = FastAPI(
        title="whowhere",
        version=manager.version,
        description="People and places mentioned in unstructured text.",
    )
    include_routes(app, manager)
    app.state.manager = manager
    return app


def run_api() -> None:
    """Run the HTTP adapter with uvicorn."""

    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    uvicorn.run(
        "whowhere.api:create_app",
        host=get_api_bind_host(),
        port=get_api_port(),
        factory=True,
    )


__all__ = ["AnnotationsRequest", "TextRequest", "create_app", "include_routes", "run_api"]
