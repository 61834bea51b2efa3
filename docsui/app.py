"""Standalone application that serves a schema file with a documentation UI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from loguru import logger

from docsui.config.schema import UIConfig
from docsui.routes import SwaggerUI


def load_schema_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON or YAML schema document from disk."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError(f"Schema document in {path} must be a mapping, got {type(data).__name__}")
    return data


def create_app(schema: Any, ui: UIConfig | None = None, title: str = "docsui") -> FastAPI:
    """Build a FastAPI app serving ``schema`` and the configured UI.

    The app root redirects to the UI.
    """
    ui = ui or UIConfig()
    app = FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)

    docs = SwaggerUI(
        schema,
        dir=ui.dir,
        schema_path=ui.schema_path,
        bundle=ui.bundle,
        name=ui.name,
        cache_max_age=ui.cache_max_age,
    )
    docs.install(app, prefix=ui.prefix)

    @app.get("/", include_in_schema=False)
    async def root(request: Request):
        return RedirectResponse(url=request.url_for(f"{ui.name}.index").path)

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    logger.debug(f"Created docsui app for {ui.prefix}/{docs.dir}/")
    return app
