"""FastAPI routes that serve a documentation UI next to its schema document.

Usage::

    from fastapi import FastAPI
    from docsui import SwaggerUI, openapi_producer

    app = FastAPI(docs_url=None, redoc_url=None)
    SwaggerUI(openapi_producer(app), dir="docs", schema_path="docs.json").install(app)

This serves::

    /docs.json          the schema document
    /docs/              the UI, pointed at /docs.json
    /docs/index.html    same page
    /docs/...           the UI's static files
"""

from __future__ import annotations

import inspect
import re
from pathlib import Path
from typing import Any, Awaitable, Callable, Union

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.routing import NoMatchFound

from docsui.bundle import UIBundle, load_bundle

SchemaProducer = Callable[[], Union[Any, Awaitable[Any]]]

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9._~-]+$")


class RouteConfigurationError(ValueError):
    """Raised when the UI routes are configured in a way that cannot work."""


def validate_route_path(value: str, what: str) -> str:
    """Check that ``value`` is a plain relative URL path and normalise it.

    Only unreserved URL characters are accepted, so the value can be placed
    into the index page without escaping.
    """
    stripped = value.strip("/")
    if not stripped:
        raise RouteConfigurationError(f"{what} must not be empty")
    for segment in stripped.split("/"):
        if segment in (".", "..") or not _SEGMENT_RE.match(segment):
            raise RouteConfigurationError(f"Invalid {what} {value!r}: bad segment {segment!r}")
    return stripped


def openapi_producer(app: FastAPI) -> SchemaProducer:
    """Schema producer that serves the OpenAPI document FastAPI generates."""
    return app.openapi


def _etag_matches(if_none_match: str | None, etag: str) -> bool:
    if not if_none_match:
        return False
    candidates = [tag.strip() for tag in if_none_match.split(",")]
    return "*" in candidates or any(tag.removeprefix("W/") == etag for tag in candidates)


def _resolves(target: Any, name: str) -> bool:
    # The asset route is the only one with a parameter.
    params = {"path": ""} if name.endswith(".asset") else {}
    try:
        target.url_path_for(name, **params)
    except NoMatchFound:
        return False
    return True


class SwaggerUI:
    """Schema endpoint plus documentation UI, configured from one place.

    Args:
        schema: The schema document, or a zero-argument callable (sync or
            async) producing it on every request.
        dir: Directory the UI is mounted under, e.g. ``"docs"``.
        schema_path: Path of the schema endpoint, e.g. ``"docs.json"``.
            Relative to the same root as ``dir``.
        bundle: UI bundle, bundle name or bundle directory. Defaults to the
            built-in Swagger UI.
        name: Prefix for the route names. Must not already be reachable from
            the application, including through mounted sub-applications.
        cache_max_age: ``max-age`` for static assets; ``0`` disables caching.
        include_in_schema: Whether the routes appear in the OpenAPI document.
    """

    def __init__(
        self,
        schema: Any,
        dir: str = "swagger-ui",
        schema_path: str = "swagger.json",
        bundle: str | Path | UIBundle | None = None,
        name: str = "docsui",
        cache_max_age: int = 3600,
        include_in_schema: bool = False,
    ):
        self.dir = validate_route_path(dir, "mount directory")
        self.schema_path = validate_route_path(schema_path, "schema path")
        if cache_max_age < 0:
            raise RouteConfigurationError("cache_max_age must be >= 0")

        self.bundle = load_bundle(bundle)
        self.name = name
        self.cache_max_age = cache_max_age
        self.include_in_schema = include_in_schema

        self._producer: SchemaProducer | None = schema if callable(schema) else None
        self._document = None if callable(schema) else schema
        self._router: APIRouter | None = None

    # ------------------------------------------------------------------
    # Route names
    # ------------------------------------------------------------------

    @property
    def schema_route_name(self) -> str:
        return f"{self.name}.schema"

    @property
    def route_names(self) -> list[str]:
        return [f"{self.name}.{suffix}" for suffix in ("schema", "index", "index_html", "asset")]

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------

    async def produce_schema(self) -> Any:
        """Return the schema document. Producer errors propagate unchanged."""
        if self._producer is None:
            return self._document
        if inspect.iscoroutinefunction(self._producer):
            return await self._producer()
        result = await run_in_threadpool(self._producer)
        if inspect.isawaitable(result):
            result = await result
        return result

    def resolve_schema_path(self, request: Request) -> str:
        """URL path the schema endpoint is reachable at for this request.

        Resolved inside the application serving the request, then prefixed
        with the request's root path. Starlette adds each mount prefix to
        ``root_path``, so router prefixes, mounts and proxy root paths above
        these routes are all taken into account.
        """
        root_path = request.scope.get("root_path", "").rstrip("/")
        try:
            return root_path + str(request.app.url_path_for(self.schema_route_name))
        except NoMatchFound:
            # Routes mounted without their own application are only visible
            # from the outermost router.
            return request.url_for(self.schema_route_name).path

    def render_index(self, request: Request) -> str:
        return self.bundle.template.render(self.dir, self.resolve_schema_path(request))

    def asset_response(self, path: str, request: Request) -> Response:
        assets = self.bundle.assets
        content = assets.get(path)
        if content is None:
            logger.debug(f"UI asset not found: {self.dir}/{path}")
            raise HTTPException(status_code=404, detail="Not Found")

        headers = {}
        etag = assets.etag(path)
        if etag:
            headers["ETag"] = etag
        if self.cache_max_age:
            headers["Cache-Control"] = f"public, max-age={self.cache_max_age}"

        if etag and _etag_matches(request.headers.get("if-none-match"), etag):
            return Response(status_code=304, headers=headers)
        return Response(content=content, media_type=assets.content_type(path), headers=headers)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def router(self) -> APIRouter:
        """Return the FastAPI routes for the schema and the UI."""
        if self._router is not None:
            return self._router

        router = APIRouter()

        @router.get(
            f"/{self.schema_path}",
            name=self.schema_route_name,
            include_in_schema=self.include_in_schema,
        )
        async def schema_document():
            return await self.produce_schema()

        @router.get(
            f"/{self.dir}/",
            name=f"{self.name}.index",
            response_class=HTMLResponse,
            include_in_schema=self.include_in_schema,
        )
        async def index(request: Request):
            return HTMLResponse(self.render_index(request))

        @router.get(
            f"/{self.dir}/index.html",
            name=f"{self.name}.index_html",
            response_class=HTMLResponse,
            include_in_schema=self.include_in_schema,
        )
        async def index_html(request: Request):
            return HTMLResponse(self.render_index(request))

        @router.get(
            f"/{self.dir}/{{path:path}}",
            name=f"{self.name}.asset",
            include_in_schema=self.include_in_schema,
        )
        async def asset(path: str, request: Request):
            return self.asset_response(path, request)

        self._router = router
        return router

    def install(self, app: FastAPI | APIRouter, prefix: str = "") -> str:
        """Add the routes to ``app`` and check that the schema route resolves.

        Returns the schema path relative to ``app``. Raises
        ``RouteConfigurationError`` when one of the route names already
        resolves from ``app`` or the schema route cannot be resolved.
        """
        clashing = [name for name in self.route_names if _resolves(app, name)]
        if clashing:
            raise RouteConfigurationError(
                f"Route name(s) already registered: {', '.join(clashing)}. "
                "Pass a different name= to SwaggerUI."
            )

        app.include_router(self.router(), prefix=prefix)

        if not _resolves(app, self.schema_route_name):
            raise RouteConfigurationError(
                f"Schema route '{self.schema_route_name}' is not reachable after installation"
            )
        schema_url = prefix.rstrip("/") + str(self.router().url_path_for(self.schema_route_name))

        ui_url = f"{prefix.rstrip('/')}/{self.dir}/"
        logger.info(f"Serving {self.bundle.name} at {ui_url} (schema: {schema_url})")
        return schema_url
