"""docsui: embed an API documentation UI into a FastAPI application."""

from __future__ import annotations

from docsui.assets import AssetStore
from docsui.bundle import BundleError, UIBundle, load_bundle
from docsui.routes import RouteConfigurationError, SwaggerUI, openapi_producer
from docsui.template import DIR_PLACEHOLDER, SCHEMA_PLACEHOLDER, IndexTemplate, render

__version__ = "0.1.0"

__all__ = [
    "AssetStore",
    "BundleError",
    "DIR_PLACEHOLDER",
    "IndexTemplate",
    "RouteConfigurationError",
    "SCHEMA_PLACEHOLDER",
    "SwaggerUI",
    "UIBundle",
    "load_bundle",
    "openapi_producer",
    "render",
]
