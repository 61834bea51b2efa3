"""Built-in documentation UI bundles.

Each bundle lives in ``static/<name>/`` and is loaded into memory the first
time it is requested; nothing is read from disk per request. The Swagger UI
bundle also embeds the swagger-ui distribution shipped by the
``swagger-ui-bundle`` package, so it works without network access.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from swagger_ui_bundle import swagger_ui_path

from docsui.assets import AssetStore
from docsui.bundle import BundleError, UIBundle

STATIC_DIR = Path(__file__).parent / "static"

DEFAULT_BUNDLE = "swagger-ui"

# Distribution files replaced by the rendered index page.
_SWAGGER_UI_DIST_EXCLUDE = ("index.html", "index.j2", "swagger-initializer.js")


def _swagger_ui_dist() -> AssetStore:
    return AssetStore.from_directory(swagger_ui_path, exclude=_SWAGGER_UI_DIST_EXCLUDE)


# Vendored files embedded underneath a built-in bundle's own assets.
_VENDORED = {
    "swagger-ui": _swagger_ui_dist,
}


def available_bundles() -> list[str]:
    """Names of the bundles shipped with docsui."""
    return sorted(p.name for p in STATIC_DIR.iterdir() if p.is_dir())


@lru_cache(maxsize=None)
def builtin_bundle(name: str = DEFAULT_BUNDLE) -> UIBundle:
    """Load a built-in bundle by name."""
    if name not in available_bundles():
        raise BundleError(
            f"Unknown built-in bundle '{name}'. Available: {', '.join(available_bundles())}"
        )
    bundle = UIBundle.from_directory(STATIC_DIR / name, name=name)
    if name not in _VENDORED:
        return bundle
    assets = AssetStore.combine(_VENDORED[name](), bundle.assets)
    return UIBundle(name=name, template=bundle.template, assets=assets)
