"""Bundle discovery via entry points.

Third-party packages can ship additional documentation UIs by registering an
entry point in their pyproject.toml:

    [project.entry-points."docsui.bundles"]
    rapidoc = "my_package.rapidoc:bundle"

The entry point may reference a ``UIBundle`` instance or a zero-argument
callable that returns one (e.g. a function calling
``UIBundle.from_directory``).
"""

from __future__ import annotations

from importlib.metadata import entry_points

from loguru import logger

from docsui.bundle import UIBundle

BUNDLE_GROUP = "docsui.bundles"


def discover_bundles() -> dict[str, UIBundle]:
    """Discover UI bundles from entry points.

    Returns:
        Mapping of entry point name to loaded bundle. Plugins that fail to
        load are skipped with a warning.
    """
    bundles: dict[str, UIBundle] = {}

    for ep in entry_points(group=BUNDLE_GROUP):
        try:
            obj = ep.load()
            bundle = obj if isinstance(obj, UIBundle) else obj()
            if not isinstance(bundle, UIBundle):
                raise TypeError(f"expected UIBundle, got {type(bundle).__name__}")
            bundles[ep.name] = bundle
            logger.debug(f"Discovered bundle plugin: {ep.name}")
        except Exception as e:
            logger.warning(f"Failed to load bundle plugin '{ep.name}': {e}")

    return bundles
