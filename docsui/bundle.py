"""UI bundles: an index template plus the static files it references."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from docsui.assets import AssetStore
from docsui.template import IndexTemplate

DEFAULT_INDEX = "index.html.tmpl"


class BundleError(ValueError):
    """Raised when a UI bundle cannot be found or loaded."""


@dataclass(frozen=True)
class UIBundle:
    """One documentation UI flavour (Swagger UI, ReDoc, ...)."""

    name: str
    template: IndexTemplate
    assets: AssetStore = field(default_factory=AssetStore)

    @classmethod
    def from_directory(
        cls,
        root: str | Path,
        name: str | None = None,
        index: str = DEFAULT_INDEX,
    ) -> "UIBundle":
        """Load a bundle from a directory.

        ``index`` is the template file, relative to ``root``. Every other file
        in the directory becomes a servable asset.
        """
        root = Path(root)
        template_path = root / index
        if not template_path.is_file():
            raise BundleError(f"Index template not found: {template_path}")

        template = IndexTemplate(template_path.read_text(encoding="utf-8"))
        bundle_name = name or root.name

        missing = template.missing_placeholders()
        if missing:
            logger.warning(
                f"Index template of bundle '{bundle_name}' lacks placeholder(s): {', '.join(missing)}"
            )

        assets = AssetStore.from_directory(root, exclude=[index])
        logger.debug(f"Loaded UI bundle '{bundle_name}' ({len(assets)} assets)")
        return cls(name=bundle_name, template=template, assets=assets)


def load_bundle(spec: str | Path | UIBundle | None = None) -> UIBundle:
    """Resolve a bundle from a name or a directory path.

    Lookup order: an existing directory, a built-in bundle, a plugin bundle.
    ``None`` selects the built-in Swagger UI.
    """
    if isinstance(spec, UIBundle):
        return spec

    from docsui.ui import DEFAULT_BUNDLE, available_bundles, builtin_bundle

    if spec is None:
        return builtin_bundle(DEFAULT_BUNDLE)

    path = Path(spec)
    if path.is_dir():
        return UIBundle.from_directory(path)

    name = str(spec)
    if name in available_bundles():
        return builtin_bundle(name)

    from docsui.plugins.loader import discover_bundles

    plugins = discover_bundles()
    if name in plugins:
        return plugins[name]

    raise BundleError(f"Unknown UI bundle: {name}")
