"""Plugin system for docsui."""

from __future__ import annotations

from docsui.plugins.loader import discover_bundles

__all__ = ["discover_bundles"]
