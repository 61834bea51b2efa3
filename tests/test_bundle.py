"""Tests for UI bundles, built-in and from disk."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from loguru import logger

from docsui.bundle import BundleError, UIBundle, load_bundle
from docsui.ui import DEFAULT_BUNDLE, available_bundles, builtin_bundle


@pytest.fixture
def bundle_dir(tmp_path):
    root = tmp_path / "my-ui"
    root.mkdir()
    (root / "index.html.tmpl").write_text("<a href='SERVANT_SWAGGER_UI_SCHEMA'>SERVANT_SWAGGER_UI_DIR</a>")
    (root / "app.js").write_bytes(b"init()")
    return root


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


class TestFromDirectory:
    def test_loads_template_and_assets(self, bundle_dir):
        bundle = UIBundle.from_directory(bundle_dir)
        assert bundle.name == "my-ui"
        assert bundle.template.render("docs", "/docs.json") == "<a href='/docs.json'>docs</a>"
        assert bundle.assets.paths() == ["app.js"]

    def test_template_not_served_as_asset(self, bundle_dir):
        bundle = UIBundle.from_directory(bundle_dir)
        assert "index.html.tmpl" not in bundle.assets

    def test_custom_name_and_index(self, bundle_dir):
        (bundle_dir / "page.html").write_text("SERVANT_SWAGGER_UI_SCHEMA SERVANT_SWAGGER_UI_DIR")
        bundle = UIBundle.from_directory(bundle_dir, name="custom", index="page.html")
        assert bundle.name == "custom"
        assert "index.html.tmpl" in bundle.assets
        assert "page.html" not in bundle.assets

    def test_missing_template(self, tmp_path):
        with pytest.raises(BundleError):
            UIBundle.from_directory(tmp_path)

    def test_warns_on_missing_placeholder(self, bundle_dir, log_messages):
        (bundle_dir / "index.html.tmpl").write_text("<p>SERVANT_SWAGGER_UI_DIR</p>")
        UIBundle.from_directory(bundle_dir)
        assert any("SERVANT_SWAGGER_UI_SCHEMA" in m for m in log_messages)


class TestBuiltinBundles:
    def test_available(self):
        names = available_bundles()
        assert "swagger-ui" in names
        assert "redoc" in names
        assert DEFAULT_BUNDLE == "swagger-ui"

    @pytest.mark.parametrize("name", ["swagger-ui", "redoc"])
    def test_templates_complete(self, name):
        bundle = builtin_bundle(name)
        assert bundle.template.missing_placeholders() == []
        assert "favicon.svg" in bundle.assets

    def test_swagger_ui_embeds_distribution(self):
        assets = builtin_bundle("swagger-ui").assets
        assert "swagger-ui-bundle.js" in assets
        assert "swagger-ui.css" in assets
        assert "index.html" not in assets
        assert "favicon.svg" in assets

    def test_cached(self):
        assert builtin_bundle("redoc") is builtin_bundle("redoc")

    def test_unknown(self):
        with pytest.raises(BundleError):
            builtin_bundle("nope")


class TestLoadBundle:
    def test_default(self):
        assert load_bundle().name == "swagger-ui"

    def test_instance_passthrough(self, bundle_dir):
        bundle = UIBundle.from_directory(bundle_dir)
        assert load_bundle(bundle) is bundle

    def test_builtin_by_name(self):
        assert load_bundle("redoc").name == "redoc"

    def test_directory(self, bundle_dir):
        assert load_bundle(str(bundle_dir)).name == "my-ui"

    def test_plugin(self, bundle_dir):
        plugin = UIBundle.from_directory(bundle_dir, name="rapidoc")
        with patch("docsui.plugins.loader.discover_bundles", return_value={"rapidoc": plugin}):
            assert load_bundle("rapidoc") is plugin

    def test_unknown(self):
        with patch("docsui.plugins.loader.discover_bundles", return_value={}):
            with pytest.raises(BundleError):
                load_bundle("does-not-exist")
