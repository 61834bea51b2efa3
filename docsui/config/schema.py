"""Configuration schema for docsui."""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

# ``${NAME}`` references, expanded from the environment when a file is loaded.
_ENV_REF = re.compile(r"\$\{([^}]+)\}")


def _resolve_env_vars(value: Any) -> Any:
    """Expand ``${NAME}`` references in every string of a loaded YAML tree.

    Unknown variables are left exactly as written.
    """
    if isinstance(value, dict):
        return {key: _resolve_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_REF.sub(lambda ref: os.environ.get(ref.group(1), ref.group(0)), value)
    return value


def default_config_path() -> Path:
    """``$DOCSUI_CONFIG`` if set, otherwise ``~/.docsui/config.yaml``."""
    override = os.environ.get("DOCSUI_CONFIG")
    if override:
        return Path(override)
    return Path.home() / ".docsui" / "config.yaml"


# ---------------------------------------------------------------------------
# UI configuration
# ---------------------------------------------------------------------------

class UIConfig(BaseModel):
    dir: str = "swagger-ui"
    schema_path: str = "swagger.json"
    bundle: str = "swagger-ui"  # built-in name, plugin name or directory
    name: str = "docsui"
    prefix: str = ""
    cache_max_age: int = Field(default=3600, ge=0)


# ---------------------------------------------------------------------------
# Server configuration
# ---------------------------------------------------------------------------

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"


# ---------------------------------------------------------------------------
# Root configuration
# ---------------------------------------------------------------------------

class DocsUIConfig(BaseModel):
    ui: UIConfig = Field(default_factory=UIConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    schema_file: str = ""

    @classmethod
    def load(cls, path: Path | None = None) -> "DocsUIConfig":
        """Read a YAML config file; a missing file yields the defaults."""
        path = path or default_config_path()
        if not path.exists():
            return cls()

        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return cls.model_validate(_resolve_env_vars(raw))

    def save(self, path: Path | None = None) -> Path:
        """Write the config as YAML and return the path written."""
        path = path or default_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(self.model_dump(), default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
        return path
