"""In-memory store for the files of a vendored UI bundle."""

from __future__ import annotations

import hashlib
import mimetypes
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from loguru import logger

# Served with an explicit charset so browsers don't have to sniff.
_CHARSET_TYPES = ("application/javascript", "application/json")

# Extensions the platform mimetypes database sometimes lacks.
_EXTRA_TYPES = {
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".map": "application/json",
    ".woff2": "font/woff2",
    ".svg": "image/svg+xml",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def normalize_path(path: str) -> str | None:
    """Normalise a request or file path to a store key.

    Returns ``None`` for paths that try to escape the bundle root.
    """
    parts = []
    for part in path.replace("\\", "/").split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            return None
        parts.append(part)
    return "/".join(parts)


def guess_content_type(path: str) -> str:
    """Infer a Content-Type header value from the file extension."""
    suffix = PurePosixPath(path).suffix.lower()
    media_type = _EXTRA_TYPES.get(suffix) or mimetypes.guess_type(path)[0]
    if media_type is None:
        return DEFAULT_CONTENT_TYPE
    if media_type.startswith("text/") or media_type in _CHARSET_TYPES:
        return f"{media_type}; charset=utf-8"
    return media_type


class AssetStore:
    """Immutable mapping from relative file path to file content.

    Built once (usually at startup) and only read afterwards, so a single
    instance can be shared by any number of concurrent requests.
    """

    def __init__(self, files: Mapping[str, bytes] | Iterable[tuple[str, bytes]] = ()):
        items = files.items() if isinstance(files, Mapping) else files
        entries: dict[str, bytes] = {}
        for path, content in items:
            key = normalize_path(path)
            if not key:
                raise ValueError(f"Invalid asset path: {path!r}")
            entries[key] = bytes(content)
        self._files = MappingProxyType(entries)
        self._etags = MappingProxyType(
            {key: f'"{hashlib.md5(data).hexdigest()}"' for key, data in entries.items()}
        )

    @classmethod
    def from_directory(cls, root: str | Path, exclude: Iterable[str] = ()) -> "AssetStore":
        """Load every regular file under ``root`` into memory.

        ``exclude`` holds paths relative to ``root`` that should be skipped
        (e.g. the index template, which is served rendered).
        """
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Asset directory not found: {root}")

        skipped = {normalize_path(p) for p in exclude}
        files = []
        for file_path in sorted(root.rglob("*")):
            if not file_path.is_file():
                continue
            rel = file_path.relative_to(root).as_posix()
            if rel in skipped:
                continue
            files.append((rel, file_path.read_bytes()))

        logger.debug(f"Loaded {len(files)} assets from {root}")
        return cls(files)

    @classmethod
    def combine(cls, *stores: "AssetStore") -> "AssetStore":
        """Merge several stores into one; later stores win on equal paths."""
        files: dict[str, bytes] = {}
        for store in stores:
            files.update(store._files)
        return cls(files)

    def get(self, path: str) -> bytes | None:
        """Return the bytes stored for ``path``, or ``None``."""
        key = normalize_path(path)
        if key is None:
            return None
        return self._files.get(key)

    def etag(self, path: str) -> str | None:
        key = normalize_path(path)
        if key is None:
            return None
        return self._etags.get(key)

    def content_type(self, path: str) -> str:
        return guess_content_type(path)

    def paths(self) -> list[str]:
        return sorted(self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.get(path) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"AssetStore({len(self)} files)"
