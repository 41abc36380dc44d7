"""File-size lookup for asset sources, memoized per report generation."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

from script_report.analysis.reverse_index import normalize_src

logger = logging.getLogger(__name__)


class FileSizeResolver:
    """Resolve a source locator to a local file and return its size in bytes.

    Relative sources live under ``root``. Absolute URLs are matched against
    ``url_map`` prefixes (longest first); unmatched URLs fall back to their
    path component under ``root``.
    """

    def __init__(self, root: str | Path = ".", url_map: dict[str, str | Path] | None = None):
        self.root = Path(root)
        self.url_map = {
            prefix.rstrip("/"): Path(directory)
            for prefix, directory in (url_map or {}).items()
        }

    def local_path(self, src: str) -> Path | None:
        if not src:
            return None

        base = self.root
        if not src.startswith("http"):
            rel = src.lstrip("/")
        else:
            prefix = self._match_prefix(src)
            if prefix is not None:
                base = self.url_map[prefix]
                rel = src[len(prefix):].lstrip("/")
            else:
                rel = urlparse(src).path.lstrip("/")

        rel = normalize_src(rel)
        if not rel:
            return None
        path = base / rel
        if not path.resolve().is_relative_to(base.resolve()):
            logger.warning("source %r resolves outside %s", src, base)
            return None
        return path

    def _match_prefix(self, src: str) -> str | None:
        for prefix in sorted(self.url_map, key=len, reverse=True):
            if src == prefix or src.startswith(prefix + "/"):
                return prefix
        return None

    def size_of(self, src: str) -> int | None:
        path = self.local_path(src)
        if path is None:
            return None
        try:
            if path.is_file():
                return path.stat().st_size
        except OSError as e:
            logger.warning("could not stat %s: %s", path, e)
        return None


class SizeCache:
    """Memoizes ``size_of`` by normalized source for one report generation."""

    def __init__(self, resolver: FileSizeResolver | None = None):
        self.resolver = resolver
        self._sizes: dict[str, int | None] = {}

    def size_of(self, src: str) -> int | None:
        normalized = normalize_src(src)
        if not normalized or self.resolver is None:
            return None
        if normalized not in self._sizes:
            self._sizes[normalized] = self.resolver.size_of(src)
        return self._sizes[normalized]

    def clear(self) -> None:
        self._sizes.clear()

    def __len__(self) -> int:
        return len(self._sizes)


def format_bytes(size: int | None) -> str:
    """Human-readable size: B below 1 KB, then KB and MB to one decimal."""
    if size is None:
        return ""
    size = int(size)
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{_one_decimal(size / 1024)} KB"
    return f"{_one_decimal(size / (1024 * 1024))} MB"


def _one_decimal(value: float) -> str:
    text = f"{round(value, 1):.1f}"
    return text[:-2] if text.endswith(".0") else text
