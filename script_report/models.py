"""Data models for the script-report registry and report pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    """A registered asset (script or style) identified by its handle."""
    name: str
    source: str = ""  # empty means inline-only
    version: str | None = None
    dependencies: tuple[str, ...] = ()
    # Presentation flags; read-only and left out of the hash
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def in_footer(self) -> bool:
        return bool(self.extra.get("group"))

    @property
    def inline_data(self) -> str:
        data = self.extra.get("data")
        return data if isinstance(data, str) else ""

    @property
    def inline_size(self) -> int:
        return len(self.inline_data.encode("utf-8"))


@dataclass
class Registry:
    """Read view over one asset class: all registered items plus the queue."""
    items: dict[str, Item] = field(default_factory=dict)
    queue: list[str] = field(default_factory=list)
    kind: str = "scripts"
    sources: dict[str, str] = field(default_factory=dict)  # name -> "Added by" label

    def lookup(self, name: str) -> Item | None:
        return self.items.get(name)

    def dependencies_of(self, name: str) -> tuple[str, ...]:
        item = self.items.get(name)
        if item is None:
            return ()
        return item.dependencies

    def is_enqueued(self, name: str) -> bool:
        return name in self.queue

    def snapshot(self) -> Registry:
        return Registry(
            items=dict(self.items),
            queue=list(self.queue),
            kind=self.kind,
            sources=dict(self.sources),
        )

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)


class RegistryRecorder:
    """Collect registrations, each with an explicit attribution label."""

    def __init__(self, kind: str = "scripts"):
        self.kind = kind
        self._items: dict[str, Item] = {}
        self._queue: list[str] = []
        self._sources: dict[str, str] = {}

    def register(
        self,
        name: str,
        source: str = "",
        dependencies: Iterable[str] = (),
        version: str | None = None,
        extra: dict[str, Any] | None = None,
        registered_by: str | None = None,
    ) -> Item:
        if name in self._items:
            logger.debug("re-registering %s handle %r", self.kind, name)
        item = Item(
            name=name,
            source=source or "",
            version=version,
            dependencies=tuple(dependencies),
            extra=dict(extra or {}),
        )
        self._items[name] = item
        if registered_by:
            self._sources[name] = registered_by
        else:
            self._sources.pop(name, None)
        return item

    def enqueue(self, name: str) -> None:
        if name not in self._queue:
            self._queue.append(name)

    def build(self) -> Registry:
        return Registry(
            items=dict(self._items),
            queue=list(self._queue),
            kind=self.kind,
            sources=dict(self._sources),
        )


def label_for_path(path: str | Path, content_dir: str | Path, includes_dir: str | Path) -> str:
    """Attribution label for the file that performed a registration.

    Plugins and themes are recognised by their directory under the content
    dir; the includes dir and anything else under the content dir count as
    core. Files outside both are ``"unknown"``.
    """
    file_path = PurePosixPath(str(path).replace("\\", "/"))
    includes = PurePosixPath(str(includes_dir).replace("\\", "/"))
    content = PurePosixPath(str(content_dir).replace("\\", "/"))

    if _is_under(file_path, includes):
        return "core"
    if not _is_under(file_path, content):
        return "unknown"

    parts = file_path.relative_to(content).parts
    # Needs a file inside the plugin/theme folder, not just the folder name
    if len(parts) >= 3 and parts[0] == "plugins":
        return f"plugin: {parts[1]}"
    if len(parts) >= 3 and parts[0] == "themes":
        return f"theme: {parts[1]}"
    return "core"


def _is_under(path: PurePosixPath, parent: PurePosixPath) -> bool:
    try:
        path.relative_to(parent)
    except ValueError:
        return False
    return True


@dataclass
class ModuleEntry:
    """A registered script module (listed, not dependency-resolved)."""
    module_id: str
    source: str = ""
    dependencies: list[str] = field(default_factory=list)


@dataclass
class ModuleRegistry:
    registered: dict[str, ModuleEntry] = field(default_factory=dict)
    enqueued: list[str] = field(default_factory=list)


@dataclass
class ReportConfig:
    """Configuration for one report run."""
    snapshot_path: Path | None = None
    view: str = "list"  # "list" | "tree"
    root: Path = field(default_factory=lambda: Path("."))
    url_map: dict[str, Path] = field(default_factory=dict)  # URL prefix -> local directory
    include_modules: bool = True
    resolve_sizes: bool = True

    def __post_init__(self) -> None:
        if self.view not in ("list", "tree"):
            raise ValueError(f"Unknown view {self.view!r}; expected 'list' or 'tree'")
