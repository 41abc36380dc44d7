"""Load a registry snapshot (JSON) into Registry objects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from script_report.models import (
    ModuleEntry,
    ModuleRegistry,
    Registry,
    RegistryRecorder,
    label_for_path,
)

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """The snapshot file is missing or does not match the expected shape."""


class ItemModel(BaseModel):
    src: str | None = ""
    ver: str | int | float | None = None
    deps: list[str] = Field(default_factory=list)
    extra: dict[str, Any] = Field(default_factory=dict)
    registered_by: str | None = None
    registered_from: str | None = None  # file that performed the registration

    @field_validator("src", mode="before")
    @classmethod
    def _src_as_string(cls, v: Any) -> str:
        # Registries store ``false`` for inline-only handles
        return v if isinstance(v, str) else ""

    @field_validator("ver", mode="before")
    @classmethod
    def _ver_false_is_none(cls, v: Any) -> Any:
        # ``false`` means no version, not 0
        if v is False or v == "":
            return None
        return v


class RegistryModel(BaseModel):
    registered: dict[str, ItemModel] = Field(default_factory=dict)
    queue: list[str] = Field(default_factory=list)


class ModuleModel(BaseModel):
    src: str | None = ""
    dependencies: list[str] = Field(default_factory=list)


class ModulesModel(BaseModel):
    registered: dict[str, ModuleModel] = Field(default_factory=dict)
    enqueued: list[str] = Field(default_factory=list)


class PathsModel(BaseModel):
    """Where registration files live, for deriving "Added by" labels."""
    content_dir: str = "wp-content"
    includes_dir: str = "wp-includes"


class SnapshotModel(BaseModel):
    scripts: RegistryModel | None = None
    styles: RegistryModel | None = None
    modules: ModulesModel | None = None
    paths: PathsModel = Field(default_factory=PathsModel)


class Snapshot:
    """Registries read from one snapshot."""

    def __init__(
        self,
        scripts: Registry | None = None,
        styles: Registry | None = None,
        modules: ModuleRegistry | None = None,
    ):
        self.scripts = scripts
        self.styles = styles
        self.modules = modules

    def registries(self) -> list[Registry]:
        return [r for r in (self.scripts, self.styles) if r is not None]


def load_snapshot(path: str | Path) -> Snapshot:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    return parse_snapshot(raw, origin=str(path))


def parse_snapshot(raw: str | bytes, origin: str = "<snapshot>") -> Snapshot:
    try:
        model = SnapshotModel.model_validate_json(raw)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {origin}: {e}") from e
    return snapshot_from_model(model)


def snapshot_from_model(model: SnapshotModel) -> Snapshot:
    snapshot = Snapshot(
        scripts=_build_registry(model.scripts, "scripts", model.paths),
        styles=_build_registry(model.styles, "styles", model.paths),
        modules=_build_modules(model.modules),
    )
    logger.debug(
        "snapshot loaded: %s",
        ", ".join(f"{r.kind}={len(r)}" for r in snapshot.registries()) or "empty",
    )
    return snapshot


def _build_registry(model: RegistryModel | None, kind: str, paths: PathsModel) -> Registry | None:
    if model is None:
        return None

    recorder = RegistryRecorder(kind)
    for name, item in model.registered.items():
        label = item.registered_by
        if not label and item.registered_from:
            label = label_for_path(item.registered_from, paths.content_dir, paths.includes_dir)
        recorder.register(
            name,
            source=item.src or "",
            dependencies=item.deps,
            version=str(item.ver) if item.ver is not None else None,
            extra=item.extra,
            registered_by=label,
        )
    for name in model.queue:
        recorder.enqueue(name)
    return recorder.build()


def _build_modules(model: ModulesModel | None) -> ModuleRegistry | None:
    if model is None:
        return None
    return ModuleRegistry(
        registered={
            module_id: ModuleEntry(
                module_id=module_id,
                source=m.src or "",
                dependencies=list(m.dependencies),
            )
            for module_id, m in model.registered.items()
        },
        enqueued=list(model.enqueued),
    )
