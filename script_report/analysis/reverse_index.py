"""Reverse-index builder — dependents map and duplicate-source groups."""

from __future__ import annotations

from script_report.models import Registry


def normalize_src(src: object) -> str:
    """Strip the query string from a source locator."""
    if not isinstance(src, str) or not src:
        return ""
    return src.split("?", 1)[0]


def build_dependents(registry: Registry) -> dict[str, set[str]]:
    """Map each handle to the registered handles that declare it as a dependency.

    Built over the whole registry; the queue plays no part.
    """
    if registry is None:
        raise TypeError("registry must not be None")

    dependents: dict[str, set[str]] = {}
    for name, item in registry.items.items():
        for dep in item.dependencies:
            dependents.setdefault(dep, set()).add(name)
    return dependents


def build_duplicate_groups(registry: Registry) -> dict[str, set[str]]:
    """Group handles whose sources are the same file once query strings are ignored."""
    if registry is None:
        raise TypeError("registry must not be None")

    by_src: dict[str, set[str]] = {}
    for name, item in registry.items.items():
        normalized = normalize_src(item.source)
        if not normalized:
            continue
        by_src.setdefault(normalized, set()).add(name)

    return {src: names for src, names in by_src.items() if len(names) > 1}
