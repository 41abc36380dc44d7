"""Provenance resolver — which queued handles caused a handle to load."""

from __future__ import annotations

from typing import Collection, Mapping


def find_enqueued_ancestors(
    name: str,
    queue: Collection[str],
    dependents: Mapping[str, Collection[str]],
) -> set[str]:
    """Walk the dependents index upward from ``name`` to queued handles.

    A queued handle is its own root cause and is not walked past. An empty
    result means the provenance is unknown.
    """
    queued = set(queue)
    if name in queued:
        return {name}

    ancestors: set[str] = set()
    visited: set[str] = set()
    stack = [name]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        if current in queued:
            ancestors.add(current)
            continue
        for parent in dependents.get(current, ()):
            if parent not in visited:
                stack.append(parent)

    return ancestors
