"""Closure resolver — needed set, print order and cycle detection from the queue."""

from __future__ import annotations

import logging
from typing import Iterable

from script_report.models import Registry

logger = logging.getLogger(__name__)


def compute_needed(queue: Iterable[str], registry: Registry) -> set[str]:
    """Queue plus every transitive dependency.

    Dangling names are members of the result but expand to nothing.
    """
    if registry is None:
        raise TypeError("registry must not be None")

    needed: set[str] = set()
    for root in queue:
        if root in needed:
            continue
        needed.add(root)
        stack = [root]
        while stack:
            current = stack.pop()
            # Reversed so declared order is the order of descent
            for dep in reversed(registry.dependencies_of(current)):
                if dep not in needed:
                    needed.add(dep)
                    stack.append(dep)

    logger.debug("%s: %d needed handle(s)", registry.kind, len(needed))
    return needed


def compute_print_order(queue: Iterable[str], registry: Registry) -> list[str]:
    """Post-order DFS: each handle follows all of its dependencies.

    A handle is marked visited before its dependencies are descended, which
    is what stops cycles: a cyclic member is emitted once, at the point its
    first visit completes.
    """
    if registry is None:
        raise TypeError("registry must not be None")

    ordered: list[str] = []
    visited: set[str] = set()

    for root in queue:
        if root in visited:
            continue
        visited.add(root)
        stack = [(root, iter(registry.dependencies_of(root)))]
        while stack:
            name, deps = stack[-1]
            for dep in deps:
                if dep not in visited:
                    visited.add(dep)
                    stack.append((dep, iter(registry.dependencies_of(dep))))
                    break
            else:
                stack.pop()
                ordered.append(name)

    return ordered


def find_cycles(queue: Iterable[str], registry: Registry) -> list[list[str]]:
    """Cycles reachable from the queue, each as a closed path ``[a, ..., a]``.

    One cycle is reported per back edge found by the traversal, so a handle
    can appear in more than one cycle.
    """
    if registry is None:
        raise TypeError("registry must not be None")

    cycles: list[list[str]] = []
    done: set[str] = set()

    for root in queue:
        if root in done:
            continue
        path: list[str] = [root]
        on_path: set[str] = {root}
        stack = [iter(registry.dependencies_of(root))]
        while stack:
            for dep in stack[-1]:
                if dep in on_path:
                    idx = path.index(dep)
                    cycles.append(path[idx:] + [dep])
                elif dep not in done:
                    path.append(dep)
                    on_path.add(dep)
                    stack.append(iter(registry.dependencies_of(dep)))
                    break
            else:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)

    if cycles:
        logger.debug("%s: %d dependency cycle(s)", registry.kind, len(cycles))
    return cycles
