"""Tree view: each queued handle with its dependencies nested beneath it."""

from __future__ import annotations

import logging

from script_report.analysis.sizes import format_bytes
from script_report.models import Registry

logger = logging.getLogger(__name__)

MAX_INDENT_DEPTH = 5
MAX_TREE_DEPTH = 64
MAX_TREE_NODES = 2000


class _TreeState:
    """Node budget shared by every branch of one render."""

    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        self.remaining = max_nodes
        self.truncated = False


def render_tree(registry: Registry, max_nodes: int = MAX_TREE_NODES) -> list[str]:
    title = "Scripts" if registry.kind == "scripts" else "Styles"
    lines = [f"### {title} loaded on this page", ""]
    if not registry.queue:
        lines.append(f"No {registry.kind} loaded.")
        return lines

    state = _TreeState(max_nodes)
    for name in registry.queue:
        if state.truncated:
            break
        _render_node(name, registry, 0, (), lines, state)
    return lines


def _render_node(
    name: str,
    registry: Registry,
    depth: int,
    path: tuple[str, ...],
    lines: list[str],
    state: _TreeState,
) -> None:
    if state.truncated:
        return

    indent = "  " * min(depth, MAX_INDENT_DEPTH)

    if state.remaining <= 0:
        # Budget spans every branch and queued root of this render
        logger.warning("%s tree truncated after %d nodes", registry.kind, state.max_nodes)
        lines.append(f"{indent}- {name} [TRUNCATED]")
        state.truncated = True
        return
    state.remaining -= 1

    if name in path:
        lines.append(f"{indent}- {name} [CIRCULAR]")
        return

    item = registry.lookup(name)
    if item is None:
        lines.append(f"{indent}- {name} [MISSING]")
        return

    if depth >= MAX_TREE_DEPTH:
        logger.warning("tree for %s truncated at depth %d", path[0] if path else name, depth)
        lines.append(f"{indent}- {name} [TRUNCATED]")
        return

    badges = []
    if registry.is_enqueued(name):
        badges.append("[ENQUEUED]")
    if registry.kind == "scripts":
        if item.in_footer:
            badges.append("[FOOTER]")
        if item.inline_data:
            badges.append(f"[INLINE {format_bytes(item.inline_size)}]")
    lines.append(" ".join([f"{indent}- {name}", *badges]))

    if item.source:
        version = f" (v{item.version})" if item.version else ""
        lines.append(f"{indent}    -> {item.source}{version}")
    if name in registry.sources:
        lines.append(f"{indent}    Added by: {registry.sources[name]}")

    for dep in item.dependencies:
        _render_node(dep, registry, depth + 1, path + (name,), lines, state)
