"""Text rendering of report data — stats, list/tree views and modules."""

from __future__ import annotations

from script_report.analysis.report import ReportData
from script_report.analysis.sizes import SizeCache, format_bytes
from script_report.models import ModuleRegistry, Registry
from script_report.render.list_view import render_list
from script_report.render.tree_view import render_tree

_TITLES = {"scripts": "JavaScript", "styles": "CSS"}


def render_stats(data: ReportData) -> list[str]:
    label = data.kind.capitalize()
    lines = [
        f"- Registered: {data.registered_count} (registered on this site)",
        f"- Enqueued: {data.enqueued_count} (requested by theme or plugins)",
        f"- {label} loaded: {len(data.needed)} (actually loaded, with dependencies)",
    ]
    if data.total_size > 0:
        lines.append(f"- Size: {format_bytes(data.total_size)}")
    if data.cycles:
        lines.append(f"- Dependency cycles: {len(data.cycles)}")
    if data.missing:
        lines.append(f"- Missing: {', '.join(data.missing)}")
    return lines


def render_section(
    registry: Registry,
    data: ReportData,
    sizes: SizeCache,
    view: str = "list",
) -> list[str]:
    lines = [f"## {_TITLES.get(data.kind, data.kind.capitalize())}", ""]
    lines.extend(render_stats(data))
    lines.append("")
    if view == "tree":
        lines.extend(render_tree(registry))
    else:
        lines.extend(render_list(registry, data, sizes))
    return lines


def render_modules(modules: ModuleRegistry, sizes: SizeCache) -> list[str]:
    lines = [
        "## Modules",
        "",
        f"- Registered: {len(modules.registered)} (modules on this site)",
        f"- Enqueued: {len(modules.enqueued)} (loaded on this page)",
        "",
    ]
    if not modules.registered:
        lines.append("No modules registered.")
        return lines

    for module_id, entry in modules.registered.items():
        badges = []
        if entry.source:
            size = sizes.size_of(entry.source)
            if size is not None:
                badges.append(f"({format_bytes(size)})")
        if module_id in modules.enqueued:
            badges.append("[ENQUEUED]")
        badges.append("[MODULE]")
        lines.append(f"- {module_id} {' '.join(badges)}")
        if entry.dependencies:
            lines.append(f"    Depends on: {', '.join(entry.dependencies)}")
    return lines


__all__ = ["render_list", "render_modules", "render_section", "render_stats", "render_tree"]
