"""List view: every loaded handle with badges and the reasons it loaded."""

from __future__ import annotations

from script_report.analysis.provenance import find_enqueued_ancestors
from script_report.analysis.report import ReportData
from script_report.analysis.reverse_index import normalize_src
from script_report.analysis.sizes import SizeCache, format_bytes
from script_report.models import Item, Registry


def render_list(registry: Registry, data: ReportData, sizes: SizeCache) -> list[str]:
    lines: list[str] = []
    order_map = {name: i + 1 for i, name in enumerate(data.print_order)}
    is_script = data.kind == "scripts"

    for name in sorted(data.needed):
        item = registry.lookup(name)
        if item is None:
            continue

        lines.append(f"- {_main_line(item, registry, data, sizes, order_map.get(name), is_script)}")
        for label, value in _meta_lines(item, registry, data):
            lines.append(f"    {label}: {value}")

    if not lines:
        lines.append(f"No {data.kind} loaded.")
    return lines


def _main_line(
    item: Item,
    registry: Registry,
    data: ReportData,
    sizes: SizeCache,
    position: int | None,
    is_script: bool,
) -> str:
    parts = [item.name]
    if position is not None:
        parts.append(f"#{position}")
    size = sizes.size_of(item.source)
    if size is not None:
        parts.append(f"({format_bytes(size)})")
    if registry.is_enqueued(item.name):
        parts.append("[ENQUEUED]")
    if is_script and item.in_footer:
        parts.append("[FOOTER]")
    if is_script and item.inline_data:
        parts.append(f"[INLINE {format_bytes(item.inline_size)}]")
    if normalize_src(item.source) in data.duplicate_groups:
        parts.append("[DUPLICATE SRC]")
    return " ".join(parts)


def _meta_lines(item: Item, registry: Registry, data: ReportData) -> list[tuple[str, str]]:
    meta: list[tuple[str, str]] = []
    name = item.name

    if name in registry.sources:
        meta.append(("Added by", registry.sources[name]))

    group = data.duplicate_groups.get(normalize_src(item.source))
    if group:
        others = sorted(group - {name})
        if others:
            meta.append(("Same file as", ", ".join(others)))

    if not registry.is_enqueued(name):
        ancestors = find_enqueued_ancestors(name, registry.queue, data.dependents)
        meta.append(("Loaded because of", ", ".join(sorted(ancestors)) if ancestors else "unknown"))

    used_by = sorted(data.dependents.get(name, set()) & data.needed)
    if used_by:
        meta.append(("Used by", ", ".join(used_by)))

    return meta
