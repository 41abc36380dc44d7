"""Report assembler — composes closure, reverse index and sizes for one registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from script_report.analysis.closure import compute_needed, compute_print_order, find_cycles
from script_report.analysis.reverse_index import build_dependents, build_duplicate_groups
from script_report.analysis.sizes import SizeCache
from script_report.models import Registry

logger = logging.getLogger(__name__)


@dataclass
class ReportData:
    kind: str
    needed: set[str] = field(default_factory=set)
    print_order: list[str] = field(default_factory=list)
    total_size: int = 0
    dependents: dict[str, set[str]] = field(default_factory=dict)
    duplicate_groups: dict[str, set[str]] = field(default_factory=dict)
    cycles: list[list[str]] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)  # needed but not registered
    registered_count: int = 0
    enqueued_count: int = 0


class ReportAssembler:
    """Build report data for scripts or styles registries.

    One assembler serves one report generation; its size cache is shared by
    every registry analyzed through it.
    """

    def __init__(self, sizes: SizeCache | None = None):
        self.sizes = sizes if sizes is not None else SizeCache()

    def analyze(self, registry: Registry) -> ReportData:
        if registry is None:
            raise TypeError("registry must not be None")

        reg = registry.snapshot()
        needed = compute_needed(reg.queue, reg)

        data = ReportData(
            kind=reg.kind,
            needed=needed,
            print_order=compute_print_order(reg.queue, reg),
            total_size=self.total_size(reg, needed),
            dependents=build_dependents(reg),
            duplicate_groups=build_duplicate_groups(reg),
            cycles=find_cycles(reg.queue, reg),
            missing=sorted(n for n in needed if n not in reg),
            registered_count=len(reg),
            enqueued_count=len(reg.queue),
        )

        logger.info(
            "%s: registered=%d enqueued=%d loaded=%d size=%d",
            data.kind, data.registered_count, data.enqueued_count,
            len(data.needed), data.total_size,
        )
        return data

    def total_size(self, registry: Registry, names: set[str]) -> int:
        total = 0
        for name in names:
            item = registry.lookup(name)
            if item is None or not item.source:
                continue
            size = self.sizes.size_of(item.source)
            if size is not None:
                total += size
        return total


def report_to_dict(data: ReportData) -> dict:
    """JSON-ready form of the report: sets become sorted lists."""
    return {
        "kind": data.kind,
        "registered": data.registered_count,
        "enqueued": data.enqueued_count,
        "needed": sorted(data.needed),
        "print_order": list(data.print_order),
        "total_size": data.total_size,
        "dependents": {k: sorted(v) for k, v in sorted(data.dependents.items())},
        "duplicate_src": {k: sorted(v) for k, v in sorted(data.duplicate_groups.items())},
        "cycles": [list(c) for c in data.cycles],
        "missing": list(data.missing),
    }
