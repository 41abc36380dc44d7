"""Report pipeline: load snapshot -> analyze each registry -> render."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from script_report.analysis.report import ReportAssembler, ReportData, report_to_dict
from script_report.analysis.sizes import FileSizeResolver, SizeCache
from script_report.loader import Snapshot, load_snapshot
from script_report.models import ReportConfig
from script_report.render import render_modules, render_section

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class ReportResult:
    """Output of one report generation."""
    snapshot: Snapshot
    sections: dict[str, ReportData] = field(default_factory=dict)
    lines: list[str] = field(default_factory=list)
    generated: str = field(default_factory=lambda: datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def to_dict(self) -> dict:
        out: dict = {"generated": self.generated}
        for kind, data in self.sections.items():
            out[kind] = report_to_dict(data)
        modules = self.snapshot.modules
        if modules is not None:
            out["modules"] = {
                "registered": sorted(modules.registered),
                "enqueued": list(modules.enqueued),
            }
        return out


def run_report(config: ReportConfig, progress: ProgressCallback | None = None) -> ReportResult:
    """Load the configured snapshot and build its report."""
    if config.snapshot_path is None:
        raise ValueError("No snapshot given")

    if progress:
        progress("Loading", 0, 1)
    snapshot = load_snapshot(config.snapshot_path)
    if progress:
        progress("Loading", 1, 1)

    return build_report(snapshot, config, progress=progress)


def build_report(
    snapshot: Snapshot,
    config: ReportConfig,
    progress: ProgressCallback | None = None,
) -> ReportResult:
    # The size cache lives for this one report, shared by scripts, styles and modules
    resolver = FileSizeResolver(config.root, config.url_map) if config.resolve_sizes else None
    sizes = SizeCache(resolver)
    assembler = ReportAssembler(sizes)
    result = ReportResult(snapshot=snapshot)

    result.lines.extend(["# Script & Style Report", "", f"Generated {result.generated}", ""])

    registries = snapshot.registries()
    for i, registry in enumerate(registries):
        if progress:
            progress("Analyzing", i, len(registries))
        data = assembler.analyze(registry)
        result.sections[registry.kind] = data
        result.lines.extend(render_section(registry, data, sizes, view=config.view))
        result.lines.append("")

    if progress:
        progress("Analyzing", len(registries), len(registries))

    if config.include_modules and snapshot.modules is not None:
        result.lines.extend(render_modules(snapshot.modules, sizes))

    logger.debug("size cache resolved %d source(s)", len(sizes))
    sizes.clear()
    return result
