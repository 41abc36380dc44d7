"""Dependency-graph analysis over a registry snapshot."""

from __future__ import annotations

from script_report.analysis.closure import compute_needed, compute_print_order, find_cycles
from script_report.analysis.provenance import find_enqueued_ancestors
from script_report.analysis.report import ReportAssembler, ReportData, report_to_dict
from script_report.analysis.reverse_index import (
    build_dependents,
    build_duplicate_groups,
    normalize_src,
)

__all__ = [
    "ReportAssembler",
    "ReportData",
    "build_dependents",
    "build_duplicate_groups",
    "compute_needed",
    "compute_print_order",
    "find_cycles",
    "find_enqueued_ancestors",
    "normalize_src",
    "report_to_dict",
]
