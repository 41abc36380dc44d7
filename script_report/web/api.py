"""Report API — analyze a posted snapshot and return data plus rendered text."""

from __future__ import annotations

import asyncio
from typing import Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from script_report import __version__
from script_report.loader import SnapshotModel, snapshot_from_model
from script_report.models import ReportConfig
from script_report.pipeline import ReportResult, build_report

router = APIRouter(prefix="/api")


class ReportRequest(BaseModel):
    snapshot: SnapshotModel
    view: Literal["list", "tree"] = "list"
    include_modules: bool = True


def _build(req: ReportRequest) -> ReportResult:
    # Sizes are not resolved for posted snapshots: no local root is trusted
    config = ReportConfig(view=req.view, include_modules=req.include_modules, resolve_sizes=False)
    return build_report(snapshot_from_model(req.snapshot), config)


@router.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@router.post("/report")
async def report(req: ReportRequest):
    try:
        result = await asyncio.to_thread(_build, req)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {**result.to_dict(), "text": result.text}
