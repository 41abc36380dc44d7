"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from script_report import __version__
from script_report.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="script-report", version=__version__)
    app.include_router(router)
    return app
