"""Web API for script-report."""

from script_report.web.app import create_app

__all__ = ["create_app"]
