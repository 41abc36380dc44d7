"""Tests for the click CLI."""

import json

from click.testing import CliRunner

from script_report import __version__
from script_report.cli import cli


def _invoke(*args):
    return CliRunner().invoke(cli, list(args))


def test_version():
    result = _invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_report_list(snapshot_path, site_root):
    result = _invoke("report", str(snapshot_path), "--root", str(site_root))
    assert result.exit_code == 0, result.output
    assert "# Script & Style Report" in result.output
    assert "- Size: 210 B" in result.output
    assert "Loaded because of: theme-main" in result.output


def test_report_tree(snapshot_path, site_root):
    result = _invoke("report", str(snapshot_path), "--root", str(site_root), "--view", "tree")
    assert result.exit_code == 0, result.output
    assert "missing-lib [MISSING]" in result.output


def test_report_json(snapshot_path, site_root):
    result = _invoke("report", str(snapshot_path), "--root", str(site_root), "--json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["scripts"]["print_order"][0] == "jquery-core"
    assert data["styles"]["total_size"] == 45


def test_report_url_map(snapshot_path, site_root):
    result = _invoke(
        "report", str(snapshot_path), "--json",
        "--root", "/nonexistent",
        "--url-map", f"https://example.com={site_root}",
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["scripts"]["total_size"] == 10


def test_report_bad_url_map(snapshot_path):
    result = _invoke("report", str(snapshot_path), "--url-map", "no-equals-sign")
    assert result.exit_code == 2
    assert "URL=DIR" in result.output


def test_report_invalid_snapshot(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    result = _invoke("report", str(bad))
    assert result.exit_code == 1
    assert "Invalid snapshot" in result.output


def test_report_missing_file():
    result = _invoke("report", "/nonexistent/snapshot.json")
    assert result.exit_code == 2
