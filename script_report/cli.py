"""Click CLI with report and serve subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from script_report import __version__
from script_report.models import ReportConfig
from script_report.pipeline import run_report


def _parse_url_map(values: tuple[str, ...]) -> dict[str, Path]:
    url_map: dict[str, Path] = {}
    for value in values:
        if "=" not in value:
            raise click.BadParameter(f"expected URL=DIR, got {value!r}", param_hint="--url-map")
        prefix, directory = value.split("=", 1)
        url_map[prefix.strip()] = Path(directory.strip())
    return url_map


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log analysis details to stderr")
def cli(verbose: bool):
    """script-report: audit script and style dependencies."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--view", type=click.Choice(["list", "tree"]), default="list", help="Report layout")
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), default=".",
              help="Site root used to resolve file sizes")
@click.option("--url-map", "url_map", multiple=True, metavar="URL=DIR",
              help="Map a URL prefix to a local directory (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Print report data as JSON")
@click.option("--no-modules", is_flag=True, help="Skip the script modules section")
def report(
    snapshot: Path,
    view: str,
    root: Path,
    url_map: tuple[str, ...],
    as_json: bool,
    no_modules: bool,
):
    """Report what a registry snapshot loads, in what order, and why."""
    config = ReportConfig(
        snapshot_path=snapshot,
        view=view,
        root=root,
        url_map=_parse_url_map(url_map),
        include_modules=not no_modules,
    )

    try:
        result = run_report(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for line in result.lines:
        if line.startswith("#"):
            click.echo(click.style(line, fg="cyan", bold=True))
        else:
            click.echo(line)


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the report web API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the web API. "
            "Install with: pip install 'script-report[web]'"
        )

    from script_report.web import create_app

    click.echo(f"Starting script-report API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
