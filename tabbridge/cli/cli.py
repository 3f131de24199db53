r"""
Goal: Friendly, typed CLI the launcher calls directly.

- Export `app` (tests import this).
- Show "Tab Bridge CLI" in --help output (tests assert this).
- stdout carries exactly one JSON document per call; logs go to stderr / the log file.
- `focus` and `launch` exit 1 when the result status is "error" (JSON is still printed).
"""

from __future__ import annotations

import json
from typing import Any, Dict

import typer

from tabbridge.adapters.registry import known_browsers
from tabbridge.services import tabs_service
from tabbridge.services.logs import configure_logging

app = typer.Typer(
    help="Tab Bridge CLI",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _emit(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.callback(help="Tab Bridge CLI")
def _root_callback() -> None:  # noqa: D401 - short help callback
    """Root callback for the CLI."""
    configure_logging()


# -----------------------
# Tabs
# -----------------------
@app.command("list")
def list_cmd(browser: str = typer.Argument(..., help="Application name, e.g. 'Google Chrome'")) -> None:
    _emit(tabs_service.list_tabs(browser).to_wire())


@app.command("focus")
def focus_cmd(
    browser: str = typer.Argument(..., help="Application name, e.g. 'Safari'"),
    query: str = typer.Argument(..., help="Identifier from `list`, e.g. '0,2' or '0,https://...'"),
) -> None:
    result = tabs_service.focus_tab(browser, query)
    _emit(result.to_wire())
    if not result.ok:
        raise typer.Exit(1)


@app.command("launch")
def launch_cmd(browser: str = typer.Argument(..., help="Application name")) -> None:
    result = tabs_service.launch_app(browser)
    _emit(result.to_wire())
    if result.status != "success":
        raise typer.Exit(1)


@app.command("browsers")
def browsers_cmd() -> None:
    _emit({"browsers": [{"name": name, "family": family} for name, family in known_browsers()]})


# -----------------------
# Agent
# -----------------------
@app.command("serve")
def serve_cmd() -> None:
    """Run the local HTTP agent (needs TABBRIDGE_TOKEN)."""
    from tabbridge.cli.entry import run

    run()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
