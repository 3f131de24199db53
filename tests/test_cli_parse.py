"""
Goal: CLI parses, prints one JSON document on stdout, and signals focus errors via exit code.
"""
import json

import pytest
from conftest import fake_session, window
from typer.testing import CliRunner

from tabbridge.adapters import webkit
from tabbridge.cli import cli


@pytest.fixture(autouse=True)
def _no_log_setup(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


def test_cli_help():
    r = CliRunner().invoke(cli.app, ["--help"])
    assert r.exit_code == 0
    assert "Tab Bridge CLI" in r.stdout


def test_list_prints_items(use_session):
    use_session(fake_session(webkit, [window(("", "https://example.com/a"))]))
    r = CliRunner().invoke(cli.app, ["list", "Safari"])
    assert r.exit_code == 0
    items = json.loads(r.stdout)["items"]
    assert items[0]["title"] == "example.com/a"
    assert items[0]["arg"] == "0,https://example.com/a"


def test_focus_success_and_error(use_session):
    use_session(fake_session(webkit, [window(("a", "https://example.com/a"))]))
    ok = CliRunner().invoke(cli.app, ["focus", "Safari", "0,https://example.com/"])
    assert ok.exit_code == 0
    assert json.loads(ok.stdout)["status"] == "success"

    use_session(fake_session(webkit, [window(("a", "https://example.com/a"))]))
    bad = CliRunner().invoke(cli.app, ["focus", "Safari", "3,0"])
    assert bad.exit_code == 1
    assert json.loads(bad.stdout) == {"status": "error", "message": "Window 3 not found"}


def test_browsers_lists_families():
    r = CliRunner().invoke(cli.app, ["browsers"])
    assert r.exit_code == 0
    browsers = json.loads(r.stdout)["browsers"]
    assert {"name": "Safari", "family": "webkit"} in browsers
