"""
Goal: The real osascript transport, with subprocess.run swapped out.
"""
import json
import subprocess

import pytest

from tabbridge.adapters import osa
from tabbridge.adapters.osa import AutomationSession, _clean_stderr
from tabbridge.errors import TransportError


class _Recorder:
    def __init__(self, returncode=0, stdout="", stderr="", exc=None):
        self.result = subprocess.CompletedProcess([], returncode, stdout, stderr)
        self.exc = exc
        self.cmds = []

    def __call__(self, cmd, **kwargs):
        self.cmds.append(cmd)
        if self.exc:
            raise self.exc
        return self.result


@pytest.fixture
def fake_run(monkeypatch):
    def _install(**kwargs):
        recorder = _Recorder(**kwargs)
        monkeypatch.setattr(osa.subprocess, "run", recorder)
        return recorder

    return _install


def test_runs_jxa_with_json_params(fake_run):
    recorder = fake_run(stdout='[{"title": "a"}]\n')
    session = AutomationSession(osascript="/usr/bin/osascript")
    assert session.run("return [];", app="Safari", window=2) == [{"title": "a"}]
    cmd = recorder.cmds[0]
    assert cmd[:4] == ["/usr/bin/osascript", "-l", "JavaScript", "-e"]
    assert "return [];" in cmd[4]
    assert "function run(argv)" in cmd[4]
    assert json.loads(cmd[5]) == {"app": "Safari", "window": 2}
    assert session.round_trips == 1


def test_empty_output_is_none(fake_run):
    fake_run(stdout="  \n")
    assert AutomationSession().run("return;") is None


def test_failure_message_is_cleaned(fake_run):
    fake_run(returncode=1, stderr="0:120: execution error: Error: Error: Tab index out of range (-2700)\n")
    with pytest.raises(TransportError, match="^Tab index out of range$") as info:
        AutomationSession().run("throw new Error('x');")
    assert info.value.returncode == 1


def test_permission_denied_gets_a_hint(fake_run):
    fake_run(returncode=1, stderr="execution error: Not authorized to send Apple events to Safari. (-1743)")
    with pytest.raises(TransportError, match="Automation permission denied"):
        AutomationSession().run("return 1;", app="Safari")


def test_missing_binary(fake_run):
    fake_run(exc=FileNotFoundError("osascript"))
    with pytest.raises(TransportError, match="binary not found"):
        AutomationSession(osascript="osascript").run("return 1;")


def test_garbage_output(fake_run):
    fake_run(stdout="not json")
    with pytest.raises(TransportError):
        AutomationSession().run("return 1;")


def test_closed_session_refuses_work(fake_run):
    recorder = fake_run(stdout="true")
    with AutomationSession() as session:
        assert session.is_running("Safari") is True
    assert session.closed
    with pytest.raises(TransportError):
        session.activate_application("Safari")
    assert len(recorder.cmds) == 1


@pytest.mark.parametrize(
    "raw, cleaned",
    [
        ("", ""),
        ("execution error: Error: boom (-2700)", "boom"),
        ("plain message", "plain message"),
    ],
)
def test_clean_stderr(raw, cleaned):
    assert _clean_stderr(raw) == cleaned


def test_adapter_running_and_activate_use_the_session(fake_run):
    from tabbridge.adapters.webkit import WebKitAdapter

    recorder = fake_run(stdout="true")
    with AutomationSession() as session:
        adapter = WebKitAdapter("Safari", session)
        assert adapter.is_running() is True
        adapter.activate()
    assert [json.loads(cmd[5]) for cmd in recorder.cmds] == [{"app": "Safari"}, {"app": "Safari"}]
    assert ".running()" in recorder.cmds[0][4]
    assert session.round_trips == 2
