"""
Goal: Minimal osascript (JXA) transport that every browser adapter talks through.
- One AutomationSession per list/focus/launch call; close it when the call is done.
- Scripts are plain JXA bodies that read `params` and `return` something JSON-able.
- Failures come back as TransportError with osascript's noise trimmed off.
"""

from __future__ import annotations

import json  # params in, results out
import re  # stderr cleanup
import subprocess  # the actual inter-process call
from typing import Any

from loguru import logger

from tabbridge import settings
from tabbridge.errors import TransportError

# Every script body runs inside this wrapper so it can `return` a value
_JXA_WRAPPER = """
function run(argv) {
  var params = JSON.parse(argv[0]);
  var result = (function (params) {
__BODY__
  })(params);
  return JSON.stringify(result === undefined ? null : result);
}
"""

# isRunning(name)
APP_RUNNING = """
    return Application(params.app).running();
"""

# activateApplication(name); launches the app when it is not running yet
APP_ACTIVATE = """
    Application(params.app).activate();
    return true;
"""

_ERROR_PREFIX = re.compile(r"^.*?execution error:\s*", re.DOTALL)
_ERROR_CODE = re.compile(r"\s*\((-?\d+)\)\s*$")
_JS_ERROR = re.compile(r"^(Error:\s*)+")
_AUTOMATION_DENIED = "-1743"


def _clean_stderr(stderr: str) -> str:
    """Turn `execution error: Error: Error: boom (-2700)` into `boom`."""
    text = (stderr or "").strip()
    if not text:
        return ""
    text = _ERROR_PREFIX.sub("", text)
    text = _ERROR_CODE.sub("", text)
    return _JS_ERROR.sub("", text).strip()


def _automation_denied(stderr: str) -> bool:
    lowered = (stderr or "").lower()
    return _AUTOMATION_DENIED in lowered or "not authorized to send apple events" in lowered


class AutomationSession:
    """Explicit context for one operation's worth of Apple Event round-trips."""

    def __init__(self, osascript: str | None = None) -> None:
        self.osascript = osascript or settings.OSASCRIPT
        self.round_trips = 0
        self._closed = False

    def __enter__(self) -> "AutomationSession":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            logger.debug("Automation session closed after {} round-trip(s)", self.round_trips)
        self._closed = True

    def run(self, script: str, **params: Any) -> Any:
        """Run one JXA body with `params` and return its decoded result."""
        if self._closed:
            raise TransportError("automation session is closed")

        source = _JXA_WRAPPER.replace("__BODY__", script)
        cmd = [self.osascript, "-l", "JavaScript", "-e", source, json.dumps(params)]
        self.round_trips += 1
        try:
            out = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise TransportError(f"'{self.osascript}' binary not found") from exc

        if out.returncode != 0:
            stderr = (out.stderr or "").strip()
            if _automation_denied(stderr):
                logger.warning("Automation permission denied for {}", params.get("app"))
                raise TransportError(
                    "Automation permission denied. Allow it in System Settings → "
                    "Privacy & Security → Automation.",
                    out.returncode,
                )
            message = _clean_stderr(stderr) or f"osascript exited with {out.returncode}"
            logger.debug("osascript failed (exit={}): {}", out.returncode, message)
            raise TransportError(message, out.returncode)

        stdout = (out.stdout or "").strip()
        if not stdout:
            return None
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise TransportError("osascript returned something that is not JSON") from exc

    def is_running(self, app_name: str) -> bool:
        return bool(self.run(APP_RUNNING, app=app_name))

    def activate_application(self, app_name: str) -> None:
        self.run(APP_ACTIVATE, app=app_name)
