"""
Goal: One small exception family for everything that can go wrong between a query
string and a focused tab. The service boundary turns these into error envelopes.
"""

from __future__ import annotations


class TabBridgeError(Exception):
    """Base class; `kind` is a stable label for logs and API consumers."""

    kind = "error"


class ProcessNotRunning(TabBridgeError):
    kind = "process_not_running"

    def __init__(self, app_name: str) -> None:
        super().__init__(f"{app_name} is not running")
        self.app_name = app_name


class MalformedIdentifier(TabBridgeError):
    kind = "malformed_identifier"


class WindowNotFound(TabBridgeError):
    kind = "window_not_found"

    def __init__(self, window_index: int) -> None:
        super().__init__(f"Window {window_index} not found")
        self.window_index = window_index


class TabNotFound(TabBridgeError):
    kind = "tab_not_found"


class SpaceNotFound(TabNotFound):
    kind = "space_not_found"

    def __init__(self, window_index: int, space_index: int) -> None:
        super().__init__(f"Space {space_index} not found in window {window_index}")
        self.window_index = window_index
        self.space_index = space_index


class RaiseUnsupported(TabBridgeError):
    """Non-fatal: the tab is selected, the window just could not be raised."""

    kind = "raise_unsupported"


class CompanionWindowNotFound(RaiseUnsupported):
    kind = "companion_window_not_found"


class ActivationFailed(TabBridgeError):
    kind = "activation_failed"


class TransportError(TabBridgeError):
    """The osascript round-trip itself failed."""

    kind = "transport_error"

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
