"""
Goal: Bring one resolved tab to the front.
1) select the tab inside its window (index base conversion is the adapter's business)
2) raise the OS window through accessibility, when the adapter can; a miss is not fatal
3) activate the application, always, last
"""

from __future__ import annotations

from loguru import logger

from tabbridge.adapters.base import BackendAdapter, TabHandle, WindowHandle
from tabbridge.errors import RaiseUnsupported, TabBridgeError
from tabbridge.models.schemas import ActivationResult


def error_result(message: str) -> ActivationResult:
    return ActivationResult(status="error", message=message)


def _raise(adapter: BackendAdapter, window: WindowHandle, tab: TabHandle) -> None:
    expected = adapter.tab_title(tab) or window.title
    try:
        adapter.raise_window(window, expected)
    except RaiseUnsupported as exc:
        logger.info("Not raising {} window {}: {}", adapter.app_name, window.index, exc)
    except TabBridgeError as exc:
        # Tab is already selected; a failed raise only costs us window order
        logger.warning("Raising {} window {} failed: {}", adapter.app_name, window.index, exc)


def activate(adapter: BackendAdapter, window: WindowHandle, tab: TabHandle) -> ActivationResult:
    try:
        adapter.select_tab(window, tab)
    except TabBridgeError as exc:
        logger.warning("Selecting tab failed in {}: {}", adapter.app_name, exc)
        return error_result(str(exc))

    if adapter.capabilities().supports_accessibility_raise:
        _raise(adapter, window, tab)

    try:
        adapter.activate()
    except TabBridgeError as exc:
        logger.warning("Activating {} failed: {}", adapter.app_name, exc)
        return error_result(str(exc))

    return ActivationResult(
        status="success",
        browser=adapter.app_name,
        window_index=window.index,
        tab_index=tab.tab_index,
        space_index=tab.space_index,
    )
