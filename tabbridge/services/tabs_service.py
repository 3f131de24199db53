r"""
Goal
- The two operations the launcher calls, plus launch, each as one self-contained call:
  list_tabs(browser) -> ListResponse
  focus_tab(browser, query) -> ActivationResult
  launch_app(browser) -> LaunchResult
- Async-friendly wrappers (anyio.to_thread) so the FastAPI agent can await safely.

Notes
- Every call opens its own AutomationSession and closes it on the way out.
- Nothing raises out of here: failures come back as error envelopes / error items.
"""

from __future__ import annotations

from urllib.parse import unquote

from anyio import to_thread
from loguru import logger

from tabbridge.adapters.base import BackendAdapter
from tabbridge.adapters.osa import AutomationSession
from tabbridge.adapters.registry import adapter_for
from tabbridge.errors import ProcessNotRunning, TabBridgeError
from tabbridge.models.schemas import (ActivationResult, LaunchResult, ListItem,
                                      ListResponse, TabRecord)
from tabbridge.services import activation, codec, resolver
from tabbridge.services.enumerator import enumerate_tabs, strip_scheme


def _match_text(record: TabRecord) -> str:
    """Extra words the launcher can fuzzy-match on: title plus a de-punctuated URL."""
    url_words = "".join(
        ch if ch.isalnum() or ch == "_" else " " for ch in unquote(strip_scheme(record.url))
    )
    return f"{record.title} {url_words}".strip()


def _item(record: TabRecord, adapter: BackendAdapter) -> ListItem:
    caps = adapter.capabilities()
    return ListItem(
        title=record.title,
        subtitle=record.url or record.title,
        url=record.url,
        window_index=record.window_index,
        tab_index=record.tab_index,
        space_index=record.space_index,
        arg=codec.to_arg(record, caps),
        match=_match_text(record),
        quicklookurl=record.url or None,
    )


def not_running_item(app_name: str) -> ListItem:
    return ListItem(
        title=f"{app_name} is not running",
        subtitle=f"Press enter to launch {app_name}",
        arg=app_name,
    )


def list_tabs(browser: str) -> ListResponse:
    """Enumerate every tab of `browser`, ready to serialize for the launcher."""
    with AutomationSession() as session:
        adapter = adapter_for(browser, session)
        try:
            if not adapter.is_running():
                logger.info("{} is not running", adapter.app_name)
                return ListResponse(items=[not_running_item(adapter.app_name)])
            records = enumerate_tabs(adapter)
        except TabBridgeError as exc:
            logger.warning("Listing {} tabs failed: {}", adapter.app_name, exc)
            return ListResponse(
                items=[
                    ListItem(
                        title=f"Could not list {adapter.app_name} tabs",
                        subtitle=str(exc),
                        valid=False,
                    )
                ]
            )
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error listing {} tabs", adapter.app_name)
            return ListResponse(
                items=[
                    ListItem(
                        title=f"Could not list {adapter.app_name} tabs",
                        subtitle="Unexpected error, see the log for details",
                        valid=False,
                    )
                ]
            )
        return ListResponse(items=[_item(record, adapter) for record in records])


def focus_tab(browser: str, query: str) -> ActivationResult:
    """Decode `query`, find the tab it names right now, and bring it to the front."""
    with AutomationSession() as session:
        adapter = adapter_for(browser, session)
        try:
            locator = codec.decode(query, adapter.capabilities())
            if not adapter.is_running():
                raise ProcessNotRunning(adapter.app_name)
            window, tab = resolver.resolve(adapter, locator)
        except TabBridgeError as exc:
            logger.info("Cannot focus {!r} in {}: {}", query, adapter.app_name, exc)
            return activation.error_result(str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error resolving {!r} in {}", query, adapter.app_name)
            return activation.error_result(f"Unexpected error: {exc}")

        logger.debug("{!r} resolved to window {} tab {}", query, window.index, tab.tab_index)
        try:
            return activation.activate(adapter, window, tab)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error focusing {!r} in {}", query, adapter.app_name)
            return activation.error_result(f"Unexpected error: {exc}")


def launch_app(browser: str) -> LaunchResult:
    """Activate (and so launch) the browser; target of the 'not running' item."""
    with AutomationSession() as session:
        adapter = adapter_for(browser, session)
        try:
            adapter.activate()
        except TabBridgeError as exc:
            logger.warning("Launching {} failed: {}", adapter.app_name, exc)
            return LaunchResult(status="error", message=str(exc))
        return LaunchResult(status="success", browser=adapter.app_name)


async def alist_tabs(browser: str) -> ListResponse:
    return await to_thread.run_sync(list_tabs, browser)


async def afocus_tab(browser: str, query: str) -> ActivationResult:
    return await to_thread.run_sync(focus_tab, browser, query)


async def alaunch_app(browser: str) -> LaunchResult:
    return await to_thread.run_sync(launch_app, browser)
