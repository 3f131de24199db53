"""
Goal: Turn a TabLocator back into a live (window, tab) pair, re-reading the browser
every time because tabs may have moved since they were listed.
- ByIndex: straight index lookup, bounds-checked.
- ByWindowAndUrlPrefix: first tab in that window whose URL starts with the prefix.
  No index shortcut: the caller picked URL addressing precisely because indexes drift.
"""

from __future__ import annotations

from typing import List, Tuple

from tabbridge.adapters.base import BackendAdapter, TabHandle, WindowHandle
from tabbridge.errors import SpaceNotFound, TabNotFound, WindowNotFound
from tabbridge.models.schemas import ByIndex, ByWindowAndUrlPrefix, TabLocator

URL_NOT_FOUND = "Tab with matching URL not found"


def _window(windows: List[WindowHandle], window_index: int) -> WindowHandle:
    if window_index >= len(windows):
        raise WindowNotFound(window_index)
    return windows[window_index]


def _by_index(adapter: BackendAdapter, locator: ByIndex) -> Tuple[WindowHandle, TabHandle]:
    window = _window(adapter.list_windows(), locator.window_index)
    if adapter.capabilities().supports_spaces:
        space_index = locator.space_index or 0
        spaces = window.list_spaces()
        if space_index >= len(spaces):
            raise SpaceNotFound(window.index, space_index)
        tabs = spaces[space_index].list_tabs()
    else:
        tabs = window.list_tabs()
    if locator.tab_index >= len(tabs):
        raise TabNotFound(f"Tab {locator.tab_index} not found in window {window.index}")
    return window, tabs[locator.tab_index]


def _by_url_prefix(
    adapter: BackendAdapter, locator: ByWindowAndUrlPrefix
) -> Tuple[WindowHandle, TabHandle]:
    window = _window(adapter.list_windows(), locator.window_index)
    for tab in window.list_tabs():
        # Tabs without a URL are matched on their name, as the browser shows it
        candidate = adapter.tab_url(tab) or adapter.tab_title(tab)
        if candidate and candidate.startswith(locator.url_prefix):
            return window, tab
    raise TabNotFound(URL_NOT_FOUND)


def resolve(adapter: BackendAdapter, locator: TabLocator) -> Tuple[WindowHandle, TabHandle]:
    if isinstance(locator, ByWindowAndUrlPrefix):
        return _by_url_prefix(adapter, locator)
    return _by_index(adapter, locator)
