"""
Goal: Walk every window (and space) of an adapter and produce plain TabRecords,
in OS order. Read-only: nothing here changes the browser.
"""

from __future__ import annotations

import re
from typing import List

from loguru import logger

from tabbridge.adapters.base import BackendAdapter, TabHandle
from tabbridge.models.schemas import TabRecord

_SCHEME = re.compile(r"^(\w+:)?//")


def strip_scheme(url: str) -> str:
    """'https://example.com/a' -> 'example.com/a'"""
    return _SCHEME.sub("", url or "")


def canonical_title(title: str, url: str) -> str:
    """Native title when there is one, otherwise the URL without its scheme."""
    return title or strip_scheme(url)


def _record(adapter: BackendAdapter, tab: TabHandle) -> TabRecord:
    url = adapter.tab_url(tab) or ""
    return TabRecord(
        title=canonical_title(adapter.tab_title(tab), url),
        url=url,
        window_index=tab.window_index,
        tab_index=tab.tab_index,
        space_index=tab.space_index,
    )


def enumerate_tabs(adapter: BackendAdapter) -> List[TabRecord]:
    records: List[TabRecord] = []
    spaces_aware = adapter.capabilities().supports_spaces
    windows = adapter.list_windows()
    for window in windows:
        if spaces_aware:
            for space in window.list_spaces():
                records.extend(_record(adapter, tab) for tab in space.list_tabs())
        else:
            records.extend(_record(adapter, tab) for tab in window.list_tabs())
    logger.debug("{}: {} tab(s) in {} window(s)", adapter.app_name, len(records), len(windows))
    return records
