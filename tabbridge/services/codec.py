"""
Goal: Encode/decode the opaque tab identifiers we hand to (and get back from) the launcher.

Formats
- "w,t" or "w,t,s"   index addressing (s = space, only for space-aware browsers)
- "[w,t]" / "[w,t,s]" the same, as the JSON array the list output carries in `arg`
- "w,<url prefix>"   URL addressing; everything after the first comma is the prefix
"""

from __future__ import annotations

import json
from typing import List

from tabbridge.errors import MalformedIdentifier
from tabbridge.models.schemas import (BackendCapabilities, ByIndex,
                                      ByWindowAndUrlPrefix, TabLocator,
                                      TabRecord)

URL_MARKER = "/"


def _parse_index(segment: str, what: str) -> int:
    text = segment.strip()
    if not text:
        raise MalformedIdentifier(f"Missing {what}")
    try:
        value = int(text)
    except ValueError as exc:
        raise MalformedIdentifier(f"{what.capitalize()} must be a number, got {text!r}") from exc
    if value < 0:
        raise MalformedIdentifier(f"{what.capitalize()} must not be negative")
    return value


def _index_locator(numbers: List[str], capabilities: BackendCapabilities) -> ByIndex:
    if len(numbers) < 2:
        raise MalformedIdentifier("Expected 'windowIndex,tabIndex'")
    if len(numbers) > 3:
        raise MalformedIdentifier("Too many segments in tab identifier")
    window_index = _parse_index(numbers[0], "window index")
    tab_index = _parse_index(numbers[1], "tab index")
    space_index = None
    if len(numbers) == 3:
        if not capabilities.supports_spaces:
            raise MalformedIdentifier("This browser has no spaces")
        space_index = _parse_index(numbers[2], "space index")
    elif capabilities.supports_spaces:
        space_index = 0
    return ByIndex(window_index=window_index, tab_index=tab_index, space_index=space_index)


def _decode_array(text: str, capabilities: BackendCapabilities) -> ByIndex:
    try:
        values = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedIdentifier(f"Unreadable tab identifier {text!r}") from exc
    if not isinstance(values, list) or not all(
        isinstance(v, int) and not isinstance(v, bool) for v in values
    ):
        raise MalformedIdentifier("Tab identifier array must hold integers only")
    return _index_locator([str(v) for v in values], capabilities)


def decode(query: str, capabilities: BackendCapabilities) -> TabLocator:
    text = (query or "").strip()
    if not text:
        raise MalformedIdentifier("Empty tab identifier")
    if text.startswith("["):
        return _decode_array(text, capabilities)

    head, sep, rest = text.partition(",")
    if not sep or not rest.strip():
        raise MalformedIdentifier("Expected 'windowIndex,tabIndex' or 'windowIndex,url'")
    if capabilities.supports_url_addressing and URL_MARKER in rest:
        return ByWindowAndUrlPrefix(
            window_index=_parse_index(head, "window index"), url_prefix=rest
        )
    return _index_locator([head] + rest.split(","), capabilities)


def locator_for(record: TabRecord, capabilities: BackendCapabilities) -> TabLocator:
    """The locator a freshly listed tab should be addressed by later."""
    if (
        capabilities.prefers_url_identifiers
        and capabilities.supports_url_addressing
        and URL_MARKER in record.url
    ):
        return ByWindowAndUrlPrefix(window_index=record.window_index, url_prefix=record.url)
    space_index = None
    if capabilities.supports_spaces:
        space_index = record.space_index or 0
    return ByIndex(
        window_index=record.window_index, tab_index=record.tab_index, space_index=space_index
    )


def encode_locator(locator: TabLocator) -> str:
    if isinstance(locator, ByWindowAndUrlPrefix):
        return f"{locator.window_index},{locator.url_prefix}"
    if locator.space_index is not None:
        return f"{locator.window_index},{locator.tab_index},{locator.space_index}"
    return f"{locator.window_index},{locator.tab_index}"


def encode(record: TabRecord, capabilities: BackendCapabilities) -> str:
    return encode_locator(locator_for(record, capabilities))


def to_arg(record: TabRecord, capabilities: BackendCapabilities) -> str:
    """The `arg` value of a list item: a JSON int array, or the URL form."""
    locator = locator_for(record, capabilities)
    if isinstance(locator, ByWindowAndUrlPrefix):
        return encode_locator(locator)
    values = [locator.window_index, locator.tab_index]
    if locator.space_index is not None:
        values.append(locator.space_index)
    return json.dumps(values, separators=(",", ":"))
