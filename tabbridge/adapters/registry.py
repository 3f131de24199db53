"""
Goal: Map an application name (what the launcher passes) to the adapter that knows
how to talk to it. Unknown names are guessed from their spelling, then default to Chromium.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Type

from loguru import logger

from tabbridge.adapters.base import BackendAdapter
from tabbridge.adapters.chromium import ChromiumAdapter
from tabbridge.adapters.gecko import GeckoAdapter
from tabbridge.adapters.osa import AutomationSession
from tabbridge.adapters.spaces import SpacesAdapter
from tabbridge.adapters.webkit import WebKitAdapter

ADAPTERS: Dict[str, Type[BackendAdapter]] = {
    ChromiumAdapter.family: ChromiumAdapter,
    WebKitAdapter.family: WebKitAdapter,
    GeckoAdapter.family: GeckoAdapter,
    SpacesAdapter.family: SpacesAdapter,
}

KNOWN_BROWSERS: Dict[str, str] = {
    "Google Chrome": "chromium",
    "Google Chrome Beta": "chromium",
    "Google Chrome Canary": "chromium",
    "Chromium": "chromium",
    "Brave Browser": "chromium",
    "Brave Browser Beta": "chromium",
    "Microsoft Edge": "chromium",
    "Opera": "chromium",
    "Vivaldi": "chromium",
    "Sidekick": "chromium",
    "Arc": "spaces",
    "Safari": "webkit",
    "Safari Technology Preview": "webkit",
    "Firefox": "gecko",
    "Firefox Developer Edition": "gecko",
    "Firefox Nightly": "gecko",
    "Zen": "gecko",
}

# Checked in order against names we don't know verbatim
_NAME_HINTS: Tuple[Tuple[str, str], ...] = (
    ("Arc", "spaces"),
    ("Safari", "webkit"),
    ("Firefox", "gecko"),
    ("Zen", "gecko"),
)


def family_for(app_name: str) -> str:
    name = (app_name or "").strip()
    if name in KNOWN_BROWSERS:
        return KNOWN_BROWSERS[name]
    for hint, family in _NAME_HINTS:
        if hint in name:
            return family
    logger.info("Unknown browser {!r}; treating it as Chromium-based", name)
    return ChromiumAdapter.family


def adapter_for(app_name: str, session: AutomationSession) -> BackendAdapter:
    adapter_cls = ADAPTERS[family_for(app_name)]
    return adapter_cls(app_name.strip(), session)


def known_browsers() -> List[Tuple[str, str]]:
    return sorted(KNOWN_BROWSERS.items())
