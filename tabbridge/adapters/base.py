"""Base class and snapshot handles shared by every browser adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from loguru import logger

from tabbridge.adapters import accessibility
from tabbridge.adapters.osa import AutomationSession
from tabbridge.errors import ActivationFailed, RaiseUnsupported, TransportError
from tabbridge.models.schemas import BackendCapabilities


@dataclass(frozen=True)
class TabHandle:
    window_index: int
    tab_index: int
    title: str = ""
    url: str = ""
    space_index: Optional[int] = None


@dataclass(frozen=True)
class SpaceHandle:
    window_index: int
    space_index: int
    title: str = ""
    tabs: Tuple[TabHandle, ...] = ()

    def list_tabs(self) -> List[TabHandle]:
        return list(self.tabs)


@dataclass(frozen=True)
class WindowHandle:
    """A window as reported by one listing round-trip."""

    index: int
    title: str = ""
    tabs: Tuple[TabHandle, ...] = ()
    spaces: Tuple[SpaceHandle, ...] = ()

    def list_spaces(self) -> List[SpaceHandle]:
        return list(self.spaces)

    def list_tabs(self) -> List[TabHandle]:
        """Tabs in display order; for space-aware windows, space by space."""
        if self.spaces:
            return [tab for space in self.spaces for tab in space.tabs]
        return list(self.tabs)


def _tabs_from_payload(
    window_index: int, raw_tabs: Any, space_index: Optional[int] = None
) -> Tuple[TabHandle, ...]:
    tabs = []
    for tab_index, raw in enumerate(raw_tabs or []):
        raw = raw or {}
        tabs.append(
            TabHandle(
                window_index=window_index,
                tab_index=tab_index,
                title=str(raw.get("title") or ""),
                url=str(raw.get("url") or ""),
                space_index=space_index,
            )
        )
    return tuple(tabs)


def windows_from_payload(payload: Any) -> List[WindowHandle]:
    """
    Build handles from the JSON our listing scripts return:
    [{"title": ..., "tabs": [{"title", "url"}]}] or, for space-aware browsers,
    [{"title": ..., "spaces": [{"title", "tabs": [...]}]}].
    """
    windows = []
    for window_index, raw in enumerate(payload or []):
        raw = raw or {}
        if "spaces" in raw:
            spaces = tuple(
                SpaceHandle(
                    window_index=window_index,
                    space_index=space_index,
                    title=str((space or {}).get("title") or ""),
                    tabs=_tabs_from_payload(
                        window_index, (space or {}).get("tabs"), space_index
                    ),
                )
                for space_index, space in enumerate(raw.get("spaces") or [])
            )
            windows.append(
                WindowHandle(index=window_index, title=str(raw.get("title") or ""), spaces=spaces)
            )
        else:
            windows.append(
                WindowHandle(
                    index=window_index,
                    title=str(raw.get("title") or ""),
                    tabs=_tabs_from_payload(window_index, raw.get("tabs")),
                )
            )
    return windows


class BackendAdapter(ABC):
    """One implementation per browser family."""

    family = "base"
    CAPABILITIES = BackendCapabilities()

    def __init__(self, app_name: str, session: AutomationSession) -> None:
        self.app_name = app_name
        self.session = session

    def capabilities(self) -> BackendCapabilities:
        return self.CAPABILITIES

    def is_running(self) -> bool:
        return self.session.is_running(self.app_name)

    @abstractmethod
    def list_windows(self) -> List[WindowHandle]:
        """Return every window with its tabs, in the order the OS reports them."""

    def tab_title(self, tab: TabHandle) -> str:
        return tab.title

    def tab_url(self, tab: TabHandle) -> str:
        return tab.url

    @abstractmethod
    def _select(self, window: WindowHandle, tab: TabHandle) -> None:
        """Family-specific selection round-trip."""

    def select_tab(self, window: WindowHandle, tab: TabHandle) -> None:
        """Make `tab` the current tab of `window`. Raises ActivationFailed."""
        if tab.window_index != window.index or tab not in window.list_tabs():
            raise ActivationFailed(
                f"Tab {tab.tab_index} is out of range for window {window.index}"
            )
        try:
            self._select(window, tab)
        except TransportError as exc:
            raise ActivationFailed(f"Could not select tab {tab.tab_index}: {exc}") from exc

    def script_tab_index(self, tab_index: int) -> int:
        """Convert our zero-based index to what the browser's dictionary expects."""
        return tab_index + 1 if self.CAPABILITIES.tab_index_is_one_based else tab_index

    def raise_window(self, window: WindowHandle, expected_title: str = "") -> int:
        """Raise the OS-level companion of `window` through the accessibility layer."""
        if not self.CAPABILITIES.supports_accessibility_raise:
            raise RaiseUnsupported(f"{self.app_name} windows cannot be raised individually")
        return accessibility.raise_companion_window(
            self.session, self.app_name, window.index, expected_title
        )

    def activate(self) -> None:
        """Bring the application to the foreground (and launch it if needed)."""
        logger.debug("Activating {}", self.app_name)
        self.session.activate_application(self.app_name)

    def _run(self, script: str, **params: Any) -> Any:
        return self.session.run(script, app=self.app_name, **params)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} app={self.app_name!r}>"
