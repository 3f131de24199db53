"""
Goal: In-memory stand-ins for osascript so adapters, services, CLI and agent can be
tested anywhere. A FakeSession answers each known JXA script with a Python callable.
"""
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from loguru import logger

from tabbridge.adapters import accessibility, osa
from tabbridge.errors import TransportError

Handler = Callable[[Dict[str, Any]], Any]


class FakeSession:
    def __init__(
        self,
        handlers: Optional[Dict[str, Handler]] = None,
        running: bool = True,
        ax_titles: Optional[List[str]] = None,
    ) -> None:
        self.running = running
        self.ax_titles = list(ax_titles or [])
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.closed = False
        self.handlers: Dict[str, Handler] = {
            osa.APP_RUNNING: lambda p: self.running,
            osa.APP_ACTIVATE: lambda p: True,
            accessibility.WINDOW_TITLES: lambda p: list(self.ax_titles),
            accessibility.RAISE_WINDOW: lambda p: True,
        }
        self.handlers.update(handlers or {})

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def run(self, script: str, **params: Any) -> Any:
        if self.closed:
            raise TransportError("automation session is closed")
        self.calls.append((script, params))
        handler = self.handlers.get(script)
        if handler is None:
            raise AssertionError(f"unexpected script:\n{script}")
        return handler(params)

    def is_running(self, app_name: str) -> bool:
        return bool(self.run(osa.APP_RUNNING, app=app_name))

    def activate_application(self, app_name: str) -> None:
        self.run(osa.APP_ACTIVATE, app=app_name)

    def calls_to(self, script: str) -> List[Dict[str, Any]]:
        return [params for s, params in self.calls if s == script]

    def script_order(self) -> List[str]:
        return [s for s, _ in self.calls]


def tabs(*pairs: Tuple[str, str]) -> List[Dict[str, str]]:
    return [{"title": title, "url": url} for title, url in pairs]


def window(*pairs: Tuple[str, str], title: Optional[str] = None) -> Dict[str, Any]:
    rows = tabs(*pairs)
    if title is None:
        title = rows[0]["title"] if rows else ""
    return {"title": title, "tabs": rows}


def spaced_window(*space_tabs: List[Dict[str, str]], title: str = "") -> Dict[str, Any]:
    return {
        "title": title,
        "spaces": [{"title": f"Space {i}", "tabs": rows} for i, rows in enumerate(space_tabs)],
    }


def fake_session(module: ModuleType, payload: List[Dict[str, Any]], **kwargs: Any) -> FakeSession:
    """Session that lists `payload` and accepts selections for one adapter module."""
    return FakeSession(
        {module.LIST_WINDOWS: lambda p: payload, module.SELECT_TAB: lambda p: True},
        **kwargs,
    )


@pytest.fixture(autouse=True, scope="session")
def _quiet_logs():
    logger.remove()
    yield


@pytest.fixture
def chrome_windows() -> List[Dict[str, Any]]:
    return [
        window(("Inbox", "https://mail.example.com/inbox")),
        window(
            ("Docs", "https://docs.example.com/a"),
            ("News", "https://news.example.com/"),
            ("Example", "https://example.com/page"),
        ),
    ]


@pytest.fixture
def use_session(monkeypatch):
    """Route the service layer's AutomationSession to a given fake."""
    from tabbridge.services import tabs_service

    def _use(session: FakeSession) -> FakeSession:
        monkeypatch.setattr(tabs_service, "AutomationSession", lambda: session)
        return session

    return _use

