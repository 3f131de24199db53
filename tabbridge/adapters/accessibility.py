"""
Goal: Small System Events helpers: read a process's window titles and raise one of them.
Used by adapters whose scripting-level "activate" does not bring the right OS window forward.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from loguru import logger

from tabbridge.adapters.osa import AutomationSession
from tabbridge.errors import CompanionWindowNotFound, TransportError

WINDOW_TITLES = """
    var se = Application('System Events');
    var procs = se.processes.whose({ name: params.app })();
    if (procs.length === 0) {
      return [];
    }
    var wins = procs[0].windows();
    var titles = [];
    for (var i = 0; i < wins.length; i++) {
      var title = '';
      try {
        title = wins[i].title() || '';
      } catch (e) {
        title = '';
      }
      titles.push(title);
    }
    return titles;
"""

RAISE_WINDOW = """
    var se = Application('System Events');
    var proc = se.processes.byName(params.app);
    proc.windows[params.index].actions['AXRaise'].perform();
    return true;
"""


def window_titles(session: AutomationSession, app_name: str) -> List[str]:
    titles = session.run(WINDOW_TITLES, app=app_name) or []
    return [str(t or "") for t in titles]


def find_companion_window(
    titles: Sequence[str], index: int, expected_prefix: str
) -> Optional[int]:
    """
    Pick the accessibility window that belongs to scripting window `index`.
    Same position first; if that title doesn't fit, first title in order that does.
    """
    if 0 <= index < len(titles) and titles[index].startswith(expected_prefix):
        return index
    for i, title in enumerate(titles):
        if title.startswith(expected_prefix):
            return i
    return None


def raise_companion_window(
    session: AutomationSession, app_name: str, index: int, expected_prefix: str
) -> int:
    """Raise the companion window and return its accessibility index."""
    try:
        titles = window_titles(session, app_name)
    except TransportError as exc:
        raise CompanionWindowNotFound(f"Could not read {app_name} windows: {exc}") from exc

    found = find_companion_window(titles, index, expected_prefix)
    if found is None:
        raise CompanionWindowNotFound(
            f"No {app_name} window title starts with {expected_prefix!r}"
        )
    logger.debug("Raising {} window {} (scripting index {})", app_name, found, index)
    session.run(RAISE_WINDOW, app=app_name, index=found)
    return found
