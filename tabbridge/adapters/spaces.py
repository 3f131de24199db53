"""
Goal: Adapter for space-aware browsers (Arc). Windows hold spaces, spaces hold tabs,
so a tab is addressed by (window, space, tab). Focusing a space comes before selecting.
"""

from __future__ import annotations

from typing import List

from tabbridge.adapters.base import BackendAdapter, TabHandle, WindowHandle, windows_from_payload
from tabbridge.models.schemas import BackendCapabilities

LIST_WINDOWS = """
    var app = Application(params.app);
    var out = [];
    for (var w = 0; w < app.windows.length; w++) {
      var win = app.windows[w];
      var spaces = [];
      for (var s = 0; s < win.spaces.length; s++) {
        var space = win.spaces[s];
        var tabs = [];
        for (var t = 0; t < space.tabs.length; t++) {
          var tab = space.tabs[t];
          tabs.push({ title: tab.title() || '', url: tab.url() || '' });
        }
        var spaceTitle = '';
        try { spaceTitle = space.title() || ''; } catch (e) { spaceTitle = ''; }
        spaces.push({ title: spaceTitle, tabs: tabs });
      }
      var name = '';
      try { name = win.name() || ''; } catch (e) { name = ''; }
      out.push({ title: name, spaces: spaces });
    }
    return out;
"""

SELECT_TAB = """
    var space = Application(params.app).windows[params.window].spaces[params.space];
    space.focus();
    space.tabs[params.tab].select();
    return true;
"""


class SpacesAdapter(BackendAdapter):
    family = "spaces"
    CAPABILITIES = BackendCapabilities(
        supports_spaces=True,
        supports_url_addressing=True,
        supports_accessibility_raise=False,
        tab_index_is_one_based=False,
        prefers_url_identifiers=False,
    )

    def list_windows(self) -> List[WindowHandle]:
        return windows_from_payload(self._run(LIST_WINDOWS))

    def _select(self, window: WindowHandle, tab: TabHandle) -> None:
        self._run(
            SELECT_TAB,
            window=window.index,
            space=tab.space_index or 0,
            tab=self.script_tab_index(tab.tab_index),
        )
