"""
Goal: Chromium-family adapter (Chrome, Brave, Edge, Vivaldi, ...).
- Windows hold tabs directly; titles and URLs come from the scripting dictionary.
- `active tab index` is one-based in the dictionary.
- Setting the active tab does not always bring the OS window forward, so this family
  also raises the matching accessibility window.
"""

from __future__ import annotations

from typing import List

from tabbridge.adapters.base import BackendAdapter, TabHandle, WindowHandle, windows_from_payload
from tabbridge.models.schemas import BackendCapabilities

LIST_WINDOWS = """
    var app = Application(params.app);
    var windows = app.windows;
    var out = [];
    for (var w = 0; w < windows.length; w++) {
      var win = windows[w];
      var titles = win.tabs.name();
      var urls = win.tabs.url();
      var tabs = [];
      for (var t = 0; t < titles.length; t++) {
        tabs.push({ title: titles[t] || '', url: urls[t] || '' });
      }
      var active = '';
      try {
        active = win.activeTab.title() || '';
      } catch (e) {
        active = '';
      }
      out.push({ title: active, tabs: tabs });
    }
    return out;
"""

SELECT_TAB = """
    var win = Application(params.app).windows[params.window];
    if (params.tab < 1 || params.tab > win.tabs.length) {
      throw new Error('Tab index out of range');
    }
    win.activeTabIndex = params.tab;
    return true;
"""


class ChromiumAdapter(BackendAdapter):
    family = "chromium"
    CAPABILITIES = BackendCapabilities(
        supports_spaces=False,
        supports_url_addressing=True,
        supports_accessibility_raise=True,
        tab_index_is_one_based=True,
        prefers_url_identifiers=False,
    )

    def list_windows(self) -> List[WindowHandle]:
        return windows_from_payload(self._run(LIST_WINDOWS))

    def _select(self, window: WindowHandle, tab: TabHandle) -> None:
        self._run(SELECT_TAB, window=window.index, tab=self.script_tab_index(tab.tab_index))
