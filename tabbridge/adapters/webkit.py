"""
Goal: WebKit-family adapter (Safari).
- Tab titles can be missing; the enumerator falls back to the URL for those.
- Users reorder Safari tabs a lot, so identifiers for this family carry the URL.
- There is no per-window accessibility raise here; hiding and re-showing the
  window is what puts it in front.
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
      var tabs = [];
      var winTabs = win.tabs || [];
      for (var t = 0; t < winTabs.length; t++) {
        var title = '';
        var url = '';
        try { title = winTabs[t].name() || ''; } catch (e) { title = ''; }
        try { url = winTabs[t].url() || ''; } catch (e) { url = ''; }
        tabs.push({ title: title, url: url });
      }
      var name = '';
      try { name = win.name() || ''; } catch (e) { name = ''; }
      out.push({ title: name, tabs: tabs });
    }
    return out;
"""

SELECT_TAB = """
    var win = Application(params.app).windows[params.window];
    win.currentTab = win.tabs[params.tab];
    win.visible = false;
    win.visible = true;
    return true;
"""


class WebKitAdapter(BackendAdapter):
    family = "webkit"
    CAPABILITIES = BackendCapabilities(
        supports_spaces=False,
        supports_url_addressing=True,
        supports_accessibility_raise=False,
        tab_index_is_one_based=False,
        prefers_url_identifiers=True,
    )

    def list_windows(self) -> List[WindowHandle]:
        return windows_from_payload(self._run(LIST_WINDOWS))

    def _select(self, window: WindowHandle, tab: TabHandle) -> None:
        self._run(SELECT_TAB, window=window.index, tab=self.script_tab_index(tab.tab_index))
