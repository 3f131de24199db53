"""
Goal: Accessibility-only adapter for browsers without a tab scripting dictionary
(Firefox, Zen). Tabs are rebuilt from System Events: each window's AXTabGroup holds
one button per tab. No URLs, ever.
"""

from __future__ import annotations

from typing import List

from loguru import logger

from tabbridge.adapters.base import BackendAdapter, TabHandle, WindowHandle, windows_from_payload
from tabbridge.models.schemas import BackendCapabilities

# A window without a tab strip (devtools, dialogs) contributes no tabs
LIST_WINDOWS = """
    var se = Application('System Events');
    var procs = se.processes.whose({ name: params.app })();
    if (procs.length === 0) {
      return [];
    }
    var proc = procs[0];
    var wins = proc.windows();
    var out = [];
    for (var w = 0; w < wins.length; w++) {
      var win = wins[w];
      var winTitle = '';
      try { winTitle = win.title() || ''; } catch (e) { winTitle = ''; }
      var tabBar = null;
      var groups = win.groups();
      for (var g = 0; g < groups.length; g++) {
        if (groups[g].role() === 'AXTabGroup') {
          tabBar = groups[g];
          break;
        }
      }
      var tabs = [];
      if (tabBar) {
        var buttons = tabBar.buttons();
        for (var t = 0; t < buttons.length; t++) {
          var title = '';
          try {
            title = buttons[t].attributes.byName('AXTitle').value() || '';
          } catch (e) {
            title = buttons[t].name() || '';
          }
          tabs.push({ title: title, url: '' });
        }
      }
      out.push({ title: winTitle, tabs: tabs });
    }
    return out;
"""

SELECT_TAB = """
    var se = Application('System Events');
    var win = se.processes.byName(params.app).windows[params.window];
    var groups = win.groups();
    for (var g = 0; g < groups.length; g++) {
      if (groups[g].role() === 'AXTabGroup') {
        var buttons = groups[g].buttons();
        if (params.tab < 0 || params.tab >= buttons.length) {
          throw new Error('Tab index out of range');
        }
        buttons[params.tab].actions['AXPress'].perform();
        return true;
      }
    }
    throw new Error('Window has no tab strip');
"""


class GeckoAdapter(BackendAdapter):
    family = "gecko"
    CAPABILITIES = BackendCapabilities(
        supports_spaces=False,
        supports_url_addressing=False,
        supports_accessibility_raise=True,
        tab_index_is_one_based=False,
        prefers_url_identifiers=False,
    )

    def list_windows(self) -> List[WindowHandle]:
        windows = windows_from_payload(self._run(LIST_WINDOWS))
        logger.debug(
            "{}: {} window(s) via accessibility, {} tab strip(s)",
            self.app_name,
            len(windows),
            sum(1 for w in windows if w.tabs),
        )
        return windows

    def tab_url(self, tab: TabHandle) -> str:
        return ""

    def _select(self, window: WindowHandle, tab: TabHandle) -> None:
        self._run(SELECT_TAB, window=window.index, tab=self.script_tab_index(tab.tab_index))
