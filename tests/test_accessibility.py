import pytest
from conftest import FakeSession

from tabbridge.adapters import accessibility
from tabbridge.errors import CompanionWindowNotFound, TransportError


@pytest.mark.parametrize(
    "titles, index, prefix, expected",
    [
        (["Docs - Google Chrome", "Mail - Google Chrome"], 1, "Mail", 1),
        # index points at the wrong window: fall back to the ordered scan
        (["Mail - Google Chrome", "Docs - Google Chrome"], 1, "Mail", 0),
        (["Docs", "Docs (2)"], 5, "Docs", 0),
        (["Docs", "Mail"], 0, "News", None),
        (["Docs", "Mail"], 1, "", 1),
        ([], 0, "", None),
    ],
)
def test_find_companion_window(titles, index, prefix, expected):
    assert accessibility.find_companion_window(titles, index, prefix) == expected


def test_raise_performs_on_the_companion():
    session = FakeSession(ax_titles=["Mail - Brave", "Docs - Brave"])
    found = accessibility.raise_companion_window(session, "Brave Browser", 0, "Docs")
    assert found == 1
    assert session.calls_to(accessibility.RAISE_WINDOW) == [{"app": "Brave Browser", "index": 1}]


def test_no_companion_is_reported_not_raised():
    session = FakeSession(ax_titles=["Mail"])
    with pytest.raises(CompanionWindowNotFound):
        accessibility.raise_companion_window(session, "Google Chrome", 0, "Docs")
    assert session.calls_to(accessibility.RAISE_WINDOW) == []


def test_unreadable_windows_count_as_no_companion():
    def boom(params):
        raise TransportError("System Events got an error: access not allowed")

    session = FakeSession({accessibility.WINDOW_TITLES: boom})
    with pytest.raises(CompanionWindowNotFound, match="access not allowed"):
        accessibility.raise_companion_window(session, "Google Chrome", 0, "Docs")
