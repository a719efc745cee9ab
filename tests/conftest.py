"""Shared fixtures for clipdeck tests."""

import os
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from clipdeck.core.clipboard.history import History, HistoryItem  # noqa: E402

BASE_TIME = datetime(2024, 5, 1, 9, 30)


def _populate(history, layout):
    """Fill a history so its store order matches ``layout``.

    ``layout`` is a list of (title, pinned) pairs, first entry on top.
    """
    items = {}
    for offset, (title, _) in enumerate(reversed(layout)):
        items[title] = history.add(title, BASE_TIME + timedelta(minutes=offset))
    for title, pinned in layout:
        if pinned:
            history.toggle_pin(items[title])
    return items


@pytest.fixture
def populate():
    """Helper that fills a history in a given store order."""
    return _populate


@pytest.fixture
def make_item():
    """Factory for detached history items."""

    def _make(title, pinned=False):
        return HistoryItem(title=title, last_copied_at=BASE_TIME, pinned=pinned)

    return _make


@pytest.fixture
def history():
    return History(max_size=50)


@pytest.fixture
def sample_history(history):
    """Store order A(pinned), B, D(pinned): display order A, D, B."""
    _populate(history, [("A", True), ("B", False), ("D", True)])
    return history


@pytest.fixture
def copied(monkeypatch):
    """Capture text written to the system clipboard."""
    calls = []
    monkeypatch.setattr("pyperclip.copy", calls.append)
    return calls
