"""Keyboard navigation over the pinned/unpinned history list"""

from enum import Enum
from typing import Optional, List, Sequence
from loguru import logger

from ...core.clipboard.history import HistoryItem


class Direction(Enum):
    """Navigation direction"""
    UP = "up"
    DOWN = "down"


def _matches(item: HistoryItem, needle: str) -> bool:
    return not needle or needle in item.title.casefold()


def pinned_partition(items: Sequence[HistoryItem], filter_text: str = "") -> List[HistoryItem]:
    """Pinned items matching the filter, in store order"""
    needle = filter_text.casefold()
    return [i for i in items if i.pinned and _matches(i, needle)]


def unpinned_partition(items: Sequence[HistoryItem], filter_text: str = "") -> List[HistoryItem]:
    """Unpinned items matching the filter, in store order"""
    needle = filter_text.casefold()
    return [i for i in items if not i.pinned and _matches(i, needle)]


def compute_display_sequence(items: Sequence[HistoryItem], filter_text: str = "") -> List[HistoryItem]:
    """
    Build the list eligible for selection

    Args:
        items: Items in store order
        filter_text: Case-insensitive substring to match against titles

    Returns:
        Matching pinned items followed by matching unpinned items
    """
    return pinned_partition(items, filter_text) + unpinned_partition(items, filter_text)


class ListNavigator:
    """Tracks the selected history item and moves it up and down"""

    def __init__(self):
        self.filter_text: str = ""
        self._selection: Optional[str] = None
        self._scroll_target: Optional[str] = None

    @property
    def selection(self) -> Optional[str]:
        """Id of the selected item, or None"""
        return self._selection

    def display_sequence(self, items: Sequence[HistoryItem]) -> List[HistoryItem]:
        return compute_display_sequence(items, self.filter_text)

    def _move_to(self, item: HistoryItem) -> str:
        self._selection = item.id
        self._scroll_target = item.id
        return item.id

    def select_first(self, items: Sequence[HistoryItem]) -> Optional[str]:
        """
        Select the first visible item

        Returns:
            The selected id, or None if nothing is visible
        """
        sequence = self.display_sequence(items)
        if not sequence:
            self._selection = None
            return None
        return self._move_to(sequence[0])

    def navigate(self, direction: Direction, items: Sequence[HistoryItem]) -> Optional[str]:
        """
        Move the selection one row up or down without wrapping

        A selection that is no longer visible restarts from the last row
        (up) or the first row (down).

        Args:
            direction: Direction.UP or Direction.DOWN
            items: Items in store order

        Returns:
            The selection after the move
        """
        sequence = self.display_sequence(items)
        if not sequence:
            self._selection = None
            return None

        ids = [item.id for item in sequence]
        if self._selection in ids:
            index = ids.index(self._selection)
            if direction is Direction.UP and index > 0:
                return self._move_to(sequence[index - 1])
            if direction is Direction.DOWN and index < len(sequence) - 1:
                return self._move_to(sequence[index + 1])
            return self._selection

        if self._selection is not None:
            logger.debug("Selected item no longer visible, restarting from boundary")

        if direction is Direction.UP:
            return self._move_to(sequence[-1])
        return self._move_to(sequence[0])

    def select(self, item_id: Optional[str]) -> None:
        """Select an item directly (mouse click)"""
        self._selection = item_id

    def clear_selection(self) -> None:
        self._selection = None

    def clear_filter(self) -> None:
        """Reset the filter text; the selection is reconciled on next render"""
        self.filter_text = ""

    def ensure_selection(self, items: Sequence[HistoryItem]) -> Optional[str]:
        """Select the first visible item when nothing is selected"""
        if self._selection is None:
            sequence = self.display_sequence(items)
            if sequence:
                self._selection = sequence[0].id
        return self._selection

    def reconcile(self, items: Sequence[HistoryItem]) -> Optional[str]:
        """Drop the selection if its item is no longer visible"""
        if self._selection is None:
            return None
        if not any(item.id == self._selection for item in self.display_sequence(items)):
            self._selection = None
        return self._selection

    def take_scroll_target(self) -> Optional[str]:
        """Return the pending scroll target and clear it"""
        target, self._scroll_target = self._scroll_target, None
        return target
