"""Clipboard history store with pinning and change notification"""

import hashlib
import threading
import uuid
from typing import List, Optional, Callable, Set, Union
from datetime import datetime
from dataclasses import dataclass, field
from loguru import logger


@dataclass
class HistoryItem:
    """Single clipboard history item"""
    title: str
    last_copied_at: datetime
    pinned: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    content_hash: str = ""

    def __post_init__(self):
        if not self.content_hash:
            self.content_hash = self.calculate_hash(self.title)

    @staticmethod
    def calculate_hash(content: str) -> str:
        """Calculate SHA-256 hash of content"""
        return hashlib.sha256(content.encode("utf-8", "surrogatepass")).hexdigest()


ItemRef = Union[HistoryItem, str]


class History:
    """Ordered clipboard history (newest first) with pinned items"""

    def __init__(self, max_size: int = 200):
        """
        Initialize history

        Args:
            max_size: Maximum number of items to keep
        """
        self.max_size = max_size
        self._items: List[HistoryItem] = []
        self._listeners: Set[Callable[[], None]] = set()
        self._lock = threading.RLock()

        logger.info(f"History initialized (max_size={max_size})")

    def add_listener(self, listener: Callable[[], None]) -> None:
        """
        Register a change listener

        Args:
            listener: Called with no arguments after every mutation
        """
        with self._lock:
            self._listeners.add(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        """Remove a change listener"""
        with self._lock:
            self._listeners.discard(listener)

    def _notify(self) -> None:
        with self._lock:
            listeners = self._listeners.copy()

        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"Error in history listener {getattr(listener, '__name__', listener)}: {e}")

    @property
    def all(self) -> List[HistoryItem]:
        """Snapshot of all items in store order"""
        return self.get_items()

    def get_items(self) -> List[HistoryItem]:
        with self._lock:
            return self._items.copy()

    def get(self, item_id: str) -> Optional[HistoryItem]:
        """Find an item by id"""
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    def add(self, text: str, timestamp: Optional[datetime] = None) -> Optional[HistoryItem]:
        """
        Add copied text to the top of the history

        Args:
            text: Copied text
            timestamp: Optional timestamp (defaults to now)

        Returns:
            The new or refreshed item, None for empty text
        """
        if not text:
            return None

        if timestamp is None:
            timestamp = datetime.now()

        content_hash = HistoryItem.calculate_hash(text)

        with self._lock:
            existing = next((i for i in self._items if i.content_hash == content_hash), None)
            if existing is not None:
                # Duplicate: move to top
                self._items.remove(existing)
                existing.last_copied_at = timestamp
                self._items.insert(0, existing)
                logger.debug(f"Refreshed duplicate item: {content_hash[:8]}")
                item = existing
            else:
                item = HistoryItem(title=text, last_copied_at=timestamp, content_hash=content_hash)
                self._items.insert(0, item)
                logger.info(f"Added new item: hash={content_hash[:8]}")
                self._enforce_max_size()

        self._notify()
        return item

    def _enforce_max_size(self) -> None:
        """Evict the oldest unpinned items beyond max_size"""
        while len(self._items) > self.max_size:
            for index in range(len(self._items) - 1, -1, -1):
                if not self._items[index].pinned:
                    removed = self._items.pop(index)
                    logger.debug(f"Removed oldest item: {removed.content_hash[:8]}")
                    break
            else:
                # Only pinned items left
                return

    def _find_index(self, ref: ItemRef) -> int:
        item_id = ref.id if isinstance(ref, HistoryItem) else ref
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return -1

    def delete(self, ref: ItemRef) -> bool:
        """
        Delete an item

        Args:
            ref: Item or item id

        Returns:
            True if the item was present
        """
        with self._lock:
            index = self._find_index(ref)
            if index < 0:
                logger.debug("Delete ignored: item not found")
                return False
            removed = self._items.pop(index)

        logger.info(f"Deleted item: {removed.content_hash[:8]}")
        self._notify()
        return True

    def toggle_pin(self, ref: ItemRef) -> bool:
        """
        Flip the pinned flag of an item

        Returns:
            True if the item was present
        """
        with self._lock:
            index = self._find_index(ref)
            if index < 0:
                logger.debug("Toggle pin ignored: item not found")
                return False
            item = self._items[index]
            item.pinned = not item.pinned

        logger.info(f"{'Pinned' if item.pinned else 'Unpinned'} item: {item.content_hash[:8]}")
        self._notify()
        return True

    def clear(self) -> int:
        """
        Remove all unpinned items

        Returns:
            Number of items removed
        """
        with self._lock:
            original_count = len(self._items)
            self._items = [i for i in self._items if i.pinned]
            removed_count = original_count - len(self._items)

        logger.info(f"Cleared {removed_count} unpinned items")
        self._notify()
        return removed_count

    def clear_all(self) -> int:
        """Remove every item, pinned included"""
        with self._lock:
            removed_count = len(self._items)
            self._items.clear()

        logger.info(f"Cleared all {removed_count} items")
        self._notify()
        return removed_count

    @property
    def size(self) -> int:
        """Get current number of items"""
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.size
