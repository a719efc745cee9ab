"""Clipboard monitoring service that feeds the history"""

import threading
import time
import hashlib
from typing import Optional, Callable, Set
from datetime import datetime
import pyperclip
from loguru import logger


class ClipboardMonitor:
    """Polls the system clipboard and reports changes"""

    def __init__(self, check_interval: int = 500):
        """
        Initialize clipboard monitor

        Args:
            check_interval: Check interval in milliseconds
        """
        self.check_interval = check_interval / 1000.0
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._last_hash: str = ""
        self._callbacks: Set[Callable] = set()
        self._lock = threading.RLock()

        logger.info(f"ClipboardMonitor initialized with {check_interval}ms interval")

    def add_callback(self, callback: Callable[[str, datetime], None]) -> None:
        """
        Add a callback for clipboard changes

        Args:
            callback: Function to call when clipboard changes (content, timestamp)
        """
        with self._lock:
            self._callbacks.add(callback)

    def remove_callback(self, callback: Callable) -> None:
        """Remove a clipboard change callback"""
        with self._lock:
            self._callbacks.discard(callback)

    def start(self) -> None:
        """Start polling the clipboard"""
        with self._lock:
            if self._running:
                logger.warning("Monitor already running")
                return

            # Seed with the current content so it is not reported as a copy
            self._last_hash = self._hash(self._paste() or "")
            self._running = True
            self._thread = threading.Thread(target=self._monitor_loop, daemon=True)
            self._thread.start()
            logger.info("Clipboard monitoring started")

    def stop(self) -> None:
        """Stop polling the clipboard"""
        with self._lock:
            if not self._running:
                return
            self._running = False

        if self._thread:
            self._thread.join(timeout=5.0)
            self._thread = None

        logger.info("Clipboard monitoring stopped")

    def _monitor_loop(self) -> None:
        while self._running:
            try:
                self.poll()
            except Exception as e:
                logger.error(f"Error in monitor loop: {e}")
            time.sleep(self.check_interval)

    def poll(self) -> bool:
        """
        Check the clipboard once

        Returns:
            True if a change was reported
        """
        content = self._paste()
        if not content:
            return False

        content_hash = self._hash(content)
        if content_hash == self._last_hash:
            return False

        self._last_hash = content_hash
        self._notify_callbacks(content, datetime.now())
        return True

    @staticmethod
    def _hash(content: str) -> str:
        return hashlib.sha256(content.encode("utf-8", "surrogatepass")).hexdigest()

    @staticmethod
    def _paste() -> Optional[str]:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.error(f"Failed to read clipboard: {e}")
            return None

    def _notify_callbacks(self, content: str, timestamp: datetime) -> None:
        with self._lock:
            callbacks = self._callbacks.copy()

        for callback in callbacks:
            try:
                callback(content, timestamp)
            except Exception as e:
                logger.error(f"Error in callback {getattr(callback, '__name__', callback)}: {e}")

    @property
    def is_running(self) -> bool:
        """Check if monitor is running"""
        return self._running
