"""Clipboard history store and monitoring"""

from .monitor import ClipboardMonitor
from .history import History, HistoryItem

__all__ = ['ClipboardMonitor', 'History', 'HistoryItem']
