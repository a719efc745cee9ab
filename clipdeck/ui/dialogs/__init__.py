"""Dialogs"""

from .clear_history_dialog import ClearHistoryDialog, ClearChoice

__all__ = ['ClearHistoryDialog', 'ClearChoice']
