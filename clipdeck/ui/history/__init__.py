"""History manager interface"""

from .history_manager import HistoryManagerWindow
from .navigator import ListNavigator, Direction, compute_display_sequence

__all__ = ['HistoryManagerWindow', 'ListNavigator', 'Direction', 'compute_display_sequence']
