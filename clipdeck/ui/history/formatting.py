"""Display text for history rows"""

from datetime import datetime

from ...core.clipboard.history import HistoryItem

PIN_MARKER = "📌"
TITLE_MAX_LENGTH = 80

PINNED_CAPTION = "Pinned"
UNPINNED_CAPTION = "Unpinned"
EMPTY_STATE_TEXT = "No items found"


def format_date(timestamp: datetime) -> str:
    """Short date and short time"""
    return timestamp.strftime("%Y-%m-%d %H:%M")


def single_line(title: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """Collapse a title to one line, truncating long text"""
    line = " ".join(title.split())
    if len(line) > max_length:
        line = line[:max_length] + "..."
    return line


def format_row(index: int, item: HistoryItem) -> str:
    """
    Build the text of one list row

    Args:
        index: Position of the row within its section
        item: History item

    Returns:
        "<index>  <title>  [pin]  <date>"
    """
    parts = [f"{index:>3}", single_line(item.title)]
    if item.pinned:
        parts.append(PIN_MARKER)
    parts.append(format_date(item.last_copied_at))
    return "  ".join(parts)
