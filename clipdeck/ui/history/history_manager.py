"""History manager window with Windows 11 Fluent Design using PyQt6-Fluent-Widgets"""

import pyperclip
from typing import Optional, Dict, List
from PyQt6.QtWidgets import (
    QMainWindow, QVBoxLayout, QHBoxLayout, QWidget, QListWidgetItem,
    QFrame, QAbstractItemView
)
from PyQt6.QtCore import Qt, QSize, QEvent, pyqtSignal
from PyQt6.QtGui import QKeySequence, QShortcut

from qfluentwidgets import (
    ListWidget, PushButton, SearchLineEdit, CardWidget, BodyLabel,
    TitleLabel, CaptionLabel, TransparentToolButton, InfoBar,
    InfoBarPosition, Theme, setTheme, setThemeColor, FluentIcon as FIF,
    FluentStyleSheet, RoundMenu, Action
)
from loguru import logger

from ...core.clipboard.history import History, HistoryItem
from ..dialogs.clear_history_dialog import ClearHistoryDialog, ClearChoice
from .formatting import format_row, PINNED_CAPTION, UNPINNED_CAPTION, EMPTY_STATE_TEXT
from .navigator import ListNavigator, Direction, pinned_partition, unpinned_partition

THEMES = {
    "light": Theme.LIGHT,
    "dark": Theme.DARK,
    "auto": Theme.AUTO,
}


class HistoryManagerWindow(QMainWindow):
    """Resizable window for browsing, searching and pruning the clipboard history"""

    # Emitted from any thread when the store changes; delivered on the GUI thread
    history_changed = pyqtSignal()

    def __init__(self, history: History, dispatcher=None, config_manager=None):
        """
        Initialize history manager

        Args:
            history: History store to display
            dispatcher: TaskDispatcher for store mutations (None runs them inline)
            config_manager: ConfigManager for window and theme settings
        """
        super().__init__()
        self.history = history
        self.dispatcher = dispatcher
        self.config_manager = config_manager
        self.navigator = ListNavigator()
        self._row_items: Dict[str, QListWidgetItem] = {}
        self._syncing = False

        self.setWindowTitle("History Manager")
        self.resize(self._setting('ui.window_width', 600), self._setting('ui.window_height', 500))
        self.setMinimumSize(self._setting('ui.min_width', 500), self._setting('ui.min_height', 300))

        self._setup_theme()
        self._init_ui()

        self.history_changed.connect(self._render)
        self.history.add_listener(self._on_history_changed)

        self.navigator.ensure_selection(self.history.all)
        self._render()

    def _setting(self, key: str, default):
        if self.config_manager is None:
            return default
        return self.config_manager.get(key, default)

    def _setup_theme(self):
        """Setup Fluent Design theme"""
        theme_name = str(self._setting('ui.theme', 'auto')).lower()
        setTheme(THEMES.get(theme_name, Theme.AUTO))
        setThemeColor("#0078D4")
        FluentStyleSheet.FLUENT_WINDOW.apply(self)

    def _init_ui(self):
        """Initialize UI with Fluent Design"""
        central_widget = QWidget()
        central_widget.setObjectName("centralWidget")
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout(central_widget)
        main_layout.setSpacing(12)
        main_layout.setContentsMargins(16, 16, 16, 16)

        # Title bar
        title_card = CardWidget()
        title_layout = QHBoxLayout(title_card)
        title_layout.setContentsMargins(16, 8, 8, 8)
        title_layout.addWidget(TitleLabel("History Manager"))
        title_layout.addStretch()

        self.title_close_btn = TransparentToolButton(FIF.CLOSE, self)
        self.title_close_btn.setToolTip("Close")
        self.title_close_btn.clicked.connect(self.close)
        title_layout.addWidget(self.title_close_btn)

        main_layout.addWidget(title_card)

        # Search bar
        self.search_input = SearchLineEdit()
        self.search_input.setPlaceholderText("Search history...")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.setFixedHeight(36)
        self.search_input.textChanged.connect(self._on_search)
        self.search_input.installEventFilter(self)
        main_layout.addWidget(self.search_input)

        # History content
        list_card = CardWidget()
        list_layout = QVBoxLayout(list_card)
        list_layout.setContentsMargins(0, 0, 0, 0)
        list_layout.setSpacing(0)

        list_header = QHBoxLayout()
        list_header.setContentsMargins(16, 8, 16, 0)
        list_header.addStretch()
        self.count_label = CaptionLabel("0 items")
        list_header.addWidget(self.count_label)
        list_layout.addLayout(list_header)

        self.history_list = ListWidget()
        self.history_list.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.history_list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.history_list.customContextMenuRequested.connect(self._show_context_menu)
        self.history_list.currentItemChanged.connect(self._on_current_item_changed)
        self.history_list.itemDoubleClicked.connect(self._on_item_double_clicked)
        self.history_list.installEventFilter(self)
        list_layout.addWidget(self.history_list, 1)

        self.empty_label = BodyLabel(EMPTY_STATE_TEXT)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setMinimumHeight(200)
        self.empty_label.setHidden(True)
        list_layout.addWidget(self.empty_label)

        main_layout.addWidget(list_card, 1)

        # Action buttons
        button_layout = QHBoxLayout()
        self.close_button = PushButton("Close")
        self.close_button.clicked.connect(self.close)
        button_layout.addWidget(self.close_button)
        button_layout.addStretch()

        self.delete_button = PushButton("Delete Item", self, FIF.DELETE)
        self.delete_button.clicked.connect(self.delete_selected_item)
        button_layout.addWidget(self.delete_button)

        self.clear_button = PushButton("Clear History", self, FIF.BROOM)
        self.clear_button.setToolTip("Clear History (Ctrl+K)")
        self.clear_button.clicked.connect(self._clear_history)
        button_layout.addWidget(self.clear_button)

        main_layout.addLayout(button_layout)

        self.clear_shortcut = QShortcut(QKeySequence("Ctrl+K"), self)
        self.clear_shortcut.activated.connect(self._clear_history)

    def _on_history_changed(self):
        """Store listener; may run on a worker thread"""
        self.history_changed.emit()

    # Rendering

    def _render(self):
        """Rebuild the list from the store, the filter text and the selection"""
        items = self.history.all
        self.navigator.reconcile(items)

        filter_text = self.navigator.filter_text
        pinned = pinned_partition(items, filter_text)
        unpinned = unpinned_partition(items, filter_text)

        self._syncing = True
        try:
            self.history_list.clear()
            self._row_items = {}

            if pinned:
                self._add_caption(PINNED_CAPTION)
                self._add_rows(pinned)

            if pinned and unpinned:
                self._add_separator()

            if unpinned:
                if pinned:
                    self._add_caption(UNPINNED_CAPTION)
                self._add_rows(unpinned)
        finally:
            self._syncing = False

        visible_count = len(pinned) + len(unpinned)
        self.empty_label.setHidden(visible_count > 0)
        if filter_text:
            self.count_label.setText(f"{visible_count} of {len(items)} items")
        else:
            self.count_label.setText(f"{len(items)} items")

        self._sync_current_row()

    def _add_caption(self, text: str):
        item = QListWidgetItem(text)
        item.setFlags(Qt.ItemFlag.NoItemFlags)
        item.setSizeHint(QSize(0, 28))
        self.history_list.addItem(item)

    def _add_separator(self):
        item = QListWidgetItem()
        item.setFlags(Qt.ItemFlag.NoItemFlags)
        item.setSizeHint(QSize(0, 12))
        self.history_list.addItem(item)

        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        self.history_list.setItemWidget(item, line)

    def _add_rows(self, items):
        for index, history_item in enumerate(items):
            row = QListWidgetItem(format_row(index, history_item))
            row.setData(Qt.ItemDataRole.UserRole, history_item.id)
            row.setToolTip(history_item.title[:500])
            row.setSizeHint(QSize(0, 36))
            self.history_list.addItem(row)
            self._row_items[history_item.id] = row

    def _sync_current_row(self):
        """Mirror the navigator selection into the list and honour the scroll target"""
        selected = self.navigator.selection
        row = self._row_items.get(selected) if selected else None

        self._syncing = True
        try:
            if row is None:
                self.history_list.clearSelection()
                self.history_list.setCurrentRow(-1)
            else:
                self.history_list.setCurrentItem(row)
        finally:
            self._syncing = False

        target = self.navigator.take_scroll_target()
        if target in self._row_items:
            self.history_list.scrollToItem(
                self._row_items[target], QAbstractItemView.ScrollHint.PositionAtCenter
            )

        self.delete_button.setEnabled(self.navigator.selection is not None)

    # Navigation

    def select_first(self) -> Optional[str]:
        """Select the first visible item (search field Return)"""
        selected = self.navigator.select_first(self.history.all)
        self._sync_current_row()
        return selected

    def navigate(self, direction: Direction) -> Optional[str]:
        """Move the selection one row up or down"""
        selected = self.navigator.navigate(direction, self.history.all)
        self._sync_current_row()
        return selected

    def clear_search(self):
        """Empty the search field and the filter"""
        self.navigator.clear_filter()
        self.search_input.clear()

    def selected_item(self) -> Optional[HistoryItem]:
        if self.navigator.selection is None:
            return None
        return self.history.get(self.navigator.selection)

    def _on_search(self, text: str):
        self.navigator.filter_text = text
        self._render()

    def _on_current_item_changed(self, current, previous):
        if self._syncing:
            return

        item_id = current.data(Qt.ItemDataRole.UserRole) if current else None
        self.navigator.select(item_id)
        self.delete_button.setEnabled(item_id is not None)

    def _on_item_double_clicked(self, row):
        item_id = row.data(Qt.ItemDataRole.UserRole)
        history_item = self.history.get(item_id) if item_id else None
        if history_item:
            self.copy_item(history_item)

    def eventFilter(self, obj, event):
        """Keyboard handling shared by the search field and the list"""
        if event.type() == QEvent.Type.KeyPress and obj in (self.search_input, self.history_list):
            key = event.key()

            if key == Qt.Key.Key_Up:
                self.navigate(Direction.UP)
                return True
            if key == Qt.Key.Key_Down:
                self.navigate(Direction.DOWN)
                return True
            if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
                if obj is self.search_input:
                    self.select_first()
                else:
                    self.copy_selected_item()
                return True
            if obj is self.search_input and key == Qt.Key.Key_Escape and self.search_input.text():
                self.clear_search()
                return True
            if obj is self.history_list and key in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
                self.delete_selected_item()
                return True

        return super().eventFilter(obj, event)

    # Actions

    def _dispatch(self, task, *args):
        """Run a store mutation without waiting for it"""
        if self.dispatcher is not None:
            self.dispatcher.submit(task, *args)
        else:
            task(*args)

    def copy_item(self, item: HistoryItem) -> bool:
        """Copy an item's text to the system clipboard"""
        try:
            pyperclip.copy(item.title)
        except pyperclip.PyperclipException as e:
            logger.error(f"Failed to copy to clipboard: {e}")
            InfoBar.error(
                title="Error",
                content=f"Failed to copy: {str(e)}",
                orient=Qt.Orientation.Horizontal,
                isClosable=True,
                position=InfoBarPosition.TOP,
                duration=3000,
                parent=self
            )
            return False

        if self._setting('ui.show_notifications', True):
            InfoBar.success(
                title="Copied",
                content=f"Copied {len(item.title)} characters to clipboard",
                orient=Qt.Orientation.Horizontal,
                isClosable=True,
                position=InfoBarPosition.BOTTOM,
                duration=2000,
                parent=self
            )

        logger.info(f"Copied item to clipboard: {item.content_hash[:8]}")
        return True

    def copy_selected_item(self) -> bool:
        item = self.selected_item()
        if item is None:
            return False
        return self.copy_item(item)

    def toggle_pin(self, item: HistoryItem):
        self._dispatch(self.history.toggle_pin, item.id)

    def delete_item(self, item: HistoryItem):
        self._dispatch(self.history.delete, item.id)

    def delete_selected_item(self):
        """Delete the selected item and clear the selection"""
        item_id = self.navigator.selection
        if item_id is None:
            return

        self._dispatch(self.history.delete, item_id)
        self.navigator.clear_selection()
        self._sync_current_row()

    def _clear_history(self):
        """Clear history after confirmation"""
        self.apply_clear_choice(ClearHistoryDialog.ask(self))

    def apply_clear_choice(self, choice: ClearChoice):
        if choice is ClearChoice.UNPINNED:
            self._dispatch(self.history.clear)
        elif choice is ClearChoice.ALL:
            self._dispatch(self.history.clear_all)

    # Context menu

    def context_actions(self, item: HistoryItem, parent=None) -> List[Action]:
        """Copy / Pin or Unpin / Delete actions for one row"""
        copy_action = Action(FIF.COPY, "Copy", parent)
        copy_action.triggered.connect(lambda: self.copy_item(item))

        if item.pinned:
            pin_action = Action(FIF.UNPIN, "Unpin", parent)
        else:
            pin_action = Action(FIF.PIN, "Pin", parent)
        pin_action.triggered.connect(lambda: self.toggle_pin(item))

        delete_action = Action(FIF.DELETE, "Delete", parent)
        delete_action.triggered.connect(lambda: self.delete_item(item))

        return [copy_action, pin_action, delete_action]

    def build_context_menu(self, item: HistoryItem) -> RoundMenu:
        menu = RoundMenu(parent=self)
        copy_action, pin_action, delete_action = self.context_actions(item, menu)

        menu.addAction(copy_action)
        menu.addAction(pin_action)
        menu.addSeparator()
        menu.addAction(delete_action)
        return menu

    def _show_context_menu(self, pos):
        row = self.history_list.itemAt(pos)
        if row is None:
            return

        item_id = row.data(Qt.ItemDataRole.UserRole)
        history_item = self.history.get(item_id) if item_id else None
        if history_item is None:
            return

        menu = self.build_context_menu(history_item)
        menu.exec(self.history_list.viewport().mapToGlobal(pos))

    # Window

    def show_window(self):
        """Show centred, raise and activate"""
        screen = self.screen()
        if screen is not None:
            geometry = self.frameGeometry()
            geometry.moveCenter(screen.availableGeometry().center())
            self.move(geometry.topLeft())

        self.history.add_listener(self._on_history_changed)
        self._render()
        self.show()
        self.raise_()
        self.activateWindow()

    def closeEvent(self, event):
        """Handle window close event"""
        self.history.remove_listener(self._on_history_changed)
        logger.info("History manager window closed")
        super().closeEvent(event)
