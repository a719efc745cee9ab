"""Confirmation dialog for clearing the history"""

from enum import Enum
from PyQt6.QtWidgets import QVBoxLayout, QHBoxLayout, QDialog
from qfluentwidgets import PushButton, PrimaryPushButton, BodyLabel, isDarkTheme
from loguru import logger


class ClearChoice(Enum):
    """What the user chose to clear"""
    CANCEL = "cancel"
    UNPINNED = "unpinned"
    ALL = "all"


class ClearHistoryDialog(QDialog):
    """Asks whether to clear unpinned items, everything, or nothing"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.choice = ClearChoice.CANCEL

        self.setWindowTitle("Clear History")
        self.setModal(True)
        self._apply_theme_style()
        self._setup_ui()
        self.setFixedWidth(420)

    def _apply_theme_style(self):
        """Apply appropriate styling based on system theme"""
        if isDarkTheme():
            self.setStyleSheet("""
                QDialog {
                    background-color: #202020;
                    color: #ffffff;
                }
                QLabel {
                    color: #ffffff;
                }
            """)
        else:
            self.setStyleSheet("""
                QDialog {
                    background-color: #f3f3f3;
                    color: #000000;
                }
                QLabel {
                    color: #000000;
                }
            """)

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(16)
        layout.setContentsMargins(24, 24, 24, 24)

        title_label = BodyLabel("Are you sure you want to clear the history?")
        title_label.setStyleSheet("font-size: 16px; font-weight: bold;")
        layout.addWidget(title_label)

        message_label = BodyLabel(
            "Clear Unpinned keeps pinned items. Clear All removes everything.\n"
            "This action cannot be undone."
        )
        message_label.setWordWrap(True)
        layout.addWidget(message_label)

        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self.cancel_button = PushButton("Cancel")
        self.cancel_button.clicked.connect(lambda: self._finish(ClearChoice.CANCEL))
        button_layout.addWidget(self.cancel_button)

        self.clear_unpinned_button = PrimaryPushButton("Clear Unpinned")
        self.clear_unpinned_button.clicked.connect(lambda: self._finish(ClearChoice.UNPINNED))
        button_layout.addWidget(self.clear_unpinned_button)

        self.clear_all_button = PushButton("Clear All")
        self.clear_all_button.clicked.connect(lambda: self._finish(ClearChoice.ALL))
        button_layout.addWidget(self.clear_all_button)

        layout.addLayout(button_layout)
        self.cancel_button.setFocus()

    def _finish(self, choice: ClearChoice):
        self.choice = choice
        logger.debug(f"Clear history dialog: {choice.value}")
        if choice is ClearChoice.CANCEL:
            self.reject()
        else:
            self.accept()

    @classmethod
    def ask(cls, parent=None) -> ClearChoice:
        """Show the dialog modally and return the choice"""
        dialog = cls(parent)
        dialog.exec()
        return dialog.choice
