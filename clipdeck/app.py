"""ClipDeck application: wires the history store, clipboard feed and history manager window"""

import sys
import signal
import threading
from datetime import datetime
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import QTimer
from loguru import logger

from .core.clipboard import ClipboardMonitor, History
from .services import TaskDispatcher
from .ui.history import HistoryManagerWindow
from .utils import ConfigManager, get_data_dir


class ClipDeckApp:
    """Main application class"""

    def __init__(self, config_path=None):
        """Initialize application"""
        self.config_path = config_path
        self.config_manager = None
        self.history = None
        self.dispatcher = None
        self.clipboard_monitor = None
        self.window = None
        self.qt_app = None

        self._shutdown_event = threading.Event()

    def _setup_logging(self):
        """Configure logging"""
        level = self.config_manager.get('logging.level', 'INFO')

        logger.remove()

        # Console logging
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"
        )

        # File logging
        if self.config_manager.get('logging.file_logging', True):
            log_dir = get_data_dir() / 'logs'
            log_dir.mkdir(parents=True, exist_ok=True)
            logger.add(
                log_dir / "clipdeck_{time:YYYY-MM-DD}.log",
                rotation="1 day",
                retention=self.config_manager.get('logging.retention', '7 days'),
                level="DEBUG",
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
            )

    def initialize(self) -> bool:
        """Initialize all components"""
        self.config_manager = ConfigManager(self.config_path)
        self._setup_logging()

        logger.info("=" * 60)
        logger.info("ClipDeck Starting")
        logger.info("=" * 60)

        if not self.config_manager.validate():
            logger.error("Invalid configuration")
            return False

        self.history = History(self.config_manager.get('history.max_size', 200))
        self.dispatcher = TaskDispatcher()

        if self.config_manager.get('clipboard.monitor_enabled', True):
            logger.info("Initializing clipboard monitoring...")
            self.clipboard_monitor = ClipboardMonitor(self.config_manager.get('clipboard.check_interval', 500))
            self.clipboard_monitor.add_callback(self._on_clipboard_change)

        logger.info("Application initialized successfully")
        return True

    def _on_clipboard_change(self, content: str, timestamp: datetime):
        """Handle clipboard change event (monitor thread)"""
        self.history.add(content, timestamp)

    def start(self) -> int:
        """Show the history manager and run the Qt event loop"""
        self.qt_app = QApplication.instance() or QApplication(sys.argv)
        self.qt_app.aboutToQuit.connect(self.shutdown)

        # Let Python signal handlers run while Qt owns the main loop
        heartbeat = QTimer()
        heartbeat.timeout.connect(lambda: None)
        heartbeat.start(250)

        if self.clipboard_monitor:
            self.clipboard_monitor.start()

        self.window = HistoryManagerWindow(self.history, self.dispatcher, self.config_manager)
        self.window.show_window()

        logger.info("Application started successfully")
        return self.qt_app.exec()

    def shutdown(self):
        """Shutdown the application"""
        if self._shutdown_event.is_set():
            return

        logger.info("Shutting down application...")

        try:
            if self.clipboard_monitor:
                self.clipboard_monitor.stop()
                self.clipboard_monitor.remove_callback(self._on_clipboard_change)

            if self.dispatcher:
                self.dispatcher.shutdown(wait=True)

            if self.qt_app:
                self.qt_app.quit()

            logger.info("Application shutdown complete")

        finally:
            self._shutdown_event.set()


def main():
    """Main entry point"""
    app = ClipDeckApp()

    def signal_handler(signum, frame):
        logger.info(f"Received signal {signum}")
        app.shutdown()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if not app.initialize():
        logger.error("Failed to initialize application")
        sys.exit(1)

    sys.exit(app.start())


if __name__ == "__main__":
    main()
