"""Entry point for the Balance Watch desktop app.

Usage:
    python -m watch_desktop

Prerequisites:
    1. Start the balance watch server (listens on :8080 by default)

    2. Optionally point the app elsewhere:
       WATCH_SERVER_URL=http://host:8080 python -m watch_desktop
"""

import logging
import sys

from PySide6.QtWidgets import QApplication

from .config import Settings
from .main_window import MainWindow


def main():
    """Main entry point."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    app = QApplication(sys.argv)

    # Set application metadata
    app.setApplicationName("Balance Watch")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("BalanceWatch")

    window = MainWindow(settings)
    window.show()

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
