"""
Run with: python -m mathsets
"""
from __future__ import annotations

import logging
import sys

from mathsets.app.application import create_app
from mathsets.app.ui.main_window import MainWindow
from mathsets.logging_config import setup_logging


def main() -> int:
    """Main entry point for the application."""
    # Use logging.DEBUG to follow every step/play/pause transition
    setup_logging(level=logging.INFO)

    app = create_app()
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
