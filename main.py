# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import APP_NAME, LOG_FILE, LOG_LEVEL
from core.threads import ThreadedSubmitter
from services.lifecycle import TestController
from ui.test_ui import TestUI
from utils.db_helper import ResultStore


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(LOG_FILE, encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(None, "Application Error", f"{exctype.__name__}: {value}")
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    setup_logging()

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)

    submitter = ThreadedSubmitter(ResultStore())
    controller = TestController(submitter=submitter)
    win = TestUI(controller)
    submitter.failed.connect(win.show_submission_warning)
    win.setWindowTitle(APP_NAME)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
