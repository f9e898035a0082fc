# Rev 0.1.0

# src/taskpad/main.py
import logging
import sys

from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from taskpad.app_context import AppContext
from taskpad.ui.main_window import MainWindow
from taskpad.utils.config import load_settings, save_settings
from taskpad.utils.logging_setup import setup_logging
from taskpad.utils.paths import DB_PATH
from taskpad.viewmodels.tasks_viewmodel import TasksViewModel

log = logging.getLogger(__name__)


def main():
    app = QApplication(sys.argv)
    QCoreApplication.setApplicationName("taskpad")

    logfile = setup_logging("taskpad")
    print(f"[logging] Writing to: {logfile}")

    # --- DI wiring ---
    settings = load_settings()
    ctx = AppContext.create(DB_PATH, settings)
    vm = TasksViewModel(ctx.store)

    # --- UI ---
    win = MainWindow(vm, settings=settings)
    win.show()

    try:
        return app.exec()
    finally:
        vm.close()
        ctx.shutdown()
        try:
            save_settings(settings)
        except OSError:
            log.warning("Could not write settings", exc_info=True)


if __name__ == "__main__":
    sys.exit(main())
