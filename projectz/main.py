# Rev 0.2.0

# projectz/main.py  (Rev 0.2.0)
import sys
from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication

from projectz.app_context import AppContext
from projectz.ui.main_window import MainWindow
from projectz.utils.config import load_settings, resolve_db_path
from projectz.utils.logging_setup import setup_logging
from projectz.utils.paths import ensure_dirs


def main():
    # rounding policy must be set before the QApplication exists
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("projectZ")
    QCoreApplication.setApplicationName("projectZ")

    ensure_dirs()
    logfile = setup_logging("projectZ")
    print(f"[logging] Writing to: {logfile}")

    # --- DI wiring ---
    settings = load_settings()
    ctx = AppContext.create(resolve_db_path(settings=settings))

    # --- UI ---
    win = MainWindow(project_service=ctx.project_service, settings=settings)
    win.show()

    # Keep a strong ref just in case someone stores nothing at module level
    app.setProperty("mainWindow", win)
    app.setFont(QFont("Sans Serif", 10))

    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
