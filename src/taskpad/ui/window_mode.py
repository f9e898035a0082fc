# Rev 0.1.0

# ui/window_mode.py
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def lock_dialog_fixed(win, *, width_ratio=0.3, height_ratio=0.5, min_width=360, min_height=360):
    """
    For modal dialogs: keep them *not* maximized, but non-resizable and sized
    as a fraction of the current screen (never below min_width x min_height).
    """
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    rect: QRect = screen.availableGeometry()
    w = max(min_width, int(rect.width() * width_ratio))
    h = max(min_height, int(rect.height() * height_ratio))
    win.setFixedSize(w, h)
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)
