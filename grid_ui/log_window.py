from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QTextEdit, QPushButton
from PySide6.QtCore import QObject, Signal
from html import escape
import logging

# Colors for records at or above each level, highest first
LEVEL_COLORS = (
    (logging.ERROR, "#d9534f"),
    (logging.WARNING, "#e0a800"),
)

class QtLogHandler(logging.Handler, QObject):
    """
    Forwards log records to the GUI thread as (levelno, formatted message).
    Records from worker threads (catalog fetch, detection) arrive through the
    queued signal connection, never by touching widgets directly.
    """
    record_logged = Signal(int, str)

    def __init__(self, level=logging.NOTSET):
        logging.Handler.__init__(self, level)
        QObject.__init__(self)

    def emit(self, record):
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.record_logged.emit(record.levelno, msg)

class LogWindow(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Grid Detector Logs")
        self.resize(700, 400)

        layout = QVBoxLayout(self)

        self.text_area = QTextEdit()
        self.text_area.setReadOnly(True)
        layout.addWidget(self.text_area)

        btn_layout = QHBoxLayout()
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self.text_area.clear)
        btn_layout.addWidget(clear_btn)
        btn_layout.addStretch()

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.hide)
        btn_layout.addWidget(close_btn)
        layout.addLayout(btn_layout)

    def append_log(self, levelno: int, message: str):
        html = escape(message).replace("\n", "<br>")
        for level, color in LEVEL_COLORS:
            if levelno >= level:
                self.text_area.append(f'<span style="color: {color};">{html}</span>')
                return
        self.text_area.append(html)
