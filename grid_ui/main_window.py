from PySide6.QtWidgets import QMainWindow, QTabWidget, QVBoxLayout, QWidget
import logging

from grid_core.settings import SettingsManager
from grid_ui.grids_tab import GridsTab
from grid_ui.settings_tab import SettingsTab
from grid_ui.log_window import LogWindow, QtLogHandler

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILE = "grid_detector.log"

class MainWindow(QMainWindow):
    def __init__(self, settings: SettingsManager):
        super().__init__()
        self.settings = settings
        self.setWindowTitle("D2PT Grid Detector")
        self.resize(1000, 650)

        self.setup_logging()
        self.init_ui()

    def setup_logging(self):
        self.log_window = LogWindow(self)

        handler = QtLogHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.record_logged.connect(self.log_window.append_log)

        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)

        try:
            file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Log window still works without the file
            root_logger.warning(f"Failed to setup file logging: {e}")

    def show_log_window(self):
        self.log_window.show()
        self.log_window.raise_()
        self.log_window.activateWindow()

    def init_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        self.tabs = QTabWidget()
        self.grids_tab = GridsTab(self.settings)
        self.settings_tab = SettingsTab(self.settings)

        self.settings_tab.show_logs_requested.connect(self.show_log_window)
        self.settings_tab.settings_saved.connect(self.grids_tab.refresh)

        self.tabs.addTab(self.grids_tab, "Grids")
        self.tabs.addTab(self.settings_tab, "Settings")

        layout.addWidget(self.tabs)

        self.grids_tab.refresh()
