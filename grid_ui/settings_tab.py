from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
                               QFileDialog, QCheckBox, QMessageBox, QGroupBox, QDoubleSpinBox)
from PySide6.QtCore import Signal
from grid_core.settings import SettingsManager
from grid_core.steam_paths import SteamPathDetector

class SettingsTab(QWidget):
    show_logs_requested = Signal()
    settings_saved = Signal()

    def __init__(self, settings: SettingsManager):
        super().__init__()
        self.settings = settings
        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)

        # Steam Path Section
        steam_group = QGroupBox("Steam Installation")
        steam_layout = QVBoxLayout()

        lbl_steam = QLabel("Steam Location (Optional override):")
        steam_layout.addWidget(lbl_steam)

        steam_h_layout = QHBoxLayout()
        self.steam_path_input = QLineEdit()
        self.steam_path_input.setText(self.settings.steam_path)
        self.steam_path_input.setPlaceholderText(self.detected_steam_path() or "Not detected")
        steam_h_layout.addWidget(self.steam_path_input)

        steam_browse_btn = QPushButton("Browse")
        steam_browse_btn.clicked.connect(self.browse_steam_path)
        steam_h_layout.addWidget(steam_browse_btn)

        steam_layout.addLayout(steam_h_layout)
        steam_group.setLayout(steam_layout)
        layout.addWidget(steam_group)

        # Catalog Section
        catalog_group = QGroupBox("Grid Catalog")
        catalog_layout = QHBoxLayout()
        catalog_layout.addWidget(QLabel("Request timeout (seconds):"))
        self.timeout_input = QDoubleSpinBox()
        self.timeout_input.setRange(1.0, 120.0)
        self.timeout_input.setValue(self.settings.request_timeout)
        catalog_layout.addWidget(self.timeout_input)
        catalog_layout.addStretch()
        catalog_group.setLayout(catalog_layout)
        layout.addWidget(catalog_group)

        self.start_minimized_chk = QCheckBox("Start minimized")
        self.start_minimized_chk.setChecked(bool(self.settings.get("start_minimized", False)))
        layout.addWidget(self.start_minimized_chk)

        # Save Button
        save_btn = QPushButton("Save Settings")
        save_btn.clicked.connect(self.save_settings)
        layout.addWidget(save_btn)

        # Show Logs Button
        logs_btn = QPushButton("Show Application Logs")
        logs_btn.clicked.connect(self.show_logs_requested.emit)
        layout.addWidget(logs_btn)

        layout.addStretch()

    @staticmethod
    def detected_steam_path() -> str:
        path = SteamPathDetector().get_steam_install_path()
        return str(path) if path else ""

    def browse_steam_path(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Steam Directory")
        if directory:
            self.steam_path_input.setText(directory)

    def save_settings(self):
        self.settings.steam_path = self.steam_path_input.text().strip()
        self.settings.request_timeout = self.timeout_input.value()
        self.settings.set("start_minimized", self.start_minimized_chk.isChecked())

        QMessageBox.information(self, "Settings Saved", "Settings updated successfully.")
        self.settings_saved.emit()
