from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                               QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView,
                               QGroupBox, QFormLayout)
from PySide6.QtCore import Qt, QThread, Signal, QUrl
from PySide6.QtGui import QDesktopServices, QFont

import logging
from typing import List, Optional

from grid_core.catalog import CatalogClient, group_grids_by_date
from grid_core.errors import CatalogUnavailable, GridDetectorError
from grid_core.matcher import detect_and_match, detect_current_grid
from grid_core.models import (DetectedGrid, GridRelease, GRID_D2PT,
                              GRID_HIGH_WINRATE, GRID_MOST_PLAYED)
from grid_core.settings import SettingsManager
from grid_core.steam_paths import SteamPathDetector

logger = logging.getLogger(__name__)

# Table columns after Date and Patch
GRID_COLUMNS = [
    (GRID_D2PT, "D2PT Rating"),
    (GRID_HIGH_WINRATE, "High Winrate"),
    (GRID_MOST_PLAYED, "Most Played"),
]

# --- Workers ---

class DetectWorker(QThread):
    finished_detect = Signal(object, object) # cfg path (str or None), DetectedGrid or None
    failed = Signal(str)

    def __init__(self, steam_path: str, timeout: float, parent=None):
        super().__init__(parent)
        self.steam_path = steam_path
        self.timeout = timeout

    def run(self):
        try:
            cfg_dir = SteamPathDetector(settings_path=self.steam_path).resolve()
            if cfg_dir is None:
                self.finished_detect.emit(None, None)
                return

            try:
                manifest = CatalogClient(timeout=self.timeout).fetch_hash_manifest()
            except CatalogUnavailable as e:
                # Still show the local hash, just unclassified
                logger.warning(f"Could not classify current grid: {e}")
                self.finished_detect.emit(str(cfg_dir), detect_current_grid(cfg_dir))
                return

            self.finished_detect.emit(str(cfg_dir), detect_and_match(manifest, cfg_dir))
        except GridDetectorError as e:
            logger.error(f"Grid detection failed: {e}")
            self.failed.emit(str(e))

class CatalogWorker(QThread):
    finished_catalog = Signal(list) # List[GridRelease]
    failed = Signal(str)

    def __init__(self, timeout: float, parent=None):
        super().__init__(parent)
        self.timeout = timeout

    def run(self):
        try:
            grids = CatalogClient(timeout=self.timeout).list_grids()
        except CatalogUnavailable as e:
            logger.error(f"Error fetching grid catalog: {e}")
            self.failed.emit(str(e))
            return
        self.finished_catalog.emit(group_grids_by_date(grids))

# --- Widgets ---

class GridsTab(QWidget):
    """
    Shows the active hero grid and the published catalog, one row per release.
    """

    def __init__(self, settings: SettingsManager):
        super().__init__()
        self.settings = settings
        self.current_grid: Optional[DetectedGrid] = None
        self.releases: List[GridRelease] = []
        self.detect_worker = None
        self.catalog_worker = None
        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)

        # Current grid
        current_group = QGroupBox("Current Hero Grid")
        form = QFormLayout()
        self.lbl_path = QLabel("Searching for Dota 2 path...")
        self.lbl_path.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.lbl_path.setWordWrap(True)
        form.addRow("Config folder:", self.lbl_path)

        self.lbl_grid = QLabel("-")
        form.addRow("Active grid:", self.lbl_grid)

        self.lbl_hash = QLabel("-")
        self.lbl_hash.setTextInteractionFlags(Qt.TextSelectableByMouse)
        form.addRow("MD5:", self.lbl_hash)
        current_group.setLayout(form)
        layout.addWidget(current_group)

        # Toolbar
        toolbar = QHBoxLayout()
        self.refresh_btn = QPushButton("Refresh")
        self.refresh_btn.clicked.connect(self.refresh)
        toolbar.addWidget(self.refresh_btn)
        toolbar.addStretch()
        self.status_label = QLabel("Idle")
        toolbar.addWidget(self.status_label)
        layout.addLayout(toolbar)

        # Catalog table
        self.table = QTableWidget(0, 2 + len(GRID_COLUMNS))
        self.table.setHorizontalHeaderLabels(["Date", "Patch"] + [title for _, title in GRID_COLUMNS])
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.cellDoubleClicked.connect(self.open_grid_url)
        layout.addWidget(self.table)

    def refresh(self):
        if (self.detect_worker and self.detect_worker.isRunning()) or \
           (self.catalog_worker and self.catalog_worker.isRunning()):
            return

        self.refresh_btn.setEnabled(False)
        self.status_label.setText("Loading...")
        timeout = self.settings.request_timeout

        # Path resolution and the catalog listing are independent, run both at once
        self.detect_worker = DetectWorker(self.settings.steam_path, timeout)
        self.detect_worker.finished_detect.connect(self.on_detect_finished)
        self.detect_worker.failed.connect(self.on_worker_failed)
        self.detect_worker.finished.connect(self.on_worker_done)

        self.catalog_worker = CatalogWorker(timeout)
        self.catalog_worker.finished_catalog.connect(self.on_catalog_loaded)
        self.catalog_worker.failed.connect(self.on_worker_failed)
        self.catalog_worker.finished.connect(self.on_worker_done)

        self.detect_worker.start()
        self.catalog_worker.start()

    def on_worker_done(self):
        if self.detect_worker.isRunning() or self.catalog_worker.isRunning():
            return
        self.refresh_btn.setEnabled(True)
        if self.status_label.text() == "Loading...":
            self.status_label.setText(f"Loaded {len(self.releases)} releases.")

    def on_worker_failed(self, message: str):
        self.status_label.setText(f"Error: {message}")

    def on_detect_finished(self, cfg_path, grid):
        self.lbl_path.setText(cfg_path or "Dota 2 configuration path not found.")
        self.current_grid = grid

        if grid is None:
            self.lbl_grid.setText("No hero grid file found")
            self.lbl_hash.setText("-")
        else:
            self.lbl_grid.setText(grid.display_name)
            self.lbl_hash.setText(grid.hash)

        self.highlight_current()

    def on_catalog_loaded(self, releases):
        self.releases = releases
        self.table.setRowCount(0)

        for row, release in enumerate(releases):
            self.table.insertRow(row)
            self.table.setItem(row, 0, QTableWidgetItem(release.date))
            self.table.setItem(row, 1, QTableWidgetItem(release.patch))

            for col, (grid_type, _) in enumerate(GRID_COLUMNS, start=2):
                entry = release.grids.get(grid_type)
                item = QTableWidgetItem(entry.name if entry else "N/A")
                if entry:
                    item.setToolTip(entry.download_url)
                self.table.setItem(row, col, item)

        self.highlight_current()

    def highlight_current(self):
        """
        Bolds the catalog cell matching the active grid, if any.
        """
        current_name = self.current_grid.name if self.current_grid and self.current_grid.is_known else None

        for row, release in enumerate(self.releases):
            for col, (grid_type, _) in enumerate(GRID_COLUMNS, start=2):
                item = self.table.item(row, col)
                if item is None:
                    continue
                entry = release.grids.get(grid_type)
                font = QFont(item.font())
                font.setBold(bool(entry and entry.name == current_name))
                item.setFont(font)

    def open_grid_url(self, row: int, col: int):
        if col < 2 or row >= len(self.releases):
            return
        grid_type = GRID_COLUMNS[col - 2][0]
        entry = self.releases[row].grids.get(grid_type)
        if entry:
            QDesktopServices.openUrl(QUrl(entry.download_url))
