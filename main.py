import sys
from PySide6.QtWidgets import QApplication
from grid_core.settings import SettingsManager
from grid_ui.main_window import MainWindow

def main():
    """
    Application entry point.
    """
    app = QApplication(sys.argv)

    settings = SettingsManager()
    window = MainWindow(settings)
    if settings.get("start_minimized", False):
        window.showMinimized()
    else:
        window.show()

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
