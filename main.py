"""
Entry point for the AP Set Planner application.
"""
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from security.license import LicenseManager, LicenseError
from ui.calculator_window import CalculatorWindow
from utils.logger import Logger


def check_license():
    """
    Validates the license before any window is shown.

    Returns:
        bool: True if the application may start.
    """
    manager = LicenseManager()
    try:
        manager.validate()
    except LicenseError as e:
        Logger.log_message_static(f"Main: License check failed: {e}", Logger.ERROR)
        QMessageBox.critical(None, "License Error", str(e))
        return False

    days_left = manager.days_until_expiry()
    if days_left is not None and days_left <= 30:
        QMessageBox.warning(None, "License Expiring", f"Your license expires in {days_left} days.")
    return True


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("AP Set Planner")

    if not check_license():
        sys.exit(1)

    window = CalculatorWindow()
    window.show()

    try:
        sys.exit(app.exec())
    except KeyboardInterrupt:
        print("Application interrupted by user, exiting...")
        sys.exit(0)

if __name__ == "__main__":
    main()
