"""
Main GUI implementation of the AP Set Planner.
"""
import os

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QMainWindow, QSplitter, QWidget, QStatusBar, QMessageBox
)

from pyqtgraph import setConfigOption

from calculation.constants import AdvancedCalculationSettings
from data.bearing_database import BearingDatabase
from data.builds import BuildStore
from data.settings import APP_DIRECTORY, load_settings
from .ui_components.input_panel import setup_input_panel
from .ui_components.results_panel import setup_results_panel
from .ui_components.log_window import LogWindow
from utils.logger import Logger

BUILDS_FILE_NAME = "builds.json"


class CalculatorWindow(QMainWindow):
    """
    Main application window for planning AP Sets.

    Attributes:
        bearing_database (BearingDatabase): Bearings available for lookup.
        build_store (BuildStore): Saved builds.
        settings (AdvancedCalculationSettings): Current advanced settings.
        results (list): APSetResults of the last calculation or loaded build.
        current_configuration (BuildConfiguration): Inputs of the shown results.
    """

    # Class-level constants for log levels
    DEBUG = Logger.DEBUG
    INFO = Logger.INFO
    WARNING = Logger.WARNING
    ERROR = Logger.ERROR

    instance = None

    def __init__(self, bearing_database=None, build_store=None):
        super().__init__()

        CalculatorWindow.instance = self
        self.logger = Logger.get_instance()

        setConfigOption('useOpenGL', False)
        setConfigOption('background', 'w')
        setConfigOption('foreground', 'k')

        self.setWindowTitle("AP Set Planner")
        self.resize(1400, 850)

        self.log_window = LogWindow()

        self.log_message("Window: Application starting", Logger.INFO)

        self.bearing_database = bearing_database if bearing_database is not None else self.load_bearing_database()
        self.build_store = build_store if build_store is not None else self.load_build_store()
        self.settings = self.load_advanced_settings()
        self.results = []
        self.current_configuration = None

        self.init_ui()

    def load_bearing_database(self):
        """Loads the bundled bearing database; an empty database is used if it cannot be read."""
        try:
            return BearingDatabase.load()
        except (FileNotFoundError, IOError) as e:
            QMessageBox.warning(self, "Bearing Database",
                                f"The bearing database could not be loaded:\n{e}\n\n"
                                "Only generic bearings are available.")
            return BearingDatabase()

    def load_build_store(self):
        try:
            return BuildStore(os.path.join(APP_DIRECTORY, BUILDS_FILE_NAME))
        except IOError as e:
            QMessageBox.warning(self, "Saved Builds", f"Saved builds could not be loaded:\n{e}")
            self.log_message("Window: Starting with an empty in-memory build list", Logger.WARNING)
            return BuildStore(None)

    def load_advanced_settings(self):
        try:
            return load_settings()
        except IOError:
            self.log_message("Window: Using standard advanced settings", Logger.WARNING)
            return AdvancedCalculationSettings()

    def init_ui(self):
        """
        Initializes the full UI of the application, including:
        - Input panel with equipment, bearings and advanced mode
        - Results table, trends table and band chart
        - Menu and status bar
        """
        self.log_message("Window: Initializing main UI components", Logger.DEBUG)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        self.input_panel = QWidget()
        self.input_panel.setMinimumWidth(340)
        splitter.addWidget(self.input_panel)

        self.results_panel = QWidget()
        splitter.addWidget(self.results_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)

        setup_input_panel(self)
        setup_results_panel(self)
        self.setup_menu()

        self.update_vane_blade_state()
        self.update_multiplier_warnings()

        self.setStatusBar(QStatusBar())
        self.statusBar().showMessage(f"{len(self.bearing_database)} bearings loaded", 5000)

    def setup_menu(self):
        file_menu = self.menuBar().addMenu("&File")
        for text, handler in (("Save Build...", self.save_build),
                              ("Load Build...", self.load_build),
                              ("Export HTML Report...", self.export_html_report),
                              ("Exit", self.close)):
            action = QAction(text, self)
            action.triggered.connect(handler)
            file_menu.addAction(action)

        view_menu = self.menuBar().addMenu("&View")
        hide_inputs = QAction("Hide Input Panel", self)
        hide_inputs.setCheckable(True)
        hide_inputs.toggled.connect(self.toggle_input_panel)
        view_menu.addAction(hide_inputs)

    def log_message(self, message, level=Logger.INFO):
        """
        Logs a message using the Logger class.
        """
        self.logger.log_message(message, level)

    @staticmethod
    def log_message_static(message, level=Logger.INFO):
        """
        Static method to log messages globally.
        """
        Logger.log_message_static(message, level)

    # Import methods from other modules
    from .ui_components.calculation_operations import (
        update_vane_blade_state, add_bearing, remove_selected_bearing,
        selected_bearing_models, resolve_bearings, read_advanced_settings,
        apply_advanced_settings, update_multiplier_warnings, reset_advanced_settings,
        run_calculation, selected_result, show_selected_result, build_configuration
    )

    from .ui_components.file_operations import (
        current_build, export_html_report, export_text_report, export_json_report,
        export_csv_report, copy_selected_result, save_build, load_build
    )

    from .ui_components.band_plot import export_band_chart

    from .ui_components.panel_operations import toggle_log_window, toggle_input_panel
