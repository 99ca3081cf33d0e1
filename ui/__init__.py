"""
UI package for the AP Set Planner application.

This package provides the graphical user interface: the main calculator
window and the panels, tables and chart it is built from. All calculation
is delegated to the calculation package.
"""

# Import main components for direct package access
from .calculator_window import CalculatorWindow

# Import UI component setup functions that might be needed by external modules
from .ui_components.input_panel import setup_input_panel
from .ui_components.results_panel import setup_results_panel
from .ui_components.log_window import LogWindow

# Version information
__version__ = "1.0.0"


def get_main_window():
    """
    Returns the current instance of the CalculatorWindow if one exists.

    Returns:
        CalculatorWindow or None: The current window, or None if not initialized
    """
    return CalculatorWindow.instance
