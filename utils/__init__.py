"""
Utilities package for the AP Set Planner.

This package provides helpers used throughout the application, most notably
the application-wide logger shared by the calculation engine, the data layer
and the user interface.
"""

from .logger import Logger


def log_debug(message):
    """
    Log a debug message using the global logger.

    Args:
        message (str): The debug message to log
    """
    Logger.log_message_static(message, Logger.DEBUG)


def log_info(message):
    """
    Log an info message using the global logger.

    Args:
        message (str): The info message to log
    """
    Logger.log_message_static(message, Logger.INFO)


def log_warning(message):
    """
    Log a warning message using the global logger.

    Args:
        message (str): The warning message to log
    """
    Logger.log_message_static(message, Logger.WARNING)


def log_error(message):
    """
    Log an error message using the global logger.

    Args:
        message (str): The error message to log
    """
    Logger.log_message_static(message, Logger.ERROR)


__version__ = "1.0.0"

__all__ = [
    'Logger',
    'log_debug',
    'log_info',
    'log_warning',
    'log_error',
    '__version__'
]
