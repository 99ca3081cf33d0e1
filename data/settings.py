"""
Advanced calculation settings persistence.

Settings are stored as a small JSON object in the user's home directory
(``~/.apset_planner/settings.json`` by default). A missing file is not an
error: the standard settings are used until the user saves their own.
"""

import os
import json

from calculation.constants import AdvancedCalculationSettings, STANDARD_SETTINGS
from utils.logger import Logger

APP_DIRECTORY = os.path.join(os.path.expanduser("~"), ".apset_planner")
DEFAULT_SETTINGS_PATH = os.path.join(APP_DIRECTORY, "settings.json")


def save_settings(file_path, settings):
    """
    Saves advanced calculation settings to a JSON file.

    Args:
        file_path (str): Path of the settings file.
        settings (AdvancedCalculationSettings): Settings to store.

    Raises:
        IOError: If the file cannot be written.
    """
    Logger.log_message_static(f"Saving calculation settings to {os.path.basename(file_path)}", Logger.INFO)

    try:
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=4)
    except OSError as e:
        Logger.log_message_static(f"Failed to save calculation settings: {str(e)}", Logger.ERROR)
        raise IOError(f"Failed to save calculation settings: {e}")


def load_settings(file_path=DEFAULT_SETTINGS_PATH):
    """
    Loads advanced calculation settings from a JSON file.

    Args:
        file_path (str): Path of the settings file.

    Returns:
        AdvancedCalculationSettings: Stored settings, or the standard settings
        when the file does not exist.

    Raises:
        IOError: If the file exists but cannot be parsed.
    """
    if not os.path.exists(file_path):
        Logger.log_message_static("No saved calculation settings, using standard settings", Logger.DEBUG)
        return STANDARD_SETTINGS

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            values = json.load(f)
        settings = AdvancedCalculationSettings.from_dict(values)
    except json.JSONDecodeError as e:
        Logger.log_message_static(f"Invalid JSON in settings file: {str(e)}", Logger.ERROR)
        raise IOError(f"Failed to load calculation settings: Invalid JSON format - {e}")
    except (OSError, TypeError, ValueError, AttributeError) as e:
        Logger.log_message_static(f"Failed to load calculation settings: {str(e)}", Logger.ERROR)
        raise IOError(f"Failed to load calculation settings: {e}")

    Logger.log_message_static(
        f"Calculation settings loaded (advanced mode {'on' if settings.advanced_mode_enabled else 'off'})",
        Logger.INFO)
    return settings
