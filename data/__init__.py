"""
Data Package for the AP Set Planner

This package handles everything the application reads from or writes to disk.
The calculation engine never touches files; these modules feed it bearing
data and settings, and store or export its results. Core components include:

1. Bearing Database
   - Master JSON file of bearing fault-frequency coefficients
   - Lookup by model, brand prefix, series, manufacturer and free-text search

2. Persistence
   - Saved builds (inputs plus already-computed results)
   - Advanced calculation settings

3. Export Capabilities
   - Clipboard, plain-text and JSON build reports
   - Self-contained HTML report
   - CSV and pandas DataFrame export of results and trends
"""

# Export submodule functionality
from .bearing_database import BearingDatabase, DEFAULT_DATABASE_PATH
from .builds import BuildConfiguration, SavedBuild, BuildStore
from .settings import save_settings, load_settings, DEFAULT_SETTINGS_PATH
from .report_export import (
    result_to_clipboard_text,
    export_build_as_text,
    export_build_as_json,
    generate_html_report,
    save_html_report,
    results_to_dataframe,
    trends_to_dataframe,
    export_results_csv
)

# Define public API
__all__ = [
    # Bearing database
    'BearingDatabase',
    'DEFAULT_DATABASE_PATH',

    # Persistence
    'BuildConfiguration',
    'SavedBuild',
    'BuildStore',
    'save_settings',
    'load_settings',
    'DEFAULT_SETTINGS_PATH',

    # Export functionality
    'result_to_clipboard_text',
    'export_build_as_text',
    'export_build_as_json',
    'generate_html_report',
    'save_html_report',
    'results_to_dataframe',
    'trends_to_dataframe',
    'export_results_csv'
]
