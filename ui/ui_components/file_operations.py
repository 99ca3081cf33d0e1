"""
Build persistence and report export operations for the CalculatorWindow.
"""
import os

from PySide6.QtWidgets import QApplication, QFileDialog, QInputDialog, QMessageBox

from calculation.models import CalculationPath, EquipmentType, MountingMethod, SensorType
from data.builds import SavedBuild
from data.report_export import (
    result_to_clipboard_text, export_build_as_text, export_build_as_json,
    generate_html_report, save_html_report, export_results_csv
)
from data.settings import save_settings, DEFAULT_SETTINGS_PATH
from .results_panel import populate_results


def _require_results(self):
    if not self.results:
        QMessageBox.information(self, "No Results", "Calculate AP Sets before exporting.")
        return False
    return True


def current_build(self, name=None):
    """The current configuration and results as an unsaved build."""
    return SavedBuild(
        name=name or "Current Calculation",
        configuration=self.current_configuration,
        results=list(self.results),
    )


def _ask_save_path(self, title, default_name, file_filter, extension):
    file_path, _ = QFileDialog.getSaveFileName(self, title, default_name, file_filter)
    if not file_path:
        self.log_message("UI-File: Export canceled by user", self.DEBUG)
        return None
    if not file_path.lower().endswith(extension):
        file_path += extension
    return file_path


def _write_text(self, file_path, text):
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        self.log_message(f"UI-File: Failed to write {os.path.basename(file_path)}: {str(e)}", self.ERROR)
        QMessageBox.critical(self, "Export Failed", f"Failed to write file:\n{e}")
        return False
    self.log_message(f"UI-File: Exported {os.path.basename(file_path)}", self.INFO)
    return True


def export_html_report(self):
    if not _require_results(self):
        return
    file_path = _ask_save_path(self, "Export HTML Report", "apset_report.html", "HTML files (*.html)", ".html")
    if not file_path:
        return
    try:
        save_html_report(generate_html_report(self.results, self.current_configuration), file_path)
    except IOError as e:
        QMessageBox.critical(self, "Export Failed", str(e))


def export_text_report(self):
    if _require_results(self):
        file_path = _ask_save_path(self, "Export Text Report", "apset_report.txt", "Text files (*.txt)", ".txt")
        if file_path:
            _write_text(self, file_path, export_build_as_text(self.current_build()))


def export_json_report(self):
    if _require_results(self):
        file_path = _ask_save_path(self, "Export JSON", "apset_build.json", "JSON files (*.json)", ".json")
        if file_path:
            _write_text(self, file_path, export_build_as_json(self.current_build()))


def export_csv_report(self):
    if not _require_results(self):
        return
    file_path = _ask_save_path(self, "Export CSV", "apset_results.csv", "CSV files (*.csv)", ".csv")
    if not file_path:
        return
    try:
        export_results_csv(self.results, file_path)
    except IOError as e:
        QMessageBox.critical(self, "Export Failed", str(e))


def copy_selected_result(self):
    result = self.selected_result()
    if result is None:
        QMessageBox.information(self, "No Result Selected", "Select a result in the table first.")
        return
    QApplication.clipboard().setText(result_to_clipboard_text(result))
    self.statusBar().showMessage("Result copied to clipboard", 3000)
    self.log_message(f"UI-File: Copied {result.bearing_model} ({result.analysis_mode.value}) to clipboard", self.DEBUG)


def save_build(self):
    """Save the current calculation under a user-supplied name, plus the advanced settings."""
    if not _require_results(self):
        return

    name, ok = QInputDialog.getText(self, "Save Build", "Build name:")
    if not ok or not name.strip():
        return
    notes, _ = QInputDialog.getMultiLineText(self, "Save Build", "Notes (optional):")

    build = self.current_build(name.strip())
    build.notes = notes.strip() or None

    try:
        self.build_store.save_build(build)
        save_settings(DEFAULT_SETTINGS_PATH, self.settings)
    except IOError as e:
        QMessageBox.critical(self, "Save Failed", str(e))
        return
    self.statusBar().showMessage(f"Build '{build.name}' saved", 5000)


def _select_combo_data(combo, value):
    for index in range(combo.count()):
        if combo.itemData(index) == value:
            combo.setCurrentIndex(index)
            return


def load_build(self):
    """Restore a saved build: inputs go back into the panel, results are shown as saved."""
    builds = self.build_store.all_builds()
    if not builds:
        QMessageBox.information(self, "Load Build", "There are no saved builds.")
        return

    labels = [f"{build.name} ({build.created.strftime('%Y-%m-%d %H:%M')})" for build in builds]
    label, ok = QInputDialog.getItem(self, "Load Build", "Saved builds:", labels, 0, False)
    if not ok:
        return
    build = builds[labels.index(label)]
    configuration = build.configuration

    _select_combo_data(self.equipment_combo, EquipmentType.from_label(configuration.equipment_type))
    for combo, enum_type, value in ((self.sensor_combo, SensorType, configuration.sensor_type),
                                    (self.mounting_combo, MountingMethod, configuration.mounting_method),
                                    (self.path_combo, CalculationPath, configuration.calculation_path)):
        try:
            _select_combo_data(combo, enum_type(value))
        except ValueError:
            self.log_message(f"UI-File: Unknown value '{value}' in saved build", self.WARNING)
    self.rpm_edit.setText(f"{configuration.rpm:g}")
    self.vane_blade_spin.setValue(configuration.vane_blade_count or 0)

    self.bearing_list.clear()
    for model in configuration.bearing_models:
        self.bearing_list.addItem(model or "(Generic bearing)")

    self.apply_advanced_settings(configuration.advanced_settings)

    self.current_configuration = configuration
    self.results = list(build.results)
    populate_results(self, self.results)
    self.log_message(f"UI-File: Loaded build '{build.name}' with {len(build.results)} results", self.INFO)
    self.statusBar().showMessage(f"Build '{build.name}' loaded", 5000)
