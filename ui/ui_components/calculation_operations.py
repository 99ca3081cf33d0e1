"""
Calculation operations for the CalculatorWindow.

These functions are imported into the window class and act on its widgets.
"""
from PySide6.QtWidgets import QListWidgetItem, QMessageBox

from calculation.ap_set import calculate_ap_sets
from calculation.constants import AdvancedCalculationSettings, ValidationWarningLevel
from calculation.models import generic_bearing
from data.builds import BuildConfiguration
from .input_panel import ADVANCED_FIELDS
from .results_panel import populate_results, populate_trends, update_summary
from .band_plot import plot_trend_bands

GENERIC_ITEM_TEXT = "(Generic bearing)"


def update_vane_blade_state(self):
    """Enable the vane/blade count only for fans and pumps."""
    equipment = self.equipment_combo.currentData()
    self.vane_blade_spin.setEnabled(equipment.has_pass_frequency)


def add_bearing(self):
    """
    Add the entered bearing model to the list.

    Unknown models are rejected with a message; an empty entry adds a generic
    bearing.
    """
    model = self.bearing_edit.text().strip()
    if not model:
        self.bearing_list.addItem(QListWidgetItem(GENERIC_ITEM_TEXT))
        self.log_message("UI-Calc: Added generic bearing", self.DEBUG)
        return

    if model not in self.bearing_database:
        matches = self.bearing_database.search(model)
        if len(matches) == 1:
            model = matches[0]
        else:
            self.log_message(f"UI-Calc: Unknown bearing model '{model}'", self.WARNING)
            QMessageBox.warning(
                self, "Unknown Bearing",
                f"Bearing '{model}' was not found in the bearing database."
                + (f"\n\nDid you mean: {', '.join(matches[:5])}?" if matches else "")
            )
            return

    self.bearing_list.addItem(QListWidgetItem(model))
    self.bearing_edit.clear()
    self.log_message(f"UI-Calc: Added bearing {model}", self.DEBUG)


def remove_selected_bearing(self):
    for item in self.bearing_list.selectedItems():
        self.bearing_list.takeItem(self.bearing_list.row(item))


def selected_bearing_models(self):
    """Bearing models in the list; an empty string marks a generic bearing."""
    models = []
    for index in range(self.bearing_list.count()):
        text = self.bearing_list.item(index).text()
        models.append("" if text == GENERIC_ITEM_TEXT else text)
    return models


def resolve_bearings(self, models):
    equipment = self.equipment_combo.currentData()
    bearings = []
    for model in models or [""]:
        bearing = self.bearing_database.get_bearing(model) if model else None
        bearings.append(bearing or generic_bearing(equipment))
    return bearings


def read_advanced_settings(self):
    """Current advanced settings from the advanced group."""
    values = {attribute: self.multiplier_spins[parameter].value()
              for parameter, attribute, _, _ in ADVANCED_FIELDS}
    return AdvancedCalculationSettings(advanced_mode_enabled=self.advanced_group.isChecked(), **values)


def update_multiplier_warnings(self, *args):
    """Show a range warning under every advanced value outside its suggested range."""
    settings = self.read_advanced_settings()
    for parameter, validation in settings.validations().items():
        label = self.multiplier_warnings[parameter]
        level = validation.warning_level
        if not settings.advanced_mode_enabled or level == ValidationWarningLevel.NONE:
            label.setText("")
            continue

        low, high = validation.suggested_range
        prefix = "Far outside" if level == ValidationWarningLevel.CRITICAL else "Outside"
        label.setText(f"{prefix} suggested range {low:g}-{high:g} (standard {validation.industry_standard:g})")
        label.setStyleSheet("color: #cc0000;" if level == ValidationWarningLevel.CRITICAL else "color: #cc7a00;")


def apply_advanced_settings(self, settings):
    """Put saved advanced settings back into the advanced group."""
    settings = settings or AdvancedCalculationSettings()
    self.advanced_group.setChecked(settings.advanced_mode_enabled)
    for parameter, attribute, _, _ in ADVANCED_FIELDS:
        self.multiplier_spins[parameter].setValue(getattr(settings, attribute))
    self.settings = settings


def reset_advanced_settings(self):
    self.apply_advanced_settings(AdvancedCalculationSettings(advanced_mode_enabled=self.advanced_group.isChecked()))
    self.log_message("UI-Calc: Advanced settings reset to standard values", self.INFO)


def run_calculation(self):
    """
    Calculate Normal and PeakVue AP Sets for every listed bearing.

    Invalid RPM does not abort: the engine returns invalid results that are
    shown in the table with their message.
    """
    rpm_text = self.rpm_edit.text().strip()
    try:
        rpm = float(rpm_text)
    except ValueError:
        self.log_message(f"UI-Calc: RPM '{rpm_text}' is not a number", self.WARNING)
        QMessageBox.warning(self, "Invalid Speed", "Please enter the running speed in RPM as a number.")
        return

    self.settings = self.read_advanced_settings()
    constants = self.settings.to_constants()
    models = self.selected_bearing_models()
    bearings = self.resolve_bearings(models)

    equipment = self.equipment_combo.currentData()
    vane_blade_count = self.vane_blade_spin.value() if equipment.has_pass_frequency else None

    self.log_message(
        f"UI-Calc: Calculating {len(bearings)} bearing(s) at {rpm:g} RPM for {equipment.value}", self.INFO)

    pairs = calculate_ap_sets(
        bearings, rpm, constants,
        sensor_type=self.sensor_combo.currentData(),
        mounting_method=self.mounting_combo.currentData(),
        equipment_type=equipment,
        vane_blade_count=vane_blade_count or None,
        path=self.path_combo.currentData(),
    )

    self.results = [result for pair in pairs for result in pair]
    self.current_configuration = self.build_configuration(rpm, models, vane_blade_count)

    populate_results(self, self.results)
    invalid = [result for result in self.results if not result.is_valid]
    if invalid:
        self.statusBar().showMessage(invalid[0].validation_messages[0], 8000)
    else:
        self.statusBar().showMessage(f"Calculated {len(self.results)} AP Sets", 5000)


def selected_result(self):
    rows = self.results_table.selectionModel().selectedRows() if self.results_table.selectionModel() else []
    if not rows or not self.results:
        return None
    return self.results[rows[0].row()]


def show_selected_result(self):
    result = self.selected_result()
    if result is None:
        return
    populate_trends(self, result)
    update_summary(self, result)
    plot_trend_bands(self, result)


def build_configuration(self, rpm, models, vane_blade_count):
    equipment = self.equipment_combo.currentData()
    return BuildConfiguration(
        equipment_type=equipment.value,
        sensor_type=self.sensor_combo.currentData().value,
        mounting_method=self.mounting_combo.currentData().value,
        rpm=rpm,
        bearing_models=list(models),
        vane_blade_count=vane_blade_count,
        advanced_settings=self.settings,
        calculation_path=self.path_combo.currentData().value,
    )
