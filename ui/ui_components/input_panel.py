"""
Setup functions for the input panel of the CalculatorWindow.
"""
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox, QPushButton, QLabel,
    QComboBox, QLineEdit, QSpinBox, QDoubleSpinBox, QCheckBox, QListWidget, QCompleter
)

from calculation.constants import MULTIPLIER_RANGES, INDUSTRY_STANDARDS
from calculation.models import CalculationPath, EquipmentType, SensorType, MountingMethod

# (parameter key, settings attribute, label, step)
ADVANCED_FIELDS = (
    ('normalBPFI', 'normal_bpfi_multiplier', "Normal BPFI multiplier", 0.5),
    ('normalGMF', 'normal_gmf_multiplier', "Normal GMF multiplier", 0.5),
    ('normalRPMFallback', 'normal_rpm_fallback_orders', "Normal RPM fallback (orders)", 5.0),
    ('peakVueBPFI', 'peakvue_bpfi_multiplier', "PeakVue BPFI multiplier", 0.5),
    ('peakVueRPMFallback', 'peakvue_rpm_fallback_orders', "PeakVue RPM fallback (orders)", 1.0),
)


def setup_input_panel(window):
    """Sets up the entire input panel with all its components."""
    layout = QVBoxLayout(window.input_panel)

    setup_equipment_section(window, layout)
    setup_bearing_section(window, layout)
    setup_advanced_section(window, layout)
    setup_button_section(window, layout)

    layout.addStretch()


def setup_equipment_section(window, layout):
    """Equipment, speed and sensor inputs."""
    group = QGroupBox("Equipment")
    form = QFormLayout(group)

    window.equipment_combo = QComboBox()
    for equipment in EquipmentType:
        window.equipment_combo.addItem(equipment.value, equipment)
    window.equipment_combo.currentIndexChanged.connect(window.update_vane_blade_state)
    form.addRow("Equipment type:", window.equipment_combo)

    window.path_combo = QComboBox()
    for path in CalculationPath:
        window.path_combo.addItem(path.value, path)
    window.path_combo.setToolTip("Per-shaft uses the published baselines; direct uses the advanced multipliers")
    form.addRow("Fmax sizing:", window.path_combo)

    window.rpm_edit = QLineEdit()
    window.rpm_edit.setPlaceholderText("e.g. 1800")
    window.rpm_edit.setToolTip("Running speed in RPM (0 < RPM ≤ 50000)")
    window.rpm_edit.returnPressed.connect(window.run_calculation)
    form.addRow("Speed (RPM):", window.rpm_edit)

    window.sensor_combo = QComboBox()
    for sensor in SensorType:
        window.sensor_combo.addItem(sensor.value, sensor)
    form.addRow("Sensor:", window.sensor_combo)

    window.mounting_combo = QComboBox()
    for mounting in MountingMethod:
        window.mounting_combo.addItem(f"{mounting.value} ({mounting.reliability})", mounting)
    form.addRow("Mounting:", window.mounting_combo)

    window.vane_blade_spin = QSpinBox()
    window.vane_blade_spin.setRange(0, 64)
    window.vane_blade_spin.setSpecialValueText("Unknown")
    window.vane_blade_spin.setToolTip("Number of fan blades or pump vanes (adds a pass-frequency band)")
    window.vane_blade_spin.setEnabled(False)
    form.addRow("Vanes/Blades:", window.vane_blade_spin)

    layout.addWidget(group)


def setup_bearing_section(window, layout):
    """Bearing model entry with completion from the bearing database."""
    group = QGroupBox("Bearings")
    group_layout = QVBoxLayout(group)

    entry_row = QHBoxLayout()
    window.bearing_edit = QLineEdit()
    window.bearing_edit.setPlaceholderText("Bearing model, e.g. SKF 6205 (empty = generic)")
    completer = QCompleter(window.bearing_database.all_models(), window.bearing_edit)
    completer.setCaseSensitivity(Qt.CaseInsensitive)
    completer.setFilterMode(Qt.MatchContains)
    window.bearing_edit.setCompleter(completer)
    window.bearing_edit.returnPressed.connect(window.add_bearing)
    entry_row.addWidget(window.bearing_edit)

    add_btn = QPushButton("Add")
    add_btn.setToolTip("Add the bearing to the calculation (empty adds a generic bearing)")
    add_btn.clicked.connect(window.add_bearing)
    entry_row.addWidget(add_btn)
    group_layout.addLayout(entry_row)

    window.bearing_list = QListWidget()
    window.bearing_list.setToolTip("Bearings to calculate; none means one generic bearing")
    group_layout.addWidget(window.bearing_list)

    remove_btn = QPushButton("Remove Selected")
    remove_btn.clicked.connect(window.remove_selected_bearing)
    group_layout.addWidget(remove_btn)

    stats = window.bearing_database.stats()
    window.bearing_stats_label = QLabel(
        f"{stats['total']} bearings, {stats['manufacturers']} manufacturers")
    window.bearing_stats_label.setStyleSheet("color: gray;")
    group_layout.addWidget(window.bearing_stats_label)

    layout.addWidget(group)


def setup_advanced_section(window, layout):
    """Advanced mode: the five tunable multipliers with range warnings."""
    window.advanced_group = QGroupBox("Advanced Mode")
    window.advanced_group.setCheckable(True)
    window.advanced_group.setChecked(window.settings.advanced_mode_enabled)
    window.advanced_group.setToolTip("Override the industry-standard multipliers (direct multiplier sizing only)")
    window.advanced_group.toggled.connect(window.update_multiplier_warnings)
    form = QFormLayout(window.advanced_group)

    window.multiplier_spins = {}
    window.multiplier_warnings = {}
    for parameter, attribute, label, step in ADVANCED_FIELDS:
        low, high = MULTIPLIER_RANGES[parameter]
        standard = INDUSTRY_STANDARDS[parameter]

        spin = QDoubleSpinBox()
        spin.setDecimals(2)
        spin.setRange(0.1, high * 3)
        spin.setSingleStep(step)
        spin.setValue(getattr(window.settings, attribute))
        spin.setToolTip(f"Standard {standard['standard']:g} ({standard['range']}); {standard['sources']}")
        spin.valueChanged.connect(window.update_multiplier_warnings)

        warning = QLabel("")
        warning.setStyleSheet("color: #cc7a00;")

        row = QVBoxLayout()
        row.addWidget(spin)
        row.addWidget(warning)
        form.addRow(f"{label}:", row)

        window.multiplier_spins[parameter] = spin
        window.multiplier_warnings[parameter] = warning

    reset_btn = QPushButton("Reset to Standard")
    reset_btn.clicked.connect(window.reset_advanced_settings)
    form.addRow(reset_btn)

    layout.addWidget(window.advanced_group)


def setup_button_section(window, layout):
    """Calculate, build and export buttons."""
    calculate_btn = QPushButton("Calculate AP Sets")
    calculate_btn.setToolTip("Calculate Normal and PeakVue AP Sets for all bearings")
    calculate_btn.clicked.connect(window.run_calculation)
    layout.addWidget(calculate_btn)

    build_row = QHBoxLayout()
    save_btn = QPushButton("Save Build")
    save_btn.clicked.connect(window.save_build)
    build_row.addWidget(save_btn)
    load_btn = QPushButton("Load Build")
    load_btn.clicked.connect(window.load_build)
    build_row.addWidget(load_btn)
    layout.addLayout(build_row)

    export_row = QHBoxLayout()
    for text, handler, tooltip in (
            ("HTML", window.export_html_report, "Save an HTML report"),
            ("Text", window.export_text_report, "Save a plain-text report"),
            ("JSON", window.export_json_report, "Save the build as JSON"),
            ("CSV", window.export_csv_report, "Save the results table as CSV")):
        btn = QPushButton(text)
        btn.setToolTip(tooltip)
        btn.clicked.connect(handler)
        export_row.addWidget(btn)
    layout.addLayout(export_row)

    misc_row = QHBoxLayout()
    copy_btn = QPushButton("Copy Result")
    copy_btn.setToolTip("Copy the selected result to the clipboard")
    copy_btn.clicked.connect(window.copy_selected_result)
    misc_row.addWidget(copy_btn)

    chart_btn = QPushButton("Export Chart")
    chart_btn.setToolTip("Save the band chart as an image")
    chart_btn.clicked.connect(window.export_band_chart)
    misc_row.addWidget(chart_btn)
    layout.addLayout(misc_row)

    window.log_window_chk = QCheckBox("Show Log Window")
    window.log_window_chk.toggled.connect(window.toggle_log_window)
    layout.addWidget(window.log_window_chk)
