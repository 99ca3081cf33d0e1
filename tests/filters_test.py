"""
Tests for PeakVue HP filter selection and validation
"""
import unittest
import sys
from pathlib import Path

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from calculation.constants import AdvancedCalculationSettings, CalculationConstants, STANDARD_HP_FILTERS_HZ
from calculation.filters import (
    calculate_peakvue_hp_filter, calculate_peakvue_hp_filter_for_rpm,
    calculate_peakvue_hp_filter_unknown_bearing, calculate_gearbox_hp_filter,
    validate_hp_filter_selection, validate_filter_with_sensor_mounting,
    equipment_filter_recommendations, filter_summary,
)
from calculation.models import AnalysisMode, EquipmentType, MountingMethod, SensorType


class TestHPFilterSelection(unittest.TestCase):

    def test_specific_bearing(self):
        # 7.94 x 4 = 31.76 orders = 952.8 Hz, published PeakVue Fmax 1000 Hz
        selection = calculate_peakvue_hp_filter(7.94, 1800)
        self.assertEqual(selection.filter_hz, 1000.0)
        self.assertEqual(selection.filter_type, "High-pass 1000 Hz")
        self.assertIn("1000 Hz", selection.reason)

    def test_specific_bearing_custom_multiplier(self):
        constants = CalculationConstants(peakvue_bpfi_multiplier=6.0)
        # 47.64 orders = 1429.2 Hz, published 2000 Hz
        self.assertEqual(calculate_peakvue_hp_filter(7.94, 1800, constants).filter_hz, 2000.0)

    def test_for_rpm(self):
        self.assertEqual(calculate_peakvue_hp_filter_for_rpm(1800), 500.0)
        self.assertEqual(calculate_peakvue_hp_filter_for_rpm(9000), 2000.0)

    def test_unknown_bearing(self):
        # 30.5 orders at 1800 RPM = 915 Hz
        self.assertEqual(calculate_peakvue_hp_filter_unknown_bearing(1800).filter_hz, 1000.0)
        settings = AdvancedCalculationSettings(advanced_mode_enabled=True, peakvue_rpm_fallback_orders=40.0)
        self.assertEqual(calculate_peakvue_hp_filter_unknown_bearing(1800, settings).filter_hz, 2000.0)
        self.assertEqual(calculate_peakvue_hp_filter_unknown_bearing(600, fallback_orders=30.0).filter_hz, 500.0)

    def test_always_a_standard_filter(self):
        for rpm in (10, 600, 1800, 3600, 12000, 50000):
            self.assertIn(calculate_peakvue_hp_filter_for_rpm(rpm), STANDARD_HP_FILTERS_HZ)
            self.assertIn(calculate_peakvue_hp_filter(5.4, rpm).filter_hz, STANDARD_HP_FILTERS_HZ)

    def test_gearbox(self):
        self.assertEqual(calculate_gearbox_hp_filter([690.0, 1200.0]), 2000.0)
        self.assertEqual(calculate_gearbox_hp_filter([]), 1000.0)


class TestHPFilterValidation(unittest.TestCase):

    def test_confidence_levels(self):
        # PeakVue minimum at 1800 RPM for BPFI 5.0: max(4 x 5 x 30, 300) = 600 Hz
        self.assertEqual(validate_hp_filter_selection(500.0, 5.0, 1800).confidence, "Insufficient")
        self.assertFalse(validate_hp_filter_selection(500.0, 5.0, 1800).is_valid)
        self.assertEqual(validate_hp_filter_selection(1000.0, 5.0, 1800).confidence, "Optimal")
        self.assertEqual(validate_hp_filter_selection(2000.0, 5.0, 1800).confidence, "Good")
        self.assertEqual(validate_hp_filter_selection(5000.0, 5.0, 1800).confidence, "Acceptable")

    def test_normal_mode_uses_normal_multiplier(self):
        # max(7 x 5 x 30, 300) = 1050 Hz
        validation = validate_hp_filter_selection(1000.0, 5.0, 1800, AnalysisMode.NORMAL)
        self.assertFalse(validation.is_valid)
        self.assertIn("Normal", validation.details)

    def test_sensor_and_mounting(self):
        ok, warnings = validate_filter_with_sensor_mounting(1000.0, SensorType.ACCELEROMETER, MountingMethod.STUD)
        self.assertTrue(ok)
        self.assertEqual(warnings, [])

        ok, warnings = validate_filter_with_sensor_mounting(5000.0, SensorType.VELOCITY_PROBE, MountingMethod.MAGNET)
        self.assertFalse(ok)
        self.assertEqual(len(warnings), 3)

    def test_equipment_recommendations(self):
        motor = equipment_filter_recommendations(EquipmentType.MOTOR, 1200)
        self.assertEqual(len(motor), 2)
        self.assertIn("cavitation", equipment_filter_recommendations("pump", 1800)[0])
        self.assertEqual(equipment_filter_recommendations("unknown", 1800),
                         ["Standard HP filter selection based on bearing frequencies"])

    def test_summary(self):
        summary = filter_summary(calculate_peakvue_hp_filter(7.94, 1800), "Optimal")
        self.assertIn("Selected Filter: High-pass 1000 Hz", summary)
        self.assertIn("Confidence: Optimal", summary)


if __name__ == "__main__":
    unittest.main()
