"""
Tests for AP Set assembly
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from utils.logger import Logger
Logger.log_to_file = False

from calculation.ap_set import (
    calculate_ap_set, calculate_shaft_bearing_ap_set, calculate_ap_set_pair, calculate_ap_sets,
    annotate_with_trends,
)
from calculation.constants import CalculationConstants, STANDARD_HP_FILTERS_HZ, STANDARD_LOR_OPTIONS
from calculation.models import (
    AnalysisMode, BearingData, BearingDataError, CalculationPath, EquipmentType, MountingMethod, SensorType,
    generic_bearing,
)

FAG_7307 = BearingData.from_coefficients("FAG 7307", 7.94, 5.06, 2.357, 0.399)


class TestShaftBearingPath(unittest.TestCase):
    """Published baselines for a generic motor at 1800 RPM."""

    def test_generic_motor_normal(self):
        result = calculate_shaft_bearing_ap_set(generic_bearing(EquipmentType.MOTOR), 1800, AnalysisMode.NORMAL)
        self.assertTrue(result.is_valid)
        self.assertEqual(result.fmax, 70.0)
        self.assertEqual(result.lor, 800)
        self.assertAlmostEqual(result.shaft_revolutions, 26.67, places=2)
        self.assertAlmostEqual(result.calculated_fmax_hz, 2100.0)
        self.assertIsNone(result.hp_filter_hz)
        self.assertEqual(result.bearing_model, "Generic Motor Bearing")

    def test_generic_motor_peakvue(self):
        result = calculate_shaft_bearing_ap_set(generic_bearing(EquipmentType.MOTOR), 1800, AnalysisMode.PEAKVUE)
        self.assertEqual(result.fmax, 30.5)
        self.assertEqual(result.lor, 400)
        self.assertIn(result.hp_filter_hz, STANDARD_HP_FILTERS_HZ)
        self.assertGreaterEqual(result.hp_filter_hz, 1800 / 60.0 * 10)
        self.assertTrue(result.bearing_model.endswith(" (PeakVue)"))

    def test_baselines_ignore_custom_constants(self):
        """Per-shaft sizing does not read the tunable constants."""
        constants = CalculationConstants(normal_bpfi_multiplier=8.0, normal_rpm_fallback_orders=80.0)
        pairs = calculate_ap_sets([None], 1800, constants, path=CalculationPath.PER_SHAFT)
        normal, peakvue = pairs[0]
        self.assertEqual((normal.fmax, normal.lor), (70.0, 800))
        self.assertEqual((peakvue.fmax, peakvue.lor), (30.5, 400))

    def test_specific_bearing(self):
        result = calculate_shaft_bearing_ap_set(FAG_7307, 1800, AnalysisMode.NORMAL)
        self.assertEqual(result.fmax, 26.0)
        self.assertEqual(result.lor, 400)
        self.assertEqual(result.validation_messages, ())


class TestDirectPath(unittest.TestCase):

    def test_normal_knob_leaves_generic_peakvue_filter(self):
        default = calculate_ap_set(None, 1800, AnalysisMode.PEAKVUE)
        edited = calculate_ap_set(None, 1800, AnalysisMode.PEAKVUE, CalculationConstants(normal_bpfi_multiplier=8.0))
        self.assertEqual(edited.hp_filter_hz, default.hp_filter_hz)

    def test_peakvue_fallback_sets_generic_filter(self):
        # 40 orders at 1800 RPM is 1200 Hz
        result = calculate_ap_set(None, 1800, AnalysisMode.PEAKVUE,
                                  CalculationConstants(peakvue_rpm_fallback_orders=40.0))
        self.assertIn(result.hp_filter_hz, STANDARD_HP_FILTERS_HZ)
        self.assertGreaterEqual(result.hp_filter_hz, 1200.0)

    def test_scaled_frequencies(self):
        result = calculate_ap_set(FAG_7307, 1800, AnalysisMode.NORMAL)
        self.assertAlmostEqual(result.scaled_bpfi, 238.2, places=1)
        self.assertAlmostEqual(result.scaled_ftf, 11.97, places=2)
        self.assertEqual(result.order_bpfo, 5.06)

    def test_specific_bearing_normal(self):
        # 7.94 x 7 = 55.58 orders = 1667.4 Hz, published 2000 Hz
        result = calculate_ap_set(FAG_7307, 1800, AnalysisMode.NORMAL)
        self.assertAlmostEqual(result.fmax_hz, 2000.0)
        self.assertAlmostEqual(result.calculated_fmax_hz, 1667.4)
        self.assertEqual(result.lor, 3200)
        self.assertLessEqual(result.bin_width_hz, 1.0)
        self.assertEqual(result.validation_messages, ())

    def test_specific_bearing_peakvue(self):
        result = calculate_ap_set(FAG_7307, 1800, AnalysisMode.PEAKVUE)
        self.assertAlmostEqual(result.fmax_hz, 1000.0)
        self.assertEqual(result.peakvue_fmax, result.fmax)
        self.assertEqual(result.lor, 800)
        self.assertEqual(result.hp_filter_hz, 1000.0)

    def test_generic_bearing_normal(self):
        result = calculate_ap_set(None, 1800, AnalysisMode.NORMAL)
        self.assertAlmostEqual(result.calculated_fmax_hz, 2100.0)
        self.assertAlmostEqual(result.fmax_hz, 5000.0)
        self.assertEqual(result.lor, 6400)
        self.assertFalse(result.has_bearing_frequencies)
        self.assertEqual(result.scaled_bpfi, 0.0)

    def test_generic_bearing_peakvue(self):
        result = calculate_ap_set(None, 1800, AnalysisMode.PEAKVUE)
        self.assertAlmostEqual(result.fmax_hz, 1000.0)
        self.assertEqual(result.hp_filter_hz, 1000.0)

    def test_sensor_and_mounting_recorded(self):
        result = calculate_ap_set(FAG_7307, 1800, AnalysisMode.NORMAL,
                                  sensor_type=SensorType.VELOCITY_PROBE, mounting_method=MountingMethod.MAGNET)
        self.assertEqual(result.sensor_type, "Velocity Probe")
        self.assertEqual(result.mounting_method, "Magnetic Mount")

    def test_results_always_use_standard_tables(self):
        rng = np.random.default_rng(21)
        for _ in range(100):
            rpm = float(rng.uniform(60.0, 12000.0))
            bearing = BearingData.from_coefficients(
                "Random", *(float(value) for value in rng.uniform(0.3, 12.0, size=4)))
            for mode in AnalysisMode:
                result = calculate_ap_set(bearing, rpm, mode)
                self.assertTrue(result.is_valid)
                self.assertIn(result.lor, STANDARD_LOR_OPTIONS)
                if mode == AnalysisMode.PEAKVUE:
                    self.assertIn(result.hp_filter_hz, STANDARD_HP_FILTERS_HZ)


class TestInvalidInput(unittest.TestCase):

    def test_invalid_rpm_does_not_raise(self):
        for rpm in (0, -100, 75000, float('inf')):
            for calculate in (calculate_ap_set, calculate_shaft_bearing_ap_set):
                result = calculate(FAG_7307, rpm, AnalysisMode.NORMAL)
                self.assertFalse(result.is_valid)
                self.assertEqual(result.lor, 0)
                self.assertEqual(len(result.validation_messages), 1)

    def test_invalid_result_has_no_trends(self):
        normal, peakvue = calculate_ap_set_pair(FAG_7307, 0)
        self.assertEqual(normal.trend_recommendations, ())
        self.assertEqual(peakvue.trend_recommendations, ())

    def test_partial_bearing_rejected_at_boundary(self):
        with self.assertRaises(BearingDataError):
            BearingData.from_coefficients("Broken", bpfi=5.0, bpfo=3.0)
        with self.assertRaises(BearingDataError):
            BearingData.from_coefficients("Negative", -1.0, 3.0, 2.0, 0.4)


class TestBatchCalculation(unittest.TestCase):

    def test_pair(self):
        normal, peakvue = calculate_ap_set_pair(FAG_7307, 1800, equipment_type=EquipmentType.MOTOR)
        self.assertEqual(normal.analysis_mode, AnalysisMode.NORMAL)
        self.assertEqual(peakvue.analysis_mode, AnalysisMode.PEAKVUE)
        self.assertTrue(normal.trend_recommendations)
        self.assertTrue(peakvue.trend_recommendations)

    def test_pair_without_trends(self):
        normal, _ = calculate_ap_set_pair(FAG_7307, 1800, include_trends=False)
        self.assertEqual(normal.trend_recommendations, ())
        self.assertTrue(annotate_with_trends(normal).trend_recommendations)

    def test_batch_preserves_order(self):
        bearings = [FAG_7307, None, BearingData.from_coefficients("SKF 6205", 5.415, 3.585, 2.357, 0.398)]
        pairs = calculate_ap_sets(bearings, 1800, max_workers=3)
        self.assertEqual([pair[0].bearing_model for pair in pairs],
                         ["FAG 7307", "Generic Bearing", "SKF 6205"])

    def test_batch_matches_single_calculation(self):
        constants = CalculationConstants(normal_bpfi_multiplier=9.0)
        pairs = calculate_ap_sets([FAG_7307], 1800, constants)
        self.assertEqual(pairs[0][0].fmax, calculate_ap_set(FAG_7307, 1800, AnalysisMode.NORMAL, constants).fmax)

    def test_empty_batch(self):
        self.assertEqual(calculate_ap_sets([], 1800), [])

    def test_per_shaft_batch_generic_motor(self):
        pairs = calculate_ap_sets([generic_bearing(EquipmentType.MOTOR), FAG_7307], 1800,
                                  equipment_type=EquipmentType.MOTOR, path=CalculationPath.PER_SHAFT)
        normal, peakvue = pairs[0]

        self.assertEqual(normal.fmax, 70.0)
        self.assertEqual(normal.lor, 800)
        self.assertAlmostEqual(normal.shaft_revolutions, 26.67, places=2)
        self.assertAlmostEqual(normal.calculated_fmax_hz, 2100.0)

        self.assertEqual(peakvue.fmax, 30.5)
        self.assertEqual(peakvue.lor, 400)
        self.assertIn(peakvue.hp_filter_hz, STANDARD_HP_FILTERS_HZ)
        self.assertEqual(peakvue.bearing_model, "Generic Motor Bearing (PeakVue)")
        self.assertTrue(normal.trend_recommendations)

        self.assertEqual(pairs[1][0].fmax, 26.0)

    def test_pair_path_selection(self):
        direct, _ = calculate_ap_set_pair(None, 1800)
        per_shaft, _ = calculate_ap_set_pair(None, 1800, path=CalculationPath.PER_SHAFT)
        self.assertEqual(direct.lor, 6400)
        self.assertEqual(per_shaft.lor, 800)


if __name__ == "__main__":
    unittest.main()
