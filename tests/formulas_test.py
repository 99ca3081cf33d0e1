"""
Tests for the AP Set formulas
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

from calculation.constants import (
    CalculationConstants, DEFAULT_CONSTANTS, STANDARD_LOR_OPTIONS,
    STANDARD_FMAX_OPTIONS_HZ, PEAKVUE_FMAX_OPTIONS_HZ, STANDARD_HP_FILTERS_HZ,
)
from calculation.formulas import (
    orders_to_hz, hz_to_orders, shaft_revolutions, acquisition_time, total_acquisition_time,
    calculate_fmax, calculate_shaft_bearing_fmax, calculate_gmf, calculate_gmf_fmax,
    recommend_standard_fmax, recommend_standard_fmax_hz, calculate_required_lor,
    select_standard_lor, select_standard_lor_with_validation, select_peakvue_lor,
    baseline_lor, validate_shaft_revolutions, select_standard_hp_filter, validate_rpm,
    resolution_analysis, averaging_recommendation,
)
from calculation.models import AnalysisMode, APSetResult, BearingData


def specific_bearing(bpfi=7.94, bpfo=5.06, bsf=2.357, ftf=0.399):
    return BearingData.from_coefficients("FAG 7307", bpfi, bpfo, bsf, ftf)


class TestConversions(unittest.TestCase):

    def test_orders_and_hz(self):
        self.assertAlmostEqual(orders_to_hz(70.0, 1800), 2100.0)
        self.assertAlmostEqual(hz_to_orders(2100.0, 1800), 70.0)

    def test_shaft_revolutions(self):
        self.assertAlmostEqual(shaft_revolutions(800, 1800), 26.67, places=2)
        self.assertAlmostEqual(shaft_revolutions(1600, 3600), 26.67, places=2)

    def test_acquisition_time(self):
        # 800 lines over 2100 Hz
        self.assertAlmostEqual(acquisition_time(800, 70.0, 1800), 800 / 2100.0)
        self.assertAlmostEqual(total_acquisition_time(800, 100.0, 4), 32.0)


class TestFmax(unittest.TestCase):

    def test_bearing_based_fmax(self):
        bearing = specific_bearing()
        self.assertAlmostEqual(calculate_fmax(AnalysisMode.NORMAL, bearing), 7.94 * 7.0)
        self.assertAlmostEqual(calculate_fmax(AnalysisMode.PEAKVUE, bearing), 7.94 * 4.0)

    def test_fallback_fmax(self):
        self.assertEqual(calculate_fmax(AnalysisMode.NORMAL, None), 70.0)
        self.assertEqual(calculate_fmax(AnalysisMode.PEAKVUE, BearingData("Generic")), 30.0)

    def test_custom_constants(self):
        constants = CalculationConstants(normal_bpfi_multiplier=10.0, peakvue_rpm_fallback_orders=35.0)
        self.assertAlmostEqual(calculate_fmax(AnalysisMode.NORMAL, specific_bearing(), constants), 79.4)
        self.assertEqual(calculate_fmax(AnalysisMode.PEAKVUE, None, constants), 35.0)

    def test_fallback_exclusivity(self):
        """Bearing-present input never yields the fallback and vice versa."""
        rng = np.random.default_rng(7)
        for _ in range(200):
            constants = CalculationConstants(
                normal_bpfi_multiplier=float(rng.uniform(4, 15)),
                peakvue_bpfi_multiplier=float(rng.uniform(3, 6)),
                normal_rpm_fallback_orders=float(rng.uniform(50, 100)),
                peakvue_rpm_fallback_orders=float(rng.uniform(25, 40)),
            )
            mode = AnalysisMode.NORMAL if rng.random() < 0.5 else AnalysisMode.PEAKVUE
            fallback = (constants.normal_rpm_fallback_orders if mode == AnalysisMode.NORMAL
                        else constants.peakvue_rpm_fallback_orders)
            multiplier = (constants.normal_bpfi_multiplier if mode == AnalysisMode.NORMAL
                          else constants.peakvue_bpfi_multiplier)

            if rng.random() < 0.5:
                bpfi = float(rng.uniform(2.0, 12.0))
                bearing = specific_bearing(bpfi=bpfi)
                fmax = calculate_fmax(mode, bearing, constants)
                self.assertEqual(fmax, bpfi * multiplier)
            else:
                fmax = calculate_fmax(mode, BearingData("Generic"), constants)
                self.assertEqual(fmax, fallback)

    def test_shaft_bearing_fmax(self):
        bearing = specific_bearing()
        # ceil(7.94 x 3.25) and ceil(7.94 x 1.25)
        self.assertEqual(calculate_shaft_bearing_fmax(AnalysisMode.NORMAL, bearing), 26.0)
        self.assertEqual(calculate_shaft_bearing_fmax(AnalysisMode.PEAKVUE, bearing), 10.0)
        self.assertEqual(calculate_shaft_bearing_fmax(AnalysisMode.NORMAL, None), 70.0)
        self.assertEqual(calculate_shaft_bearing_fmax(AnalysisMode.PEAKVUE, None), 30.5)

    def test_shaft_bearing_fmax_is_capped(self):
        bearing = specific_bearing(bpfi=100.0, bpfo=90.0)
        self.assertEqual(calculate_shaft_bearing_fmax(AnalysisMode.NORMAL, bearing), 200.0)
        self.assertEqual(calculate_shaft_bearing_fmax(AnalysisMode.PEAKVUE, bearing), 100.0)

    def test_gmf(self):
        self.assertAlmostEqual(calculate_gmf(1800, 23), 690.0)
        self.assertAlmostEqual(calculate_gmf_fmax(690.0), 690.0 * 3.5)
        self.assertAlmostEqual(calculate_gmf_fmax(690.0, AnalysisMode.PEAKVUE), 690.0)


class TestStandardFmax(unittest.TestCase):

    def test_rounds_up_to_published_option(self):
        self.assertEqual(recommend_standard_fmax_hz(70.0, 1800, AnalysisMode.NORMAL), 5000.0)
        self.assertEqual(recommend_standard_fmax_hz(30.0, 1800, AnalysisMode.PEAKVUE), 1000.0)
        self.assertAlmostEqual(recommend_standard_fmax(70.0, 1800, AnalysisMode.NORMAL), 5000.0 / 30.0)

    def test_caps_at_mode_maximum(self):
        self.assertEqual(recommend_standard_fmax_hz(1000.0, 3600, AnalysisMode.NORMAL), 20000.0)
        self.assertEqual(recommend_standard_fmax_hz(1000.0, 3600, AnalysisMode.PEAKVUE), 5000.0)

    def test_always_a_published_option(self):
        rng = np.random.default_rng(11)
        for _ in range(300):
            rpm = float(rng.uniform(1.0, 50000.0))
            calculated = float(rng.uniform(0.5, 400.0))
            for mode, options in ((AnalysisMode.NORMAL, STANDARD_FMAX_OPTIONS_HZ),
                                  (AnalysisMode.PEAKVUE, PEAKVUE_FMAX_OPTIONS_HZ)):
                self.assertIn(recommend_standard_fmax_hz(calculated, rpm, mode), options)

    def test_idempotent(self):
        first = recommend_standard_fmax(55.58, 1800, AnalysisMode.NORMAL)
        second = recommend_standard_fmax(55.58, 1800, AnalysisMode.NORMAL)
        self.assertEqual(first, second)
        self.assertEqual(select_standard_lor_with_validation(1000, 66.7, 1800),
                         select_standard_lor_with_validation(1000, 66.7, 1800))


class TestLinesOfResolution(unittest.TestCase):

    def test_required_lor(self):
        self.assertEqual(calculate_required_lor(70.0), 1050)
        self.assertEqual(calculate_required_lor(30.5), 458)

    def test_select_standard_lor(self):
        self.assertEqual(select_standard_lor(1), 100)
        self.assertEqual(select_standard_lor(800), 800)
        self.assertEqual(select_standard_lor(1050), 1600)
        self.assertEqual(select_standard_lor(50000), 12800)

    def test_walks_up_for_bin_width(self):
        # 5000 Hz at 1800 RPM: 3200 lines gives 1.56 Hz bins, 6400 gives 0.78 Hz
        lor, warning = select_standard_lor_with_validation(2500, 5000.0 / 30.0, 1800)
        self.assertEqual(lor, 6400)
        self.assertIsNone(warning)

    def test_warns_at_top_of_table(self):
        lor, warning = select_standard_lor_with_validation(100000, 20000.0 / 0.5, 30)
        self.assertEqual(lor, 12800)
        self.assertIn("Shaft revolutions", warning)
        self.assertIn("Bin width", warning)

    def test_monotonic_and_sufficient(self):
        """Final LOR is never below the raw pick; revolutions hold unless at the top."""
        rng = np.random.default_rng(3)
        for _ in range(300):
            rpm = float(rng.uniform(10.0, 50000.0))
            fmax = float(rng.uniform(1.0, 2000.0))
            required = calculate_required_lor(fmax)
            lor, warning = select_standard_lor_with_validation(required, fmax, rpm)

            self.assertIn(lor, STANDARD_LOR_OPTIONS)
            self.assertGreaterEqual(lor, select_standard_lor(required))
            if lor / fmax < 15.0:
                self.assertEqual(lor, 12800)
                self.assertIsNotNone(warning)

    def test_unreachable_revolutions_end_at_top_of_table(self):
        # 1000 orders needs 15000 lines: no standard LOR reaches 15 revolutions
        lor, warning = select_standard_lor_with_validation(100, 1000.0, 60)
        self.assertEqual(lor, 12800)
        self.assertEqual(warning, "Shaft revolutions (12.8) < 15")

        lor, warning = select_peakvue_lor(100, 1000.0)
        self.assertEqual(lor, 12800)
        self.assertEqual(warning, "Shaft revolutions (12.8) < 15")

    def test_low_required_lor_still_sufficient(self):
        """Any raw requirement ends at 15 revolutions or at the table top."""
        rng = np.random.default_rng(5)
        for _ in range(200):
            fmax = float(rng.uniform(1.0, 2000.0))
            required = int(rng.integers(1, 20000))
            lor, warning = select_standard_lor_with_validation(required, fmax, float(rng.uniform(10.0, 50000.0)))
            if lor / fmax < 15.0:
                self.assertEqual(lor, 12800)
                self.assertIsNotNone(warning)

    def test_peakvue_lor_ignores_bin_width(self):
        lor, warning = select_peakvue_lor(500, 5000.0 / 30.0)
        self.assertEqual(lor, 3200)
        self.assertIsNone(warning)

    def test_baseline_lor(self):
        self.assertEqual(baseline_lor(70.0), 800)
        self.assertEqual(baseline_lor(30.5), 400)
        self.assertEqual(baseline_lor(26.0), 400)

    def test_validate_shaft_revolutions(self):
        ok, revolutions = validate_shaft_revolutions(70.0, 800)
        self.assertFalse(ok)
        self.assertAlmostEqual(revolutions, 800 / 70.0)
        self.assertTrue(validate_shaft_revolutions(20.0, 400)[0])


class TestFiltersAndValidation(unittest.TestCase):

    def test_select_standard_hp_filter(self):
        self.assertEqual(select_standard_hp_filter(300.0), 500.0)
        self.assertEqual(select_standard_hp_filter(1000.0), 1000.0)
        self.assertEqual(select_standard_hp_filter(1e6), STANDARD_HP_FILTERS_HZ[-1])

    def test_validate_rpm(self):
        self.assertEqual(validate_rpm(1800), [])
        self.assertEqual(validate_rpm("1800"), [])
        self.assertEqual(len(validate_rpm(0)), 1)
        self.assertEqual(len(validate_rpm(-5)), 1)
        self.assertEqual(len(validate_rpm(60000)), 1)
        self.assertEqual(len(validate_rpm(float('nan'))), 1)
        self.assertEqual(len(validate_rpm("fast")), 1)

    def test_resolution_analysis(self):
        result = APSetResult(rpm=1800, analysis_mode=AnalysisMode.NORMAL, bearing_model="X",
                             fmax=5000.0 / 30.0, lor=6400, shaft_revolutions=213.3)
        analysis = resolution_analysis(result)
        self.assertAlmostEqual(analysis.fmax_hz, 5000.0)
        self.assertAlmostEqual(analysis.current_resolution, 0.78125)
        self.assertTrue(analysis.is_resolution_valid)

    def test_averaging_recommendation(self):
        for rpm in (300, 1200, 3600):
            advice = averaging_recommendation(rpm)
            self.assertEqual(advice.recommended, 4)
            self.assertEqual(advice.alternatives, (2, 6))
        self.assertIn("Lower RPM", averaging_recommendation(300).reason)
        self.assertIn("High RPM", averaging_recommendation(3600).reason)


if __name__ == "__main__":
    unittest.main()
