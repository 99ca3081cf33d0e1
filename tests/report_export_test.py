"""
Tests for report export
"""
import unittest
import sys
import os
import json
import tempfile
from pathlib import Path

import pandas as pd

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from utils.logger import Logger
Logger.log_to_file = False

from calculation.ap_set import calculate_ap_set_pair, calculate_shaft_bearing_ap_set
from calculation.models import AnalysisMode, BearingData, EquipmentType
from data.builds import BuildConfiguration, SavedBuild
from data.report_export import (
    result_to_clipboard_text, export_build_as_text, export_build_as_json,
    generate_html_report, save_html_report, results_to_dataframe, trends_to_dataframe,
    export_results_csv, RESULT_COLUMNS, MAX_REPORT_TRENDS,
)

FAG_7307 = BearingData.from_coefficients("FAG 7307", 7.94, 5.06, 2.357, 0.399)


class TestTextExport(unittest.TestCase):

    def setUp(self):
        self.normal, self.peakvue = calculate_ap_set_pair(FAG_7307, 1800, equipment_type=EquipmentType.MOTOR)
        self.build = SavedBuild(
            name="Motor <A>",
            configuration=BuildConfiguration(equipment_type="Motor", rpm=1800, bearing_models=["FAG 7307"]),
            results=[self.normal, self.peakvue],
        )

    def test_clipboard_text(self):
        text = result_to_clipboard_text(self.normal)
        self.assertTrue(text.startswith("AP Set Results\n"))
        self.assertIn("Bearing: FAG 7307", text)
        self.assertIn("Mode: Normal", text)
        self.assertIn("LOR: 3200", text)
        self.assertNotIn("HP Filter", text)
        self.assertLessEqual(text.count("\n- "), MAX_REPORT_TRENDS)

    def test_clipboard_text_peakvue(self):
        self.assertIn("PeakVue HP Filter: 1000 Hz", result_to_clipboard_text(self.peakvue))

    def test_clipboard_text_with_warning(self):
        result = calculate_shaft_bearing_ap_set(None, 1800, AnalysisMode.NORMAL)
        self.assertIn("Warning: Shaft revolutions (11.4) < 15", result_to_clipboard_text(result))

    def test_build_text(self):
        text = export_build_as_text(self.build)
        self.assertIn("AP Set Planner Build Report", text)
        self.assertIn("Build Name: Motor <A>", text)
        self.assertIn("Operating Speed: 1800 RPM", text)
        self.assertEqual(text.count("AP Set Results"), 2)

    def test_build_json(self):
        data = json.loads(export_build_as_json(self.build))
        self.assertEqual(data['name'], "Motor <A>")
        self.assertEqual(len(data['results']), 2)
        self.assertEqual(data['results'][1]['analysis_mode'], "PeakVue")


class TestHtmlReport(unittest.TestCase):

    def setUp(self):
        configuration = BuildConfiguration(equipment_type="Motor", rpm=1800)
        generic_normal = calculate_shaft_bearing_ap_set(None, 1800, AnalysisMode.NORMAL)
        generic_peakvue = calculate_shaft_bearing_ap_set(None, 1800, AnalysisMode.PEAKVUE)
        normal, peakvue = calculate_ap_set_pair(FAG_7307, 1800)
        # PeakVue listed first to check the Normal-before-PeakVue ordering
        self.html = generate_html_report([generic_peakvue, generic_normal, peakvue, normal],
                                         configuration, build_name="Line <3>")

    def test_structure(self):
        self.assertTrue(self.html.startswith("<!DOCTYPE html>"))
        self.assertIn("AP Set Report: Line &lt;3&gt;", self.html)
        self.assertNotIn("Line <3>", self.html)

    def test_grouped_by_bearing(self):
        self.assertEqual(self.html.count("<h3>Generic Bearing</h3>"), 1)
        self.assertEqual(self.html.count("<h3>FAG 7307</h3>"), 1)
        self.assertLess(self.html.index("<h3>Generic Bearing</h3>"), self.html.index("<h3>FAG 7307</h3>"))

    def test_normal_before_peakvue(self):
        section = self.html[self.html.index("<h3>FAG 7307</h3>"):]
        self.assertLess(section.index("Normal AP Set"), section.index("PeakVue AP Set"))

    def test_bearing_frequencies(self):
        self.assertIn("Bearing Fault Frequencies", self.html)
        self.assertIn("238.2 Hz", self.html)

    def test_save(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "report.html")
            save_html_report(self.html, path)
            with open(path, 'r', encoding='utf-8') as f:
                self.assertEqual(f.read(), self.html)

    def test_save_failure(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(IOError):
                save_html_report(self.html, os.path.join(temp_dir, "missing", "report.html"))


class TestDataFrames(unittest.TestCase):

    def setUp(self):
        self.results = list(calculate_ap_set_pair(FAG_7307, 1800)) + list(calculate_ap_set_pair(None, 0))

    def test_results_dataframe(self):
        frame = results_to_dataframe(self.results)
        self.assertEqual(list(frame.columns), RESULT_COLUMNS)
        self.assertEqual(len(frame), 4)
        self.assertEqual(frame['LOR'].tolist(), [3200, 800, 0, 0])
        self.assertEqual(frame['Valid'].tolist(), [True, True, False, False])
        self.assertAlmostEqual(frame.loc[0, 'BPFI (Hz)'], 238.2)

    def test_trends_dataframe(self):
        frame = trends_to_dataframe(self.results[0].trend_recommendations)
        self.assertEqual(len(frame), len(self.results[0].trend_recommendations))
        self.assertIn("BPFI Band", frame['Trend'].tolist())
        self.assertEqual(frame.loc[0, 'Priority'], "Critical")

    def test_csv_export(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "results.csv")
            export_results_csv(self.results, path)
            frame = pd.read_csv(path)
        self.assertEqual(list(frame.columns), RESULT_COLUMNS)
        self.assertEqual(frame['Bearing'].tolist()[:2], ["FAG 7307", "FAG 7307"])


if __name__ == "__main__":
    unittest.main()
