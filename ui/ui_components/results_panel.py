"""
Setup and update functions for the results area of the CalculatorWindow.
"""
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QBrush
from PySide6.QtWidgets import (
    QVBoxLayout, QTabWidget, QTableWidget, QTableWidgetItem, QHeaderView,
    QAbstractItemView, QLabel, QWidget
)

from calculation.formulas import averaging_recommendation
from calculation.models import AnalysisMode
from .band_plot import setup_band_plot

RESULT_HEADERS = ["Bearing", "Mode", "Fmax (orders)", "Fmax (Hz)", "LOR",
                  "Bin Width (Hz)", "Shaft Revs", "HP Filter (Hz)", "Messages"]
TREND_HEADERS = ["Trend", "Priority", "Range (orders)", "Range (Hz)", "Fault Association", "Status"]

PRIORITY_COLORS = {
    "red": QColor(220, 53, 69),
    "orange": QColor(253, 126, 20),
    "blue": QColor(13, 110, 253),
    "gray": QColor(108, 117, 125),
}


def setup_results_panel(window):
    """Results table on top, trends table and band chart in tabs below."""
    layout = QVBoxLayout(window.results_panel)

    window.results_table = QTableWidget(0, len(RESULT_HEADERS))
    window.results_table.setHorizontalHeaderLabels(RESULT_HEADERS)
    window.results_table.setSelectionBehavior(QAbstractItemView.SelectRows)
    window.results_table.setSelectionMode(QAbstractItemView.SingleSelection)
    window.results_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    window.results_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
    window.results_table.horizontalHeader().setStretchLastSection(True)
    window.results_table.itemSelectionChanged.connect(window.show_selected_result)
    layout.addWidget(window.results_table, 2)

    window.summary_label = QLabel("Enter a speed and press Calculate.")
    window.summary_label.setWordWrap(True)
    layout.addWidget(window.summary_label)

    tabs = QTabWidget()

    window.trends_table = QTableWidget(0, len(TREND_HEADERS))
    window.trends_table.setHorizontalHeaderLabels(TREND_HEADERS)
    window.trends_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    window.trends_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
    window.trends_table.horizontalHeader().setStretchLastSection(True)
    tabs.addTab(window.trends_table, "Trends")

    chart_tab = QWidget()
    setup_band_plot(window, chart_tab)
    tabs.addTab(chart_tab, "Band Chart")

    layout.addWidget(tabs, 3)


def _item(text, color=None):
    item = QTableWidgetItem("" if text is None else str(text))
    if color is not None:
        item.setForeground(QBrush(color))
    return item


def populate_results(window, results):
    """Fill the results table; invalid results are shown in red."""
    table = window.results_table
    table.setRowCount(0)

    for row, result in enumerate(results):
        table.insertRow(row)
        color = None if result.is_valid else QColor(220, 53, 69)
        bin_width = result.bin_width_hz
        values = [
            result.bearing_model,
            result.analysis_mode.value,
            f"{result.fmax:.2f}",
            f"{result.fmax_hz:.0f}",
            result.lor,
            f"{bin_width:.3f}" if bin_width is not None else "",
            f"{result.shaft_revolutions:.1f}",
            f"{result.hp_filter_hz:.0f}" if result.hp_filter_hz is not None else "",
            "; ".join(result.validation_messages),
        ]
        for column, value in enumerate(values):
            table.setItem(row, column, _item(value, color))

    if results:
        table.selectRow(0)


def populate_trends(window, result):
    """Fill the trends table; non-recommended rows are greyed out."""
    table = window.trends_table
    table.setRowCount(0)

    for row, trend in enumerate(result.trend_recommendations):
        table.insertRow(row)
        if trend.is_recommended:
            status = "Recommended"
            priority_color = PRIORITY_COLORS[trend.priority.color]
            text_color = None
        elif not trend.is_within_fmax:
            status = "Exceeds Fmax"
            priority_color = text_color = QColor(160, 160, 160)
        else:
            status = "Not resolvable at this LOR"
            priority_color = text_color = QColor(160, 160, 160)

        table.setItem(row, 0, _item(trend.name, text_color))
        table.setItem(row, 1, _item(trend.priority.label, priority_color))
        table.setItem(row, 2, _item(trend.frequency_range_orders, text_color))
        table.setItem(row, 3, _item(trend.frequency_range_hz, text_color))
        table.setItem(row, 4, _item(trend.fault_association, text_color))
        table.setItem(row, 5, _item(status, text_color))
        table.item(row, 0).setToolTip(trend.description)


def update_summary(window, result):
    """One-line summary of the selected result with averaging advice."""
    if not result.is_valid:
        window.summary_label.setText("<b>Invalid input:</b> " + "; ".join(result.validation_messages))
        return

    averaging = averaging_recommendation(result.rpm)
    text = (f"<b>{result.bearing_model}</b> ({result.analysis_mode.value}): "
            f"Fmax {result.fmax:.2f} orders / {result.fmax_hz:.0f} Hz, LOR {result.lor}, "
            f"{result.shaft_revolutions:.1f} shaft revolutions. "
            f"Averages: {averaging.recommended} ({averaging.reason}).")
    if result.analysis_mode == AnalysisMode.PEAKVUE and result.hp_filter_hz is not None:
        text += f" HP filter {result.hp_filter_hz:.0f} Hz."
    window.summary_label.setText(text)
    window.summary_label.setTextFormat(Qt.RichText)
