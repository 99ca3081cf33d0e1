"""
Band chart for the CalculatorWindow.

Draws the frequency bands of the selected result's trend recommendations as
horizontal bars against the Fmax line, so the technician can see which bands
fit within Fmax and which were excluded.
"""
import os

import numpy as np
import pyqtgraph as pg

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QVBoxLayout, QFileDialog, QMessageBox

from utils.logger import Logger

PRIORITY_BRUSHES = {
    "red": (220, 53, 69, 200),
    "orange": (253, 126, 20, 200),
    "blue": (13, 110, 253, 200),
    "gray": (108, 117, 125, 200),
}
EXCLUDED_BRUSH = (160, 160, 160, 90)


def setup_band_plot(window, container):
    """Creates the pyqtgraph plot widget inside ``container``."""
    layout = QVBoxLayout(container)

    window.band_plot = pg.PlotWidget()
    window.band_plot.setBackground('w')
    window.band_plot.showGrid(x=True, y=False)
    window.band_plot.setLabel('bottom', "Frequency", units="Hz")
    window.band_plot.getAxis('left').setTicks([[]])
    window.band_plot.setMouseEnabled(x=True, y=False)
    layout.addWidget(window.band_plot)


def band_arrays(result):
    """
    Start, width and recommended flag (as numpy arrays) of the result's bands.

    Returns:
        tuple: (names, starts_hz, widths_hz, recommended, colors)
    """
    running_speed_hz = result.rpm / 60.0
    bands = [trend for trend in result.trend_recommendations if trend.band_orders is not None]

    names = [trend.name for trend in bands]
    orders = np.array([trend.band_orders for trend in bands], dtype=float).reshape(-1, 2)
    starts_hz = orders[:, 0] * running_speed_hz
    widths_hz = (orders[:, 1] - orders[:, 0]) * running_speed_hz
    recommended = np.array([trend.is_recommended for trend in bands], dtype=bool)
    colors = [trend.priority.color for trend in bands]
    return names, starts_hz, widths_hz, recommended, colors


def plot_trend_bands(window, result):
    """Redraws the band chart for one result."""
    plot = window.band_plot
    plot.clear()

    if not result.is_valid or not result.trend_recommendations:
        plot.setTitle("No bands to display")
        return

    names, starts_hz, widths_hz, recommended, colors = band_arrays(result)
    y_positions = np.arange(len(names))

    if len(names):
        brushes = [pg.mkBrush(PRIORITY_BRUSHES[color] if ok else EXCLUDED_BRUSH)
                   for color, ok in zip(colors, recommended)]
        bars = pg.BarGraphItem(x0=starts_hz, y=y_positions, width=widths_hz, height=0.6, brushes=brushes)
        plot.addItem(bars)
        plot.getAxis('left').setTicks([list(zip(y_positions.tolist(), names))])

    fmax_line = pg.InfiniteLine(pos=result.fmax_hz, angle=90,
                                pen=pg.mkPen((0, 0, 0), width=2, style=Qt.DashLine),
                                label=f"Fmax {result.fmax_hz:.0f} Hz",
                                labelOpts={'position': 0.95, 'color': (0, 0, 0)})
    plot.addItem(fmax_line)
    plot.setTitle(f"{result.bearing_model} ({result.analysis_mode.value})")
    plot.setXRange(0, result.fmax_hz * 1.05)

    Logger.log_message_static(
        f"UI-Chart: Plotted {len(names)} bands, {int(recommended.sum()) if len(names) else 0} recommended",
        Logger.DEBUG)


def export_band_chart(self):
    """
    Saves the band chart as a PNG image using the pyqtgraph exporter.
    """
    from pyqtgraph.exporters import ImageExporter

    file_path, _ = QFileDialog.getSaveFileName(self, "Export Chart", "band_chart.png", "PNG images (*.png)")
    if not file_path:
        self.log_message("UI-Chart: Export canceled by user", self.DEBUG)
        return

    if not file_path.lower().endswith('.png'):
        file_path += '.png'

    try:
        exporter = ImageExporter(self.band_plot.plotItem)
        exporter.export(file_path)
    except Exception as e:
        self.log_message(f"UI-Chart: Failed to export chart: {str(e)}", self.ERROR)
        QMessageBox.critical(self, "Export Failed", f"Failed to export chart:\n{e}")
        return

    self.log_message(f"UI-Chart: Chart exported to {os.path.basename(file_path)}", self.INFO)
    QMessageBox.information(self, "Export Complete", f"Chart was successfully exported to file:\n{file_path}")
