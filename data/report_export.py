"""
Report export for AP Set results.

Serializes computed results without recalculating anything:
- clipboard and plain-text build reports
- JSON build export
- a self-contained HTML report with Normal and PeakVue sections per bearing
- pandas DataFrames of results and trends, and CSV export of results

Functions:
    result_to_clipboard_text: Short text summary of one result
    export_build_as_text: Plain-text report of a saved build
    export_build_as_json: Pretty-printed JSON of a saved build
    generate_html_report: HTML report for a list of results
    save_html_report: Write an HTML report to disk
    results_to_dataframe: One row per result
    trends_to_dataframe: One row per trend recommendation
    export_results_csv: Write results_to_dataframe() to CSV
"""

import os
import json
import html
import datetime

import pandas as pd

from calculation.models import AnalysisMode
from calculation.trends import format_trends_for_display
from utils.logger import Logger

MAX_REPORT_TRENDS = 5

RESULT_COLUMNS = [
    'Bearing', 'Mode', 'RPM', 'Fmax (orders)', 'Fmax (Hz)', 'LOR', 'Bin Width (Hz)',
    'Shaft Revolutions', 'HP Filter (Hz)', 'BPFI (Hz)', 'BPFO (Hz)', 'BSF (Hz)', 'FTF (Hz)',
    'Valid', 'Messages',
]


def _format_date(value):
    return value.strftime("%b %d, %Y %H:%M")


def result_to_clipboard_text(result):
    """
    Short text summary of one result, as copied to the clipboard.

    Args:
        result (APSetResult): The result to summarize.

    Returns:
        str: Multi-line summary with up to five recommended trends.
    """
    lines = [
        "AP Set Results",
        f"Bearing: {result.bearing_model}",
        f"Mode: {result.analysis_mode.value}",
        f"Fmax: {result.fmax:.1f} orders ({result.fmax_hz:.0f} Hz)",
        f"LOR: {result.lor}",
        f"Shaft Revolutions: {result.shaft_revolutions:.1f}",
    ]
    if result.hp_filter_hz is not None:
        lines.append(f"PeakVue HP Filter: {result.hp_filter_hz:.0f} Hz")
    for message in result.validation_messages:
        lines.append(f"Warning: {message}")

    recommended = result.recommended_trends()
    if recommended:
        lines.append("")
        lines.append("Recommended Trends:")
        for trend in recommended[:MAX_REPORT_TRENDS]:
            lines.append(f"- {trend.name}")

    return "\n".join(lines) + "\n"


def export_build_as_text(build):
    configuration = build.configuration
    parts = [
        "AP Set Planner Build Report",
        "===========================",
        "",
        f"Build Name: {build.name}",
        f"Date Created: {_format_date(build.created)}",
        f"Equipment Type: {configuration.equipment_type}",
        f"Operating Speed: {configuration.rpm:.0f} RPM",
        f"Sensor: {configuration.sensor_type} - {configuration.mounting_method}",
    ]
    if build.notes:
        parts.append(f"Notes: {build.notes}")
    parts += ["", "AP SET RESULTS", "--------------", ""]

    text = "\n".join(parts) + "\n"
    for result in build.results:
        text += result_to_clipboard_text(result)
        text += "\n---\n\n"
    return text


def export_build_as_json(build):
    return json.dumps(build.to_dict(), indent=4)


def results_to_dataframe(results):
    """
    Tabulate results with pandas, one row per result.

    Args:
        results (list): APSetResult objects.

    Returns:
        pandas.DataFrame: Columns as in RESULT_COLUMNS.
    """
    rows = []
    for result in results:
        rows.append({
            'Bearing': result.bearing_model,
            'Mode': result.analysis_mode.value,
            'RPM': result.rpm,
            'Fmax (orders)': result.fmax,
            'Fmax (Hz)': result.fmax_hz,
            'LOR': result.lor,
            'Bin Width (Hz)': result.bin_width_hz,
            'Shaft Revolutions': result.shaft_revolutions,
            'HP Filter (Hz)': result.hp_filter_hz,
            'BPFI (Hz)': result.scaled_bpfi,
            'BPFO (Hz)': result.scaled_bpfo,
            'BSF (Hz)': result.scaled_bsf,
            'FTF (Hz)': result.scaled_ftf,
            'Valid': result.is_valid,
            'Messages': "; ".join(result.validation_messages),
        })
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def trends_to_dataframe(trends):
    rows = [{
        'Trend': trend.name,
        'Priority': trend.priority.label,
        'Category': trend.category.value,
        'Mode': trend.analysis_mode.value,
        'Range (orders)': trend.frequency_range_orders,
        'Range (Hz)': trend.frequency_range_hz,
        'Within Fmax': trend.is_within_fmax,
        'Resolvable': trend.is_resolvable,
        'Recommended': trend.is_recommended,
        'Fault Association': trend.fault_association,
    } for trend in trends]
    return pd.DataFrame(rows, columns=[
        'Trend', 'Priority', 'Category', 'Mode', 'Range (orders)', 'Range (Hz)',
        'Within Fmax', 'Resolvable', 'Recommended', 'Fault Association',
    ])


def export_results_csv(results, file_path):
    """
    Write results to a CSV file.

    Raises:
        IOError: If the file cannot be written.
    """
    Logger.log_message_static(f"Exporting {len(results)} results to {os.path.basename(file_path)}", Logger.INFO)
    try:
        results_to_dataframe(results).to_csv(file_path, index=False)
    except OSError as e:
        Logger.log_message_static(f"Failed to export results: {str(e)}", Logger.ERROR)
        raise IOError(f"Failed to export results: {e}")


# --------------------------------------------------------------------------
# HTML report
# --------------------------------------------------------------------------

_CSS = """
body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; background: #f5f7fa; color: #1d1d1f; margin: 0; }
.container { max-width: 960px; margin: 0 auto; padding: 24px; }
.header h1 { margin-bottom: 4px; }
.subtitle { color: #6e6e73; }
.info-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 12px; margin: 20px 0; }
.info-card { background: #fff; border-radius: 8px; padding: 12px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
.info-label { font-size: 12px; color: #6e6e73; text-transform: uppercase; }
.info-value { font-size: 16px; font-weight: 600; }
.result-section { background: #fff; border-radius: 8px; padding: 16px; margin-bottom: 16px; }
.normal-section { border-left: 4px solid #007aff; }
.peakvue-section { border-left: 4px solid #af52de; }
.section-title { font-weight: 600; font-size: 18px; }
.validation-warning { background: #fff4e5; color: #8a5300; padding: 8px; border-radius: 6px; margin: 8px 0; }
.parameters-table { width: 100%; border-collapse: collapse; margin: 8px 0; }
.parameters-table th, .parameters-table td { text-align: left; padding: 6px 8px; border-bottom: 1px solid #e5e5ea; }
.bearing-frequencies { display: grid; grid-template-columns: repeat(4, 1fr); gap: 8px; }
.bearing-freq-item { background: #f2f2f7; border-radius: 6px; padding: 8px; text-align: center; }
.freq-label { font-size: 12px; color: #6e6e73; }
.freq-value { font-weight: 600; }
.trend-item { display: flex; justify-content: space-between; padding: 4px 0; border-bottom: 1px dashed #e5e5ea; }
.trend-range { color: #6e6e73; }
.footer { text-align: center; color: #8e8e93; font-size: 12px; margin-top: 24px; }
"""


def _esc(value):
    return html.escape(str(value))


def _header_html(build_name, configuration):
    title = f"AP Set Report: {_esc(build_name)}" if build_name else "AP Set Report"
    generated = _format_date(datetime.datetime.now())
    cards = [
        ("Equipment Type", configuration.equipment_type or "Not specified"),
        ("Operating Speed", f"{configuration.rpm:.0f} RPM"),
        ("Sensor Type", configuration.sensor_type),
        ("Mounting Method", configuration.mounting_method),
    ]
    card_html = "".join(
        f'<div class="info-card"><div class="info-label">{_esc(label)}</div>'
        f'<div class="info-value">{_esc(value)}</div></div>'
        for label, value in cards
    )
    return (
        f'<div class="header"><h1>{title}</h1>'
        f'<div class="subtitle">Generated {_esc(generated)}</div></div>'
        f'<div class="info-grid">{card_html}</div>'
    )


def _parameters_table(rows):
    body = "".join(f"<tr><td>{_esc(name)}</td><td>{_esc(value)}</td></tr>" for name, value in rows)
    return f'<table class="parameters-table"><tr><th>Parameter</th><th>Value</th></tr>{body}</table>'


def _warnings_html(result):
    return "".join(f'<div class="validation-warning">{_esc(message)}</div>'
                   for message in result.validation_messages)


def _bearing_frequencies_html(result):
    if not result.has_bearing_frequencies:
        return ""
    items = [
        ("BPFI", result.order_bpfi, result.scaled_bpfi),
        ("BPFO", result.order_bpfo, result.scaled_bpfo),
        ("BSF", result.order_bsf, result.scaled_bsf),
        ("FTF", result.order_ftf, result.scaled_ftf),
    ]
    body = "".join(
        f'<div class="bearing-freq-item"><div class="freq-label">{name}</div>'
        f'<div class="freq-value">{order:.3f}×</div><div class="freq-label">{scaled:.1f} Hz</div></div>'
        for name, order, scaled in items
    )
    return f'<h4>Bearing Fault Frequencies</h4><div class="bearing-frequencies">{body}</div>'


def _trends_html(result, title):
    names = format_trends_for_display(result, result.analysis_mode)
    items = "".join(f'<div class="trend-item"><span class="trend-name">{_esc(name)}</span></div>'
                    for name in names[:MAX_REPORT_TRENDS])
    if len(names) > MAX_REPORT_TRENDS:
        items += (f'<div class="trend-item"><span class="trend-name">... and '
                  f'{len(names) - MAX_REPORT_TRENDS} more trends</span></div>')
    return f'<div class="trends-container"><h4>{title}</h4>{items}</div>'


def _result_section(result):
    if result.analysis_mode == AnalysisMode.PEAKVUE:
        css, title, trend_title = "peakvue-section", "PeakVue AP Set", "Recommended PeakVue Trends"
    else:
        css, title, trend_title = "normal-section", "Normal AP Set", "Recommended Trends"

    if not result.is_valid:
        return (f'<div class="result-section {css}"><span class="section-title">{title}</span>'
                f'{_warnings_html(result)}</div>')

    rows = [
        ("Fmax", f"{result.fmax:.1f} orders ({result.fmax_hz:.0f} Hz)"),
        ("Lines of Resolution", result.lor),
        ("Bin Width", f"{result.bin_width_hz:.3f} Hz"),
        ("Shaft Revolutions", f"{result.shaft_revolutions:.1f}"),
    ]
    if result.hp_filter_hz is not None:
        rows.append(("HP Filter", f"{result.hp_filter_hz:.0f} Hz"))

    return (
        f'<div class="result-section {css}"><div class="section-header">'
        f'<span class="section-title">{title}</span></div>'
        f'{_warnings_html(result)}{_parameters_table(rows)}'
        f'{_bearing_frequencies_html(result) if result.analysis_mode == AnalysisMode.NORMAL else ""}'
        f'{_trends_html(result, trend_title)}</div>'
    )


def generate_html_report(results, configuration, build_name=None):
    """
    Build a self-contained HTML report.

    Results are grouped by bearing in input order, each bearing showing its
    Normal section followed by its PeakVue section.

    Args:
        results (list): APSetResult objects.
        configuration (BuildConfiguration): Inputs shown in the header.
        build_name (str, optional): Title suffix.

    Returns:
        str: The HTML document.
    """
    groups = {}
    for result in results:
        key = result.bearing_model
        if result.analysis_mode == AnalysisMode.PEAKVUE and key.endswith(" (PeakVue)"):
            key = key[:-len(" (PeakVue)")]
        groups.setdefault(key, []).append(result)

    content = "<h2>AP Set Results</h2>"
    for bearing_model, bearing_results in groups.items():
        content += f"<h3>{_esc(bearing_model)}</h3>"
        ordered = sorted(bearing_results, key=lambda r: r.analysis_mode != AnalysisMode.NORMAL)
        content += "".join(_result_section(result) for result in ordered)

    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">'
        f'<title>{_esc(build_name or "AP Set Report")}</title><style>{_CSS}</style></head>'
        f'<body><div class="container">{_header_html(build_name, configuration)}{content}'
        '<div class="footer">Generated by AP Set Planner</div></div></body></html>'
    )


def save_html_report(html_text, file_path):
    """
    Write an HTML report to disk.

    Raises:
        IOError: If the file cannot be written.
    """
    Logger.log_message_static(f"Saving HTML report to {os.path.basename(file_path)}", Logger.INFO)
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(html_text)
    except OSError as e:
        Logger.log_message_static(f"Failed to save HTML report: {str(e)}", Logger.ERROR)
        raise IOError(f"Failed to save HTML report: {e}")
