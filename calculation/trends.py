"""
Trend recommendations derived from a computed AP Set.

For one result and analysis mode this module builds the list of trends a
technician should configure: the always-on waveform and statistical trends,
the fixed order bands that fit within Fmax, an optional blade/vane pass band
and one band per bearing fault frequency. Every band carries two flags,
``is_within_fmax`` and ``is_resolvable``; only recommendations with both set
are offered as actionable, but all are returned so the UI can explain why a
band was excluded.
"""

from typing import List, Optional

from calculation.models import (
    AnalysisMode, APSetResult, EquipmentType,
    TrendCategory, TrendPriority, TrendRecommendation,
)
from utils.logger import Logger

# Half-width (orders) of single-frequency bands
BAND_HALF_WIDTH_ORDERS = 0.5

# Minimum bins across a band for it to be resolvable
ORDER_BAND_MIN_BINS = 3
NARROW_BAND_MIN_BINS = 2

# (name, start, end, priority, fault association)
ORDER_BANDS = (
    ("Sub-synchronous", 0.0, 0.8, TrendPriority.MEDIUM, "Belt drives, oil whirl, speed variations"),
    ("1×TS", 0.8, 1.4, TrendPriority.CRITICAL, "Imbalance, misalignment, bent shaft"),
    ("2×TS", 1.4, 2.4, TrendPriority.HIGH, "Mechanical looseness, angular misalignment"),
    ("3-8×TS", 2.4, 8.4, TrendPriority.MEDIUM, "Misalignment harmonics"),
    ("9-25×TS", 8.4, 25.4, TrendPriority.HIGH, "Bearing defect frequencies"),
    ("25-75×TS", 25.4, 75.0, TrendPriority.MEDIUM, "High-frequency bearing impacts"),
)

# (short name, result attribute, description, fault association, priority)
BEARING_BANDS = (
    ("BPFI", 'order_bpfi', "Ball Pass Frequency Inner race", "Inner race defects", TrendPriority.HIGH),
    ("BPFO", 'order_bpfo', "Ball Pass Frequency Outer race", "Outer race defects", TrendPriority.HIGH),
    ("BSF", 'order_bsf', "Ball Spin Frequency", "Rolling element defects", TrendPriority.MEDIUM),
    ("FTF", 'order_ftf', "Fundamental Train Frequency", "Cage defects", TrendPriority.MEDIUM),
)

BASIC_TREND_NAMES = {
    AnalysisMode.NORMAL: ["Waveform Peak-Peak", "Overall RMS", "Crest Factor"],
    AnalysisMode.PEAKVUE: ["PeakVue Maximum Peak", "PeakVue RMS", "PeakVue Crest Factor"],
}


def fmax_orders_for_mode(result: APSetResult, mode: AnalysisMode) -> float:
    """
    Fmax (orders) the trends are checked against.

    PeakVue uses the PeakVue-calculated Fmax when the result has one and falls
    back to the result's Fmax otherwise.
    """
    if mode == AnalysisMode.PEAKVUE and result.peakvue_fmax is not None:
        return result.peakvue_fmax
    return result.fmax


def _hz_range(start_hz, end_hz):
    return f"{start_hz:.1f}-{end_hz:.1f} Hz"


def _orders_range(start, end):
    return f"{start:.1f}-{end:.1f} orders"


def _normal_trends(result, fmax_orders, fmax_hz, bin_width_hz):
    running_speed_hz = result.rpm / 60.0
    trends = [
        TrendRecommendation(
            name="Waveform Peak-Peak",
            category=TrendCategory.WAVEFORM,
            priority=TrendPriority.HIGH,
            analysis_mode=AnalysisMode.NORMAL,
            description="Time waveform peak-to-peak amplitude",
            fault_association="Impacting, severity detection, bearing condition",
        ),
        TrendRecommendation(
            name="Crest Factor",
            category=TrendCategory.STATISTICAL,
            priority=TrendPriority.HIGH,
            analysis_mode=AnalysisMode.NORMAL,
            description="Ratio of peak to RMS amplitude",
            fault_association="Bearing condition, impacting detection",
        ),
        TrendRecommendation(
            name="Overall RMS",
            category=TrendCategory.STATISTICAL,
            priority=TrendPriority.CRITICAL,
            analysis_mode=AnalysisMode.NORMAL,
            description="Total vibration energy across frequency range",
            fault_association="General machine condition, trending",
            frequency_range_hz=f"0-{fmax_hz:.1f} Hz",
            frequency_range_orders=f"0-{fmax_orders:.1f} orders",
        ),
    ]

    for name, start, end, priority, association in ORDER_BANDS:
        if end > fmax_orders:
            continue
        start_hz = start * running_speed_hz
        end_hz = end * running_speed_hz
        trends.append(TrendRecommendation(
            name=name,
            category=TrendCategory.ORDER_BAND,
            priority=priority,
            analysis_mode=AnalysisMode.NORMAL,
            description="Order-based frequency band analysis",
            fault_association=association,
            frequency_range_hz=_hz_range(start_hz, end_hz),
            frequency_range_orders=_orders_range(start, end),
            band_orders=(start, end),
            is_within_fmax=True,
            is_resolvable=(end_hz - start_hz) >= bin_width_hz * ORDER_BAND_MIN_BINS,
        ))

    return trends


def _peakvue_trends(fmax_hz):
    return [
        TrendRecommendation(
            name="PeakVue Maximum Peak",
            category=TrendCategory.WAVEFORM,
            priority=TrendPriority.CRITICAL,
            analysis_mode=AnalysisMode.PEAKVUE,
            description="Maximum peak amplitude in stress wave analysis",
            fault_association="Primary bearing condition indicator",
        ),
        TrendRecommendation(
            name="PeakVue RMS",
            category=TrendCategory.STATISTICAL,
            priority=TrendPriority.HIGH,
            analysis_mode=AnalysisMode.PEAKVUE,
            description="RMS of stress wave energy",
            fault_association="Overall stress wave energy level",
            frequency_range_hz=f"HP Filter-{fmax_hz:.1f} Hz",
        ),
        TrendRecommendation(
            name="PeakVue Crest Factor",
            category=TrendCategory.STATISTICAL,
            priority=TrendPriority.MEDIUM,
            analysis_mode=AnalysisMode.PEAKVUE,
            description="Ratio of peak to RMS in stress wave analysis",
            fault_association="Impact severity in bearing analysis",
        ),
    ]


def _narrow_band(name, category, priority, mode, description, association,
                 center_orders, running_speed_hz, bin_width_hz):
    """Band of +/-0.5 orders around ``center_orders``."""
    center_hz = center_orders * running_speed_hz
    bandwidth_hz = 2 * BAND_HALF_WIDTH_ORDERS * running_speed_hz
    start = center_orders - BAND_HALF_WIDTH_ORDERS
    end = center_orders + BAND_HALF_WIDTH_ORDERS

    return TrendRecommendation(
        name=name,
        category=category,
        priority=priority,
        analysis_mode=mode,
        description=description,
        fault_association=association,
        frequency_range_hz=_hz_range(center_hz - bandwidth_hz / 2, center_hz + bandwidth_hz / 2),
        frequency_range_orders=_orders_range(start, end),
        band_orders=(start, end),
        center_hz=center_hz,
        is_within_fmax=True,
        is_resolvable=bandwidth_hz >= bin_width_hz * NARROW_BAND_MIN_BINS,
    )


def _equipment_trends(equipment_type, vane_blade_count, result, fmax_orders, bin_width_hz, mode):
    equipment = EquipmentType.from_label(equipment_type)
    if not equipment.has_pass_frequency or not vane_blade_count or vane_blade_count <= 0:
        return []

    count = float(vane_blade_count)
    if count + BAND_HALF_WIDTH_ORDERS > fmax_orders:
        return []

    if equipment == EquipmentType.FAN_BLOWER:
        name, description, association = (
            "Blade Pass Frequency", "Blade passage frequency monitoring",
            "Blade condition, aerodynamic issues, debris")
    else:
        name, description, association = (
            "Vane Pass Frequency", "Impeller vane passage frequency",
            "Impeller condition, cavitation, hydraulic forces")

    return [_narrow_band(name, TrendCategory.EQUIPMENT_SPECIFIC, TrendPriority.HIGH, mode,
                         description, association, count, result.rpm / 60.0, bin_width_hz)]


def _bearing_trends(result, fmax_orders, bin_width_hz, mode):
    trends = []
    for short_name, attribute, description, association, priority in BEARING_BANDS:
        order = getattr(result, attribute)
        if order <= 0 or order + BAND_HALF_WIDTH_ORDERS > fmax_orders:
            continue
        trends.append(_narrow_band(f"{short_name} Band", TrendCategory.BEARING_BAND, priority, mode,
                                   description, association, order, result.rpm / 60.0, bin_width_hz))
    return trends


def generate_trend_recommendations(result: APSetResult, equipment_type=None,
                                   vane_blade_count: Optional[int] = None,
                                   mode: Optional[AnalysisMode] = None) -> List[TrendRecommendation]:
    """
    Build the prioritized trend list for an AP Set result.

    Args:
        result (APSetResult): The computed AP Set.
        equipment_type (EquipmentType or str, optional): Enables the blade/vane
            pass band for fans and pumps.
        vane_blade_count (int, optional): Number of blades or vanes.
        mode (AnalysisMode, optional): Defaults to the result's analysis mode.

    Returns:
        list: TrendRecommendation objects, deduplicated by name and sorted by
        priority (critical first). Empty for an invalid result or a result
        without lines of resolution.
    """
    mode = mode or result.analysis_mode

    if not result.is_valid or result.lor <= 0 or result.rpm <= 0:
        Logger.log_message_static(
            f"Trends: Skipping trend generation for invalid result '{result.bearing_model}'", Logger.DEBUG)
        return []

    fmax_orders = fmax_orders_for_mode(result, mode)
    fmax_hz = fmax_orders * (result.rpm / 60.0)
    bin_width_hz = fmax_hz / result.lor

    if mode == AnalysisMode.PEAKVUE:
        trends = _peakvue_trends(fmax_hz)
    else:
        trends = _normal_trends(result, fmax_orders, fmax_hz, bin_width_hz)

    if equipment_type is not None:
        trends.extend(_equipment_trends(equipment_type, vane_blade_count, result,
                                        fmax_orders, bin_width_hz, mode))

    if result.has_bearing_frequencies:
        trends.extend(_bearing_trends(result, fmax_orders, bin_width_hz, mode))

    unique = {}
    for trend in trends:
        unique.setdefault(trend.name, trend)

    ordered = sorted(unique.values(), key=lambda trend: trend.priority)

    Logger.log_message_static(
        f"Trends: {len(ordered)} trends for '{result.bearing_model}' ({mode.value}), "
        f"{sum(1 for trend in ordered if trend.is_recommended)} recommended",
        Logger.DEBUG,
    )
    return ordered


def format_trends_for_display(result: APSetResult, mode: AnalysisMode) -> List[str]:
    """
    Trend names with their frequency range, as shown in results and reports.

    Falls back to the basic trend names when the result has no trends for
    the mode.
    """
    trends = [trend for trend in result.trend_recommendations if trend.analysis_mode == mode]
    if not trends:
        return list(BASIC_TREND_NAMES[mode])

    names = []
    for trend in trends:
        frequency_range = trend.frequency_range_orders or trend.frequency_range_hz
        names.append(f"{trend.name} ({frequency_range})" if frequency_range else trend.name)
    return names
