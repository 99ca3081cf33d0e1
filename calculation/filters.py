"""
HP filter selection and validation for PeakVue AP Sets.

Normal AP Sets have no HP filter; every function here targets PeakVue
stress-wave analysis, where the HP filter must be at least the PeakVue Fmax.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from calculation.constants import (
    CalculationConstants, DEFAULT_CONSTANTS, AdvancedCalculationSettings,
    DEFAULT_HP_FILTER_HZ, GENERIC_PEAKVUE_FMAX_ORDERS,
)
from calculation.formulas import (
    orders_to_hz, recommend_standard_fmax_hz, select_standard_hp_filter,
)
from calculation.models import AnalysisMode, EquipmentType, MountingMethod, SensorType


@dataclass(frozen=True)
class HPFilterSelection:
    filter_hz: float
    filter_type: str
    reason: str


@dataclass(frozen=True)
class FilterValidation:
    is_valid: bool
    confidence: str
    details: str


def _high_pass_label(filter_hz: float) -> str:
    return f"High-pass {int(filter_hz)} Hz"


def calculate_peakvue_hp_filter_for_rpm(rpm: float) -> float:
    """Minimum HP filter of 10x running speed, rounded up to a standard filter."""
    return select_standard_hp_filter((rpm / 60.0) * 10.0)


def calculate_peakvue_hp_filter(bpfi: float, rpm: float,
                                constants: CalculationConstants = DEFAULT_CONSTANTS) -> HPFilterSelection:
    """
    Select the HP filter for a PeakVue AP Set of a specific bearing.

    The filter must be at least both ``BPFI x PeakVue multiplier`` in Hz and the
    published PeakVue Fmax that value rounds up to.

    Args:
        bpfi (float): BPFI coefficient in orders.
        rpm (float): Running speed.
        constants (CalculationConstants): Multipliers for this calculation.

    Returns:
        HPFilterSelection: Selected standard filter with its label and reason.
    """
    bearing_fmax_orders = bpfi * constants.peakvue_bpfi_multiplier
    recommended_fmax_hz = recommend_standard_fmax_hz(bearing_fmax_orders, rpm, AnalysisMode.PEAKVUE)

    minimum_required = max(orders_to_hz(bearing_fmax_orders, rpm), recommended_fmax_hz)
    selected = select_standard_hp_filter(minimum_required)

    return HPFilterSelection(
        filter_hz=selected,
        filter_type=_high_pass_label(selected),
        reason=f"HP Filter selected to meet PeakVue Fmax requirement ({recommended_fmax_hz:.0f} Hz)",
    )


def calculate_peakvue_hp_filter_unknown_bearing(
        rpm: float, settings: Optional[AdvancedCalculationSettings] = None,
        fallback_orders: Optional[float] = None) -> HPFilterSelection:
    """
    Select the HP filter for a PeakVue AP Set when the bearing is unknown.

    Uses 30.5 orders, or the PeakVue RPM-fallback orders when advanced mode is
    on. An explicit ``fallback_orders`` takes precedence over both.
    """
    if fallback_orders is not None:
        default_orders = fallback_orders
    elif settings is not None and settings.advanced_mode_enabled:
        default_orders = settings.peakvue_rpm_fallback_orders
    else:
        default_orders = GENERIC_PEAKVUE_FMAX_ORDERS

    selected = select_standard_hp_filter(orders_to_hz(default_orders, rpm))
    return HPFilterSelection(
        filter_hz=selected,
        filter_type=_high_pass_label(selected),
        reason="HP Filter selected to meet Fmax requirement using default PeakVue values",
    )


def calculate_gearbox_hp_filter(gmf_frequencies: Iterable[float]) -> float:
    """HP filter at or above the highest gear mesh frequency (Hz)."""
    frequencies = list(gmf_frequencies)
    if not frequencies:
        return DEFAULT_HP_FILTER_HZ
    return select_standard_hp_filter(max(frequencies))


def validate_hp_filter_selection(selected_filter: float, bpfi: float, rpm: float,
                                 mode: AnalysisMode = AnalysisMode.PEAKVUE,
                                 constants: CalculationConstants = DEFAULT_CONSTANTS) -> FilterValidation:
    """
    Rate an HP filter against the bearing requirement for the given mode.

    The minimum is the larger of ``multiplier x BPFI`` and 10x running speed,
    both in Hz. Up to twice the minimum is Optimal, up to five times is Good,
    anything higher is Acceptable.
    """
    running_speed_hz = rpm / 60.0
    if mode == AnalysisMode.PEAKVUE:
        multiplier = constants.peakvue_bpfi_multiplier
    else:
        multiplier = constants.normal_bpfi_multiplier

    minimum_required = max(multiplier * bpfi * running_speed_hz, 10.0 * running_speed_hz)
    analysis = mode.value

    if selected_filter < minimum_required:
        return FilterValidation(False, "Insufficient",
                                f"Filter too low for effective {analysis} bearing fault detection")
    if selected_filter <= minimum_required * 2:
        return FilterValidation(True, "Optimal",
                                f"Filter frequency ideal for {analysis} bearing fault analysis")
    if selected_filter <= minimum_required * 5:
        return FilterValidation(True, "Good",
                                f"Filter frequency suitable for {analysis} bearing fault analysis")
    return FilterValidation(True, "Acceptable",
                            f"Filter frequency may reduce signal strength but still functional for {analysis}")


def validate_filter_with_sensor_mounting(filter_hz: float, sensor_type: SensorType,
                                         mounting_method: MountingMethod) -> Tuple[bool, List[str]]:
    warnings = []
    is_valid = True

    if filter_hz > sensor_type.frequency_range[1]:
        warnings.append(f"Filter frequency exceeds {sensor_type.value} maximum range")
        is_valid = False

    if filter_hz > mounting_method.frequency_limitation:
        warnings.append(f"Filter frequency exceeds {mounting_method.value} limitation")
        is_valid = False

    if filter_hz > sensor_type.optimal_range[1]:
        warnings.append(f"Filter frequency above optimal range for {sensor_type.value}")

    return is_valid, warnings


def equipment_filter_recommendations(equipment_type, rpm: float) -> List[str]:
    """Filtering advice for an equipment type (enum member or free text)."""
    equipment = EquipmentType.from_label(equipment_type)
    recommendations = []

    if equipment in (EquipmentType.MOTOR, EquipmentType.GENERATOR):
        recommendations.append("Consider electrical noise filtering at 60Hz and harmonics")
        if rpm / 60.0 < 30:
            recommendations.append("Low-speed motor: Use band-pass filter to isolate bearing frequencies")
    elif equipment == EquipmentType.PUMP:
        recommendations.append("Monitor for cavitation frequencies above 10kHz")
        recommendations.append("Consider hydraulic noise filtering")
    elif equipment == EquipmentType.FAN_BLOWER:
        recommendations.append("Aerodynamic noise may require higher HP filter")
        recommendations.append("Consider blade pass frequency harmonics")
    elif equipment == EquipmentType.COMPRESSOR:
        recommendations.append("Pulsation frequencies may interfere with bearing analysis")
        recommendations.append("Use higher HP filter to isolate mechanical faults")
    else:
        recommendations.append("Standard HP filter selection based on bearing frequencies")

    return recommendations


def filter_summary(selection: HPFilterSelection, confidence: str) -> str:
    return (
        f"Selected Filter: {selection.filter_type}\n"
        f"Reason: {selection.reason}\n"
        f"Confidence: {confidence}\n"
    )
