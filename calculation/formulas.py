"""
AP Set formulas.

Pure functions converting RPM, bearing fault coefficients and the analysis
mode into acquisition parameters:

- Fmax selection (bearing-based or RPM fallback, plus the per-shaft sizing path)
- Lines of resolution (LOR) with shaft-revolution and bin-width validation
- HP filter and standard Fmax selection from the published option tables
- Order/Hz conversions, shaft revolutions and acquisition time

None of the functions here log or keep state; identical inputs always give
identical outputs. Callers are responsible for rejecting RPM <= 0 before
calling (see ``validate_rpm``).
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from calculation.constants import (
    CalculationConstants, DEFAULT_CONSTANTS,
    LOR_MULTIPLIER, MINIMUM_SHAFT_REVOLUTIONS, MAXIMUM_BIN_WIDTH_HZ,
    STANDARD_LOR_OPTIONS, STANDARD_FMAX_OPTIONS_HZ, PEAKVUE_FMAX_OPTIONS_HZ,
    NORMAL_MAX_FMAX_HZ, PEAKVUE_MAX_FMAX_HZ, STANDARD_HP_FILTERS_HZ,
    PEAKVUE_GMF_MULTIPLIER, MAXIMUM_RPM,
    SHAFT_NORMAL_BEARING_MULTIPLIER, SHAFT_PEAKVUE_BEARING_MULTIPLIER,
    SHAFT_NORMAL_MAX_FMAX_ORDERS, SHAFT_PEAKVUE_MAX_FMAX_ORDERS,
    GENERIC_NORMAL_FMAX_ORDERS, GENERIC_NORMAL_LOR,
    GENERIC_PEAKVUE_FMAX_ORDERS, GENERIC_PEAKVUE_LOR,
)
from calculation.models import AnalysisMode, BearingData


# --------------------------------------------------------------------------
# Table lookups
# --------------------------------------------------------------------------

def _smallest_option_at_least(options: Sequence, value):
    """Return the smallest option >= value, or the largest option if none is."""
    index = int(np.searchsorted(options, value, side='left'))
    return options[min(index, len(options) - 1)]


def _option_index(options: Sequence, option) -> int:
    return options.index(option)


# --------------------------------------------------------------------------
# Conversions
# --------------------------------------------------------------------------

def orders_to_hz(orders: float, rpm: float) -> float:
    return orders * (rpm / 60.0)


def hz_to_orders(hz: float, rpm: float) -> float:
    return hz / (rpm / 60.0)


def shaft_revolutions(lor: int, rpm: float) -> float:
    """Shaft revolutions captured for ``lor`` lines: lor / (rpm / 60)."""
    return lor / (rpm / 60.0)


def acquisition_time(lor: int, fmax: float, rpm: float) -> float:
    """Acquisition time in seconds for one block: lor / Fmax[Hz]."""
    return lor / orders_to_hz(fmax, rpm)


def total_acquisition_time(lor: int, fmax: float, averages: int, rpm: float = 60.0) -> float:
    """Acquisition time for ``averages`` blocks; rpm defaults to 1 rev/s."""
    return acquisition_time(lor, fmax, rpm) * averages


# --------------------------------------------------------------------------
# Fmax
# --------------------------------------------------------------------------

def calculate_fmax(mode: AnalysisMode, bearing: Optional[BearingData] = None,
                   constants: CalculationConstants = DEFAULT_CONSTANTS) -> float:
    """
    Calculate Fmax in orders.

    Uses ``BPFI x multiplier`` when the bearing has fault frequencies and the
    RPM-fallback orders only when it does not. The two paths never mix.

    Args:
        mode (AnalysisMode): Normal or PeakVue.
        bearing (BearingData, optional): Bearing; None or generic uses the fallback.
        constants (CalculationConstants): Multipliers for this calculation.

    Returns:
        float: Fmax in orders.
    """
    if bearing is not None and bearing.frequencies is not None:
        bpfi = bearing.frequencies.bpfi
        if mode == AnalysisMode.PEAKVUE:
            return bpfi * constants.peakvue_bpfi_multiplier
        return bpfi * constants.normal_bpfi_multiplier

    if mode == AnalysisMode.PEAKVUE:
        return constants.peakvue_rpm_fallback_orders
    return constants.normal_rpm_fallback_orders


def calculate_shaft_bearing_fmax(mode: AnalysisMode, bearing: Optional[BearingData] = None) -> float:
    """
    Fmax in orders for the per-shaft sizing path.

    Normal: ceil(max(BPFI, BPFO) x 3.25), at most 200 orders.
    PeakVue: ceil(BPFI x 1.25), at most 100 orders.
    Generic bearings use the published baseline (70.0 / 30.5 orders).

    This mapping differs from ``calculate_fmax`` and is kept separate on
    purpose; see DESIGN.md.
    """
    if bearing is None or bearing.frequencies is None:
        if mode == AnalysisMode.PEAKVUE:
            return GENERIC_PEAKVUE_FMAX_ORDERS
        return GENERIC_NORMAL_FMAX_ORDERS

    frequencies = bearing.frequencies
    if mode == AnalysisMode.PEAKVUE:
        return min(float(math.ceil(frequencies.bpfi * SHAFT_PEAKVUE_BEARING_MULTIPLIER)),
                   SHAFT_PEAKVUE_MAX_FMAX_ORDERS)

    max_order = max(frequencies.bpfi, frequencies.bpfo)
    return min(float(math.ceil(max_order * SHAFT_NORMAL_BEARING_MULTIPLIER)),
               SHAFT_NORMAL_MAX_FMAX_ORDERS)


def calculate_gmf(input_rpm: float, input_teeth: int) -> float:
    """Gear mesh frequency in Hz."""
    return (input_rpm / 60.0) * input_teeth


def calculate_gmf_fmax(gmf: float, mode: AnalysisMode = AnalysisMode.NORMAL,
                       constants: CalculationConstants = DEFAULT_CONSTANTS) -> float:
    if mode == AnalysisMode.PEAKVUE:
        return gmf * PEAKVUE_GMF_MULTIPLIER
    return gmf * constants.normal_gmf_multiplier


def recommend_standard_fmax_hz(calculated_fmax: float, rpm: float, mode: AnalysisMode) -> float:
    """
    Return the published Fmax option (Hz) for a calculated Fmax in orders.

    The calculated value is converted to Hz, capped at the mode maximum
    (20000 Hz Normal, 5000 Hz PeakVue) and rounded up to the next option.
    """
    if mode == AnalysisMode.PEAKVUE:
        options, ceiling = PEAKVUE_FMAX_OPTIONS_HZ, PEAKVUE_MAX_FMAX_HZ
    else:
        options, ceiling = STANDARD_FMAX_OPTIONS_HZ, NORMAL_MAX_FMAX_HZ

    capped_hz = min(orders_to_hz(calculated_fmax, rpm), ceiling)
    return _smallest_option_at_least(options, capped_hz)


def recommend_standard_fmax(calculated_fmax: float, rpm: float, mode: AnalysisMode) -> float:
    """Published Fmax for ``calculated_fmax``, expressed in orders."""
    return hz_to_orders(recommend_standard_fmax_hz(calculated_fmax, rpm, mode), rpm)


# --------------------------------------------------------------------------
# Lines of resolution
# --------------------------------------------------------------------------

def calculate_required_lor(fmax: float) -> int:
    return int(math.ceil(fmax * LOR_MULTIPLIER))


def select_standard_lor(required_lor: int) -> int:
    """Smallest standard LOR >= required_lor, or 12800 when none is."""
    return _smallest_option_at_least(STANDARD_LOR_OPTIONS, required_lor)


def _lor_warnings(lor: int, fmax: float, fmax_hz: Optional[float]) -> Optional[str]:
    warnings = []

    final_revolutions = lor / fmax
    if final_revolutions < MINIMUM_SHAFT_REVOLUTIONS:
        warnings.append(f"Shaft revolutions ({final_revolutions:.1f}) < {MINIMUM_SHAFT_REVOLUTIONS:g}")

    if fmax_hz is not None:
        final_bin_width = fmax_hz / lor
        if final_bin_width > MAXIMUM_BIN_WIDTH_HZ:
            warnings.append(f"Bin width ({final_bin_width:.3f} Hz) > {MAXIMUM_BIN_WIDTH_HZ:g}Hz")

    return "; ".join(warnings) if warnings else None


def _walk_up_for_shaft_revolutions(start_index: int, fmax: float) -> int:
    """Index of the first LOR from ``start_index`` giving 15 revolutions, else the table top."""
    for index in range(start_index, len(STANDARD_LOR_OPTIONS)):
        if STANDARD_LOR_OPTIONS[index] / fmax >= MINIMUM_SHAFT_REVOLUTIONS:
            return index
    return len(STANDARD_LOR_OPTIONS) - 1


def select_standard_lor_with_validation(required_lor: int, fmax: float, rpm: float) -> Tuple[int, Optional[str]]:
    """
    Pick the smallest standard LOR meeting both data-quality requirements.

    Starting from ``select_standard_lor(required_lor)`` the LOR only moves up:
    first until lor / fmax >= 15 shaft revolutions, then until the bin width
    (fmax[Hz] / lor) is at most 1 Hz.

    Args:
        required_lor (int): Raw LOR requirement.
        fmax (float): Fmax in orders.
        rpm (float): Running speed.

    Returns:
        tuple: (lor, warning) where warning is None, or describes the
        requirement still violated at the top of the table.
    """
    fmax_hz = orders_to_hz(fmax, rpm)
    index = _option_index(STANDARD_LOR_OPTIONS, select_standard_lor(required_lor))

    index = _walk_up_for_shaft_revolutions(index, fmax)

    for candidate in range(index, len(STANDARD_LOR_OPTIONS)):
        if fmax_hz / STANDARD_LOR_OPTIONS[candidate] <= MAXIMUM_BIN_WIDTH_HZ:
            index = candidate
            break

    lor = STANDARD_LOR_OPTIONS[index]
    return lor, _lor_warnings(lor, fmax, fmax_hz)


def select_peakvue_lor(required_lor: int, fmax: float) -> Tuple[int, Optional[str]]:
    """
    PeakVue LOR selection: only the shaft-revolution requirement applies.

    The 1600-line PeakVue guideline is advice for the display, not a warning.
    """
    index = _option_index(STANDARD_LOR_OPTIONS, select_standard_lor(required_lor))
    index = _walk_up_for_shaft_revolutions(index, fmax)

    lor = STANDARD_LOR_OPTIONS[index]
    return lor, _lor_warnings(lor, fmax, None)


def baseline_lor(fmax: float) -> int:
    """
    LOR for the per-shaft path.

    The generic baselines keep their published LOR (70 orders -> 800 lines,
    30.5 orders -> 400 lines); every other Fmax goes through the standard table.
    """
    if abs(fmax - GENERIC_NORMAL_FMAX_ORDERS) < 0.1:
        return GENERIC_NORMAL_LOR
    if abs(fmax - GENERIC_PEAKVUE_FMAX_ORDERS) < 0.1:
        return GENERIC_PEAKVUE_LOR
    return select_standard_lor(calculate_required_lor(fmax))


def validate_shaft_revolutions(fmax: float, lor: int) -> Tuple[bool, float]:
    revolutions = lor / fmax
    return revolutions >= MINIMUM_SHAFT_REVOLUTIONS, revolutions


# --------------------------------------------------------------------------
# HP filter
# --------------------------------------------------------------------------

def select_standard_hp_filter(minimum_required: float) -> float:
    """Smallest standard HP filter (Hz) >= minimum_required, else the largest."""
    return _smallest_option_at_least(STANDARD_HP_FILTERS_HZ, minimum_required)


# --------------------------------------------------------------------------
# Input validation and guidance
# --------------------------------------------------------------------------

def validate_rpm(rpm) -> List[str]:
    """
    Return the reasons an RPM value cannot be used; empty when it is valid.
    """
    try:
        value = float(rpm)
    except (TypeError, ValueError):
        return [f"RPM must be a number, got {rpm!r}"]

    if not math.isfinite(value):
        return ["RPM must be a finite number"]
    if value <= 0:
        return [f"RPM must be greater than 0 (got {value:g})"]
    if value > MAXIMUM_RPM:
        return [f"RPM {value:g} exceeds the supported maximum of {MAXIMUM_RPM:g}"]
    return []


@dataclass(frozen=True)
class ResolutionAnalysis:
    current_resolution: float
    fmax_hz: float
    current_lor: int
    is_resolution_valid: bool


def resolution_analysis(result) -> ResolutionAnalysis:
    """Bin width of an AP Set result and whether it meets the 1 Hz requirement."""
    fmax_hz = orders_to_hz(result.fmax, result.rpm)
    current_resolution = fmax_hz / result.lor
    return ResolutionAnalysis(
        current_resolution=current_resolution,
        fmax_hz=fmax_hz,
        current_lor=result.lor,
        is_resolution_valid=current_resolution <= MAXIMUM_BIN_WIDTH_HZ,
    )


@dataclass(frozen=True)
class AveragingRecommendation:
    recommended: int
    alternatives: Tuple[int, ...]
    reason: str
    alternative_guidance: Dict[int, str]


def averaging_recommendation(rpm: float) -> AveragingRecommendation:
    if rpm < 600:
        return AveragingRecommendation(
            recommended=4,
            alternatives=(2, 6),
            reason="Lower RPM equipment benefits from more averages for stability",
            alternative_guidance={
                2: "Faster data collection, sufficient for stable machines",
                6: "Enhanced stability, longer acquisition time",
            },
        )
    if rpm < 1800:
        return AveragingRecommendation(
            recommended=4,
            alternatives=(2, 6),
            reason="Standard recommendation for typical industrial equipment",
            alternative_guidance={
                2: "Faster data collection, minimum averaging",
                6: "Enhanced stability for variable loads",
            },
        )
    return AveragingRecommendation(
        recommended=4,
        alternatives=(2, 6),
        reason="High RPM equipment typically has stable readings",
        alternative_guidance={
            2: "Faster acquisition for stable machines",
            6: "Additional stability if needed",
        },
    )
