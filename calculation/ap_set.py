"""
AP Set assembly.

Combines the formulas and HP filter selection into complete ``APSetResult``
objects, one per (bearing, analysis mode) pair. Two entry points exist:

- ``calculate_ap_set``: the direct path. Fmax comes from ``BPFI x multiplier``
  (or the RPM fallback), is rounded up to a published Fmax option, and the LOR
  is walked up until the shaft-revolution and bin-width requirements hold.
- ``calculate_shaft_bearing_ap_set``: the per-shaft sizing path, using
  ``max(BPFI, BPFO) x 3.25`` / ``BPFI x 1.25`` and the published baselines for
  generic bearings.

Neither path raises for numeric input. An unusable RPM gives an invalid
result with a message, and unmet data-quality requirements become warnings
on an otherwise valid result.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from calculation.constants import CalculationConstants, DEFAULT_CONSTANTS
from calculation.filters import (
    calculate_peakvue_hp_filter, calculate_peakvue_hp_filter_for_rpm,
    calculate_peakvue_hp_filter_unknown_bearing,
)
from calculation.formulas import (
    calculate_fmax, calculate_shaft_bearing_fmax, recommend_standard_fmax,
    calculate_required_lor, select_standard_lor_with_validation,
    select_peakvue_lor, baseline_lor, shaft_revolutions, orders_to_hz,
    validate_rpm, validate_shaft_revolutions,
)
from calculation.models import (
    AnalysisMode, APSetResult, BearingData, CalculationPath, MountingMethod, SensorType, generic_bearing,
)
from calculation.trends import generate_trend_recommendations
from utils.logger import Logger

PEAKVUE_LABEL_SUFFIX = " (PeakVue)"


def _label(value) -> str:
    return getattr(value, 'value', value)


def _bearing_fields(bearing: BearingData, rpm: float) -> dict:
    """Order and Hz-scaled fault frequencies as result fields (zero when generic)."""
    if bearing.frequencies is None:
        return {}

    frequencies = bearing.frequencies
    scaled = frequencies.scaled(rpm)
    return {
        'order_bpfi': frequencies.bpfi,
        'order_bpfo': frequencies.bpfo,
        'order_bsf': frequencies.bsf,
        'order_ftf': frequencies.ftf,
        'scaled_bpfi': scaled['bpfi'],
        'scaled_bpfo': scaled['bpfo'],
        'scaled_bsf': scaled['bsf'],
        'scaled_ftf': scaled['ftf'],
    }


def _invalid_result(bearing, rpm, mode, messages, sensor_type, mounting_method) -> APSetResult:
    Logger.log_message_static(
        f"AP-Set: Invalid input for '{bearing.designation}' ({mode.value}): {'; '.join(messages)}",
        Logger.WARNING)
    try:
        rpm_value = float(rpm)
    except (TypeError, ValueError):
        rpm_value = 0.0

    return APSetResult(
        rpm=rpm_value,
        analysis_mode=mode,
        bearing_model=bearing.designation,
        bearing_type=bearing.bearing_type,
        fmax=0.0,
        lor=0,
        shaft_revolutions=0.0,
        is_valid=False,
        validation_messages=tuple(messages),
        sensor_type=_label(sensor_type),
        mounting_method=_label(mounting_method),
    )


def calculate_ap_set(bearing: Optional[BearingData], rpm: float,
                     mode: AnalysisMode = AnalysisMode.NORMAL,
                     constants: CalculationConstants = DEFAULT_CONSTANTS,
                     sensor_type=SensorType.ACCELEROMETER,
                     mounting_method=MountingMethod.STUD) -> APSetResult:
    """
    Calculate one AP Set on the direct path.

    Args:
        bearing (BearingData, optional): Bearing to size for; None is a generic bearing.
        rpm (float): Running speed in RPM.
        mode (AnalysisMode): Normal or PeakVue.
        constants (CalculationConstants): Multiplier snapshot for this calculation.
        sensor_type (SensorType or str): Sensor recorded on the result.
        mounting_method (MountingMethod or str): Mounting recorded on the result.

    Returns:
        APSetResult: The computed AP Set. ``is_valid`` is False only for an
        unusable RPM; requirement violations are listed in
        ``validation_messages``.
    """
    bearing = bearing or generic_bearing()

    errors = validate_rpm(rpm)
    if errors:
        return _invalid_result(bearing, rpm, mode, errors, sensor_type, mounting_method)
    rpm = float(rpm)

    calculated_fmax = calculate_fmax(mode, bearing, constants)
    fmax = recommend_standard_fmax(calculated_fmax, rpm, mode)
    required_lor = calculate_required_lor(fmax)

    if mode == AnalysisMode.PEAKVUE:
        lor, warning = select_peakvue_lor(required_lor, fmax)
    else:
        lor, warning = select_standard_lor_with_validation(required_lor, fmax, rpm)

    messages = []
    if warning:
        messages.append(warning)

    hp_filter_hz = None
    peakvue_fmax = None
    if mode == AnalysisMode.PEAKVUE:
        peakvue_fmax = fmax
        if bearing.frequencies is not None:
            selection = calculate_peakvue_hp_filter(bearing.frequencies.bpfi, rpm, constants)
        else:
            fallback_orders = None
            if constants.peakvue_rpm_fallback_orders != DEFAULT_CONSTANTS.peakvue_rpm_fallback_orders:
                fallback_orders = constants.peakvue_rpm_fallback_orders
            selection = calculate_peakvue_hp_filter_unknown_bearing(rpm, fallback_orders=fallback_orders)
        hp_filter_hz = selection.filter_hz

    result = APSetResult(
        rpm=rpm,
        analysis_mode=mode,
        bearing_model=bearing.designation,
        bearing_type=bearing.bearing_type,
        fmax=fmax,
        lor=lor,
        shaft_revolutions=shaft_revolutions(lor, rpm),
        is_valid=True,
        validation_messages=tuple(messages),
        calculated_fmax_hz=orders_to_hz(calculated_fmax, rpm),
        required_lor=required_lor,
        peakvue_fmax=peakvue_fmax,
        hp_filter_hz=hp_filter_hz,
        sensor_type=_label(sensor_type),
        mounting_method=_label(mounting_method),
        **_bearing_fields(bearing, rpm)
    )

    Logger.log_message_static(
        f"AP-Set: {bearing.designation} {mode.value} @ {rpm:g} RPM -> "
        f"Fmax {fmax:.2f} orders, LOR {lor}"
        + (f", HP filter {hp_filter_hz:g} Hz" if hp_filter_hz is not None else "")
        + (f" [{warning}]" if warning else ""),
        Logger.DEBUG,
    )
    return result


def calculate_shaft_bearing_ap_set(bearing: Optional[BearingData], rpm: float,
                                   mode: AnalysisMode = AnalysisMode.NORMAL,
                                   sensor_type=SensorType.ACCELEROMETER,
                                   mounting_method=MountingMethod.STUD) -> APSetResult:
    """
    Calculate one AP Set on the per-shaft sizing path.

    Generic bearings get the published baselines (70 orders / 800 lines
    Normal, 30.5 orders / 400 lines PeakVue). The tunable constants do not
    apply to this path. The PeakVue HP filter is 10x running speed rounded up
    to a standard filter, and the PeakVue result is labelled with a
    " (PeakVue)" suffix.
    """
    bearing = bearing or generic_bearing()

    errors = validate_rpm(rpm)
    if errors:
        return _invalid_result(bearing, rpm, mode, errors, sensor_type, mounting_method)
    rpm = float(rpm)

    fmax = calculate_shaft_bearing_fmax(mode, bearing)
    lor = baseline_lor(fmax)

    messages = []
    revolutions_ok, revolutions = validate_shaft_revolutions(fmax, lor)
    if not revolutions_ok:
        messages.append(f"Shaft revolutions ({revolutions:.1f}) < 15")

    model = bearing.designation
    hp_filter_hz = None
    peakvue_fmax = None
    if mode == AnalysisMode.PEAKVUE:
        model += PEAKVUE_LABEL_SUFFIX
        hp_filter_hz = calculate_peakvue_hp_filter_for_rpm(rpm)
        peakvue_fmax = fmax

    Logger.log_message_static(
        f"AP-Set: Per-shaft {model} @ {rpm:g} RPM -> Fmax {fmax:g} orders, LOR {lor}", Logger.DEBUG)

    return APSetResult(
        rpm=rpm,
        analysis_mode=mode,
        bearing_model=model,
        bearing_type=bearing.bearing_type,
        fmax=fmax,
        lor=lor,
        shaft_revolutions=shaft_revolutions(lor, rpm),
        is_valid=True,
        validation_messages=tuple(messages),
        calculated_fmax_hz=orders_to_hz(fmax, rpm),
        required_lor=calculate_required_lor(fmax),
        peakvue_fmax=peakvue_fmax,
        hp_filter_hz=hp_filter_hz,
        sensor_type=_label(sensor_type),
        mounting_method=_label(mounting_method),
        **_bearing_fields(bearing, rpm)
    )


def annotate_with_trends(result: APSetResult, equipment_type=None,
                         vane_blade_count: Optional[int] = None) -> APSetResult:
    """Return a copy of ``result`` carrying its trend recommendations."""
    trends = generate_trend_recommendations(result, equipment_type, vane_blade_count)
    return result.with_trends(trends)


def calculate_ap_set_pair(bearing: Optional[BearingData], rpm: float,
                          constants: CalculationConstants = DEFAULT_CONSTANTS,
                          sensor_type=SensorType.ACCELEROMETER,
                          mounting_method=MountingMethod.STUD,
                          equipment_type=None,
                          vane_blade_count: Optional[int] = None,
                          include_trends: bool = True,
                          path: CalculationPath = CalculationPath.DIRECT) -> Tuple[APSetResult, APSetResult]:
    """
    Normal and PeakVue AP Sets for one bearing.

    ``path`` picks the sizing: the direct path honours ``constants``, the
    per-shaft path always uses its published baselines.
    """
    results = []
    for mode in (AnalysisMode.NORMAL, AnalysisMode.PEAKVUE):
        if path == CalculationPath.PER_SHAFT:
            result = calculate_shaft_bearing_ap_set(bearing, rpm, mode, sensor_type, mounting_method)
        else:
            result = calculate_ap_set(bearing, rpm, mode, constants, sensor_type, mounting_method)
        if include_trends:
            result = annotate_with_trends(result, equipment_type, vane_blade_count)
        results.append(result)
    return results[0], results[1]


def calculate_ap_sets(bearings: Iterable[Optional[BearingData]], rpm: float,
                      constants: CalculationConstants = DEFAULT_CONSTANTS,
                      sensor_type=SensorType.ACCELEROMETER,
                      mounting_method=MountingMethod.STUD,
                      equipment_type=None,
                      vane_blade_count: Optional[int] = None,
                      max_workers: Optional[int] = None,
                      path: CalculationPath = CalculationPath.DIRECT) -> List[Tuple[APSetResult, APSetResult]]:
    """
    Calculate Normal and PeakVue AP Sets for several bearings.

    Each bearing is independent, so the pairs are computed on a thread pool.
    The constants value is taken once here and shared by every worker.

    Args:
        bearings (iterable): Bearings to size; None entries are generic.
        rpm (float): Running speed shared by all bearings.
        constants (CalculationConstants): Multiplier snapshot.
        sensor_type, mounting_method: Recorded on every result.
        equipment_type, vane_blade_count: Passed to trend generation.
        max_workers (int, optional): Thread pool size.
        path (CalculationPath): Direct or per-shaft sizing for every pair.

    Returns:
        list: (normal, peakvue) tuples in the same order as ``bearings``.
    """
    bearings = list(bearings)
    snapshot = constants

    Logger.log_message_static(
        f"AP-Set: Calculating {len(bearings)} bearing(s) at {rpm} RPM ({path.value})"
        + (" with custom constants" if path == CalculationPath.DIRECT and snapshot.has_custom_values else ""),
        Logger.INFO,
    )

    def calculate(bearing):
        return calculate_ap_set_pair(bearing, rpm, snapshot, sensor_type, mounting_method,
                                     equipment_type, vane_blade_count, path=path)

    if not bearings:
        return []

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="APSet") as executor:
        return list(executor.map(calculate, bearings))
