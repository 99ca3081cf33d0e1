"""
AP Set calculation engine.

This package turns {RPM, bearing fault coefficients, analysis mode} into
acquisition parameters and trend recommendations:
- constants: fixed option tables and the tunable multiplier snapshot
- models: bearing, result and trend types
- formulas: Fmax, LOR, HP filter and conversion formulas
- filters: PeakVue HP filter selection and validation
- ap_set: assembly of complete AP Set results (single and batch)
- trends: trend recommendation generation

The engine loads and stores nothing itself and does not depend on the data, security or ui
packages.
"""

from calculation.constants import (
    CalculationConstants,
    DEFAULT_CONSTANTS,
    AdvancedCalculationSettings,
    STANDARD_SETTINGS,
    validate_multiplier
)

from calculation.models import (
    AnalysisMode,
    CalculationPath,
    EquipmentType,
    SensorType,
    MountingMethod,
    BearingDataError,
    BearingFrequencies,
    BearingData,
    generic_bearing,
    APSetResult,
    TrendCategory,
    TrendPriority,
    TrendRecommendation
)

from calculation.formulas import (
    calculate_fmax,
    calculate_shaft_bearing_fmax,
    calculate_required_lor,
    select_standard_lor,
    select_standard_lor_with_validation,
    select_peakvue_lor,
    select_standard_hp_filter,
    recommend_standard_fmax,
    recommend_standard_fmax_hz,
    shaft_revolutions,
    acquisition_time,
    validate_rpm
)

from calculation.ap_set import (
    calculate_ap_set,
    calculate_shaft_bearing_ap_set,
    calculate_ap_set_pair,
    calculate_ap_sets,
    annotate_with_trends
)

from calculation.trends import (
    generate_trend_recommendations,
    format_trends_for_display
)

__all__ = [
    # Configuration
    'CalculationConstants',
    'DEFAULT_CONSTANTS',
    'AdvancedCalculationSettings',
    'STANDARD_SETTINGS',
    'validate_multiplier',

    # Data model
    'AnalysisMode',
    'CalculationPath',
    'EquipmentType',
    'SensorType',
    'MountingMethod',
    'BearingDataError',
    'BearingFrequencies',
    'BearingData',
    'generic_bearing',
    'APSetResult',
    'TrendCategory',
    'TrendPriority',
    'TrendRecommendation',

    # Formulas
    'calculate_fmax',
    'calculate_shaft_bearing_fmax',
    'calculate_required_lor',
    'select_standard_lor',
    'select_standard_lor_with_validation',
    'select_peakvue_lor',
    'select_standard_hp_filter',
    'recommend_standard_fmax',
    'recommend_standard_fmax_hz',
    'shaft_revolutions',
    'acquisition_time',
    'validate_rpm',

    # Assembly
    'calculate_ap_set',
    'calculate_shaft_bearing_ap_set',
    'calculate_ap_set_pair',
    'calculate_ap_sets',
    'annotate_with_trends',

    # Trends
    'generate_trend_recommendations',
    'format_trends_for_display'
]
