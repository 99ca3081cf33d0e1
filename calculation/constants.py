"""
Calculation constants for AP Set planning.

Two kinds of values live here:

- Fixed tables that never change at runtime: the published LOR, Fmax and
  HP filter option lists, the LOR multiplier and the shaft-revolution and
  bin-width requirements.
- The five tunable multipliers, grouped in the immutable
  ``CalculationConstants`` value. Every calculation receives such a value
  explicitly; ``AdvancedCalculationSettings.to_constants()`` produces one from
  the user's advanced-mode settings.

Validation ranges and industry references for the tunable values are provided
for the settings UI, which warns about (but does not reject) values outside
the usual range.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Tuple

# Lines of resolution per order of Fmax
LOR_MULTIPLIER = 15.0
MINIMUM_SHAFT_REVOLUTIONS = 15.0
MAXIMUM_BIN_WIDTH_HZ = 1.0

STANDARD_LOR_OPTIONS: Tuple[int, ...] = (100, 200, 400, 800, 1600, 3200, 6400, 12800)
PEAKVUE_MINIMUM_LOR = 1600

STANDARD_FMAX_OPTIONS_HZ: Tuple[float, ...] = (100.0, 200.0, 500.0, 1000.0, 2000.0, 5000.0, 10000.0, 20000.0)
PEAKVUE_FMAX_OPTIONS_HZ: Tuple[float, ...] = (100.0, 200.0, 500.0, 1000.0, 2000.0, 5000.0)
NORMAL_MAX_FMAX_HZ = 20000.0
PEAKVUE_MAX_FMAX_HZ = 5000.0

STANDARD_HP_FILTERS_HZ: Tuple[float, ...] = (500.0, 1000.0, 2000.0, 5000.0, 10000.0, 20000.0)
DEFAULT_HP_FILTER_HZ = 1000.0

PEAKVUE_GMF_MULTIPLIER = 1.0

# Per-shaft sizing path
SHAFT_NORMAL_BEARING_MULTIPLIER = 3.25
SHAFT_PEAKVUE_BEARING_MULTIPLIER = 1.25
SHAFT_NORMAL_MAX_FMAX_ORDERS = 200.0
SHAFT_PEAKVUE_MAX_FMAX_ORDERS = 100.0

# Published baseline AP Sets for generic bearings (orders, lines)
GENERIC_NORMAL_FMAX_ORDERS = 70.0
GENERIC_NORMAL_LOR = 800
GENERIC_PEAKVUE_FMAX_ORDERS = 30.5
GENERIC_PEAKVUE_LOR = 400

MAXIMUM_RPM = 50000.0


@dataclass(frozen=True)
class CalculationConstants:
    """Snapshot of the tunable multipliers used by one calculation."""

    normal_bpfi_multiplier: float = 7.0
    normal_gmf_multiplier: float = 3.5
    normal_rpm_fallback_orders: float = 70.0
    peakvue_bpfi_multiplier: float = 4.0
    peakvue_rpm_fallback_orders: float = 30.0

    @property
    def has_custom_values(self) -> bool:
        return self != DEFAULT_CONSTANTS


DEFAULT_CONSTANTS = CalculationConstants()


# Suggested ranges, keyed by parameter name
MULTIPLIER_RANGES: Dict[str, Tuple[float, float]] = {
    'normalBPFI': (4.0, 15.0),
    'normalGMF': (2.0, 5.0),
    'normalRPMFallback': (50.0, 100.0),
    'peakVueBPFI': (3.0, 6.0),
    'peakVueRPMFallback': (25.0, 40.0),
}

INDUSTRY_STANDARDS: Dict[str, Dict[str, Any]] = {
    'normalBPFI': {
        'standard': 7.0,
        'range': "5-12x",
        'sources': "ISO 13373-7, API 670, NEMA MG-1",
    },
    'normalGMF': {
        'standard': 3.5,
        'range': "2-5x",
        'sources': "AGMA 6000, ISO 8579",
    },
    'normalRPMFallback': {
        'standard': 70.0,
        'range': "60-100 orders",
        'sources': "ISO 10816, API Standards, SKF Guidelines",
    },
    'peakVueBPFI': {
        'standard': 4.0,
        'range': "3-6x",
        'sources': "Emerson/CSI Standards, SKF Research",
    },
    'peakVueRPMFallback': {
        'standard': 30.0,
        'range': "25-40 orders",
        'sources': "PeakVue Analysis Standards",
    },
}


class ValidationWarningLevel(Enum):
    NONE = "none"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class MultiplierValidation:
    """Outcome of checking one advanced-mode value against its suggested range."""

    parameter: str
    value: float
    suggested_range: Tuple[float, float]
    industry_standard: float
    industry_range: str
    sources: str

    @property
    def is_in_range(self) -> bool:
        low, high = self.suggested_range
        return low <= self.value <= high

    @property
    def is_very_high(self) -> bool:
        return self.value > self.suggested_range[1] * 1.5

    @property
    def is_very_low(self) -> bool:
        return self.value < self.suggested_range[0] * 0.5

    @property
    def warning_level(self) -> ValidationWarningLevel:
        if self.is_very_high or self.is_very_low:
            return ValidationWarningLevel.CRITICAL
        if not self.is_in_range:
            return ValidationWarningLevel.WARNING
        return ValidationWarningLevel.NONE


def validate_multiplier(value: float, parameter: str) -> MultiplierValidation:
    """
    Validate an advanced-mode value and attach industry guidance.

    Args:
        value (float): The value entered by the user.
        parameter (str): One of 'normalBPFI', 'normalGMF', 'normalRPMFallback',
            'peakVueBPFI', 'peakVueRPMFallback'.

    Returns:
        MultiplierValidation: Range check result with the industry reference.

    Raises:
        KeyError: If the parameter name is unknown.
    """
    standard = INDUSTRY_STANDARDS[parameter]
    return MultiplierValidation(
        parameter=parameter,
        value=value,
        suggested_range=MULTIPLIER_RANGES[parameter],
        industry_standard=standard['standard'],
        industry_range=standard['range'],
        sources=standard['sources'],
    )


@dataclass(frozen=True)
class AdvancedCalculationSettings:
    """
    User-facing advanced settings.

    When ``advanced_mode_enabled`` is False the custom values are kept (so the
    user does not lose them) but calculations use the defaults.
    """

    advanced_mode_enabled: bool = False
    normal_bpfi_multiplier: float = 7.0
    normal_gmf_multiplier: float = 3.5
    normal_rpm_fallback_orders: float = 70.0
    peakvue_bpfi_multiplier: float = 4.0
    peakvue_rpm_fallback_orders: float = 30.0

    def to_constants(self) -> CalculationConstants:
        if not self.advanced_mode_enabled:
            return DEFAULT_CONSTANTS
        return CalculationConstants(
            normal_bpfi_multiplier=self.normal_bpfi_multiplier,
            normal_gmf_multiplier=self.normal_gmf_multiplier,
            normal_rpm_fallback_orders=self.normal_rpm_fallback_orders,
            peakvue_bpfi_multiplier=self.peakvue_bpfi_multiplier,
            peakvue_rpm_fallback_orders=self.peakvue_rpm_fallback_orders,
        )

    def validations(self) -> Dict[str, MultiplierValidation]:
        """Validate all five values; keys are the parameter names."""
        return {
            'normalBPFI': validate_multiplier(self.normal_bpfi_multiplier, 'normalBPFI'),
            'normalGMF': validate_multiplier(self.normal_gmf_multiplier, 'normalGMF'),
            'normalRPMFallback': validate_multiplier(self.normal_rpm_fallback_orders, 'normalRPMFallback'),
            'peakVueBPFI': validate_multiplier(self.peakvue_bpfi_multiplier, 'peakVueBPFI'),
            'peakVueRPMFallback': validate_multiplier(self.peakvue_rpm_fallback_orders, 'peakVueRPMFallback'),
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'AdvancedCalculationSettings':
        defaults = cls()
        return cls(
            advanced_mode_enabled=bool(values.get('advanced_mode_enabled', defaults.advanced_mode_enabled)),
            normal_bpfi_multiplier=float(values.get('normal_bpfi_multiplier', defaults.normal_bpfi_multiplier)),
            normal_gmf_multiplier=float(values.get('normal_gmf_multiplier', defaults.normal_gmf_multiplier)),
            normal_rpm_fallback_orders=float(
                values.get('normal_rpm_fallback_orders', defaults.normal_rpm_fallback_orders)),
            peakvue_bpfi_multiplier=float(values.get('peakvue_bpfi_multiplier', defaults.peakvue_bpfi_multiplier)),
            peakvue_rpm_fallback_orders=float(
                values.get('peakvue_rpm_fallback_orders', defaults.peakvue_rpm_fallback_orders)),
        )


STANDARD_SETTINGS = AdvancedCalculationSettings()
