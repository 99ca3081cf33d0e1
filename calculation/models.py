"""
Data model shared by the calculation engine and its consumers.

Contains the analysis mode, equipment/sensor/mounting enumerations, the
bearing model (generic or specific), the AP Set result and the trend
recommendation types. All value types are immutable.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple


class BearingDataError(ValueError):
    """Raised when bearing coefficients do not form a complete, positive set."""


class AnalysisMode(Enum):
    NORMAL = "Normal"
    PEAKVUE = "PeakVue"


class CalculationPath(Enum):
    """Which Fmax sizing an AP Set batch uses."""
    PER_SHAFT = "Per-shaft baseline"
    DIRECT = "Direct multiplier"


class EquipmentType(Enum):
    MOTOR = "Motor"
    GENERATOR = "Generator"
    PUMP = "Pump"
    FAN_BLOWER = "Fan/Blower"
    COMPRESSOR = "Compressor"
    GEARBOX = "Gearbox"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label):
        """
        Map free text such as "fan", "Blower" or "Fan/Blower" to a member.

        Unknown or empty text maps to OTHER.
        """
        if label is None:
            return cls.OTHER
        if isinstance(label, cls):
            return label

        text = str(label).strip().lower()
        aliases = {
            'motor': cls.MOTOR,
            'generator': cls.GENERATOR,
            'pump': cls.PUMP,
            'fan': cls.FAN_BLOWER,
            'blower': cls.FAN_BLOWER,
            'fan/blower': cls.FAN_BLOWER,
            'compressor': cls.COMPRESSOR,
            'gearbox': cls.GEARBOX,
        }
        return aliases.get(text, cls.OTHER)

    @property
    def has_pass_frequency(self) -> bool:
        """Fans and pumps have a blade/vane pass frequency worth trending."""
        return self in (EquipmentType.FAN_BLOWER, EquipmentType.PUMP)


class SensorType(Enum):
    ACCELEROMETER = "Accelerometer"
    VELOCITY_PROBE = "Velocity Probe"
    PROXIMITY_PROBE = "Proximity Probe"

    @property
    def frequency_range(self) -> Tuple[float, float]:
        return {
            SensorType.ACCELEROMETER: (10.0, 80000.0),
            SensorType.VELOCITY_PROBE: (10.0, 2000.0),
            SensorType.PROXIMITY_PROBE: (0.1, 1000.0),
        }[self]

    @property
    def optimal_range(self) -> Tuple[float, float]:
        return {
            SensorType.ACCELEROMETER: (100.0, 20000.0),
            SensorType.VELOCITY_PROBE: (10.0, 1000.0),
            SensorType.PROXIMITY_PROBE: (1.0, 200.0),
        }[self]


class MountingMethod(Enum):
    STUD = "Stud Mount"
    MAGNET = "Magnetic Mount"
    HANDHELD = "Handheld"
    TRIAXIAL = "Triaxial Mount"

    @property
    def frequency_limitation(self) -> float:
        return {
            MountingMethod.STUD: 80000.0,
            MountingMethod.MAGNET: 2000.0,
            MountingMethod.HANDHELD: 1000.0,
            MountingMethod.TRIAXIAL: 10000.0,
        }[self]

    @property
    def reliability(self) -> str:
        return {
            MountingMethod.STUD: "Excellent",
            MountingMethod.MAGNET: "Good",
            MountingMethod.HANDHELD: "Fair",
            MountingMethod.TRIAXIAL: "Very Good",
        }[self]


@dataclass(frozen=True)
class BearingFrequencies:
    """Fault frequency coefficients in orders (multiples of running speed)."""

    bpfi: float
    bpfo: float
    bsf: float
    ftf: float

    def __post_init__(self):
        for name in ('bpfi', 'bpfo', 'bsf', 'ftf'):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise BearingDataError(f"{name.upper()} must be a positive number, got {value!r}")

    def scaled(self, rpm: float) -> Dict[str, float]:
        """Return the coefficients converted to Hz for the given RPM."""
        running_speed_hz = rpm / 60.0
        return {
            'bpfi': self.bpfi * running_speed_hz,
            'bpfo': self.bpfo * running_speed_hz,
            'bsf': self.bsf * running_speed_hz,
            'ftf': self.ftf * running_speed_hz,
        }


@dataclass(frozen=True)
class BearingData:
    """
    A bearing as seen by the calculation engine.

    A generic bearing has no ``frequencies``; a specific bearing always has
    the complete set of four coefficients.
    """

    designation: str
    bearing_type: str = "Generic"
    frequencies: Optional[BearingFrequencies] = None
    ball_roller_count: Optional[int] = None

    @property
    def is_generic(self) -> bool:
        return self.frequencies is None

    def scaled_frequencies(self, rpm: float) -> Optional[Dict[str, float]]:
        if self.frequencies is None:
            return None
        return self.frequencies.scaled(rpm)

    @classmethod
    def from_coefficients(cls, designation, bpfi=None, bpfo=None, bsf=None, ftf=None,
                          bearing_type=None, ball_roller_count=None):
        """
        Build a bearing from four optional coefficients.

        Args:
            designation (str): Display name, e.g. "SKF 6205".
            bpfi, bpfo, bsf, ftf (float or None): Fault coefficients in orders.
            bearing_type (str, optional): Bearing type label.
            ball_roller_count (int, optional): Number of rolling elements.

        Returns:
            BearingData: Generic when all four coefficients are None, specific
            when all four are present.

        Raises:
            BearingDataError: If only some coefficients are given, or a
                coefficient is not a positive number.
        """
        values = {'BPFI': bpfi, 'BPFO': bpfo, 'BSF': bsf, 'FTF': ftf}
        missing = [name for name, value in values.items() if value is None]

        if len(missing) == 4:
            return cls(designation=designation, bearing_type=bearing_type or "Generic",
                       ball_roller_count=ball_roller_count)
        if missing:
            raise BearingDataError(
                f"Bearing '{designation}' has an incomplete fault frequency set "
                f"(missing {', '.join(missing)})"
            )

        frequencies = BearingFrequencies(bpfi=bpfi, bpfo=bpfo, bsf=bsf, ftf=ftf)
        return cls(designation=designation, bearing_type=bearing_type or "Rolling Element",
                   frequencies=frequencies, ball_roller_count=ball_roller_count)


def generic_bearing(equipment_type=None) -> BearingData:
    """Return the generic fallback bearing for an equipment type."""
    names = {
        EquipmentType.MOTOR: "Generic Motor Bearing",
        EquipmentType.GENERATOR: "Generic Motor Bearing",
        EquipmentType.PUMP: "Generic Pump Bearing",
        EquipmentType.FAN_BLOWER: "Generic Fan Bearing",
        EquipmentType.GEARBOX: "Generic Gearbox Bearing",
    }
    equipment = EquipmentType.from_label(equipment_type)
    return BearingData(designation=names.get(equipment, "Generic Bearing"))


class TrendPriority(IntEnum):
    CRITICAL = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def color(self) -> str:
        return {
            TrendPriority.CRITICAL: "red",
            TrendPriority.HIGH: "orange",
            TrendPriority.MEDIUM: "blue",
            TrendPriority.LOW: "gray",
        }[self]


class TrendCategory(Enum):
    WAVEFORM = "waveform"
    STATISTICAL = "statistical"
    ORDER_BAND = "order_band"
    FREQUENCY_BAND = "frequency_band"
    BEARING_BAND = "bearing_band"
    EQUIPMENT_SPECIFIC = "equipment_specific"

    @property
    def is_band(self) -> bool:
        return self in (TrendCategory.ORDER_BAND, TrendCategory.FREQUENCY_BAND,
                        TrendCategory.BEARING_BAND, TrendCategory.EQUIPMENT_SPECIFIC)


@dataclass(frozen=True)
class TrendRecommendation:
    name: str
    category: TrendCategory
    priority: TrendPriority
    analysis_mode: AnalysisMode
    description: str
    fault_association: str
    frequency_range_hz: Optional[str] = None
    frequency_range_orders: Optional[str] = None
    # (start, end) in orders for band categories
    band_orders: Optional[Tuple[float, float]] = None
    center_hz: Optional[float] = None
    is_within_fmax: bool = True
    is_resolvable: bool = True

    @property
    def is_recommended(self) -> bool:
        return self.is_within_fmax and self.is_resolvable

    @property
    def display_name(self) -> str:
        if self.frequency_range_orders and self.frequency_range_hz:
            return f"{self.name} ({self.frequency_range_orders}, {self.frequency_range_hz})"
        if self.frequency_range_orders:
            return f"{self.name} ({self.frequency_range_orders})"
        if self.frequency_range_hz:
            return f"{self.name} ({self.frequency_range_hz})"
        return self.name


@dataclass(frozen=True)
class APSetResult:
    """
    One AP Set for a (bearing, analysis mode) pair.

    ``fmax`` and ``peakvue_fmax`` are in orders; ``calculated_fmax_hz`` and
    ``hp_filter_hz`` are in Hz.
    """

    rpm: float
    analysis_mode: AnalysisMode
    bearing_model: str
    fmax: float
    lor: int
    shaft_revolutions: float
    is_valid: bool = True
    validation_messages: Tuple[str, ...] = ()
    bearing_type: str = "Generic"
    calculated_fmax_hz: Optional[float] = None
    required_lor: Optional[int] = None
    peakvue_fmax: Optional[float] = None
    hp_filter_hz: Optional[float] = None
    order_bpfi: float = 0.0
    order_bpfo: float = 0.0
    order_bsf: float = 0.0
    order_ftf: float = 0.0
    scaled_bpfi: float = 0.0
    scaled_bpfo: float = 0.0
    scaled_bsf: float = 0.0
    scaled_ftf: float = 0.0
    sensor_type: str = SensorType.ACCELEROMETER.value
    mounting_method: str = MountingMethod.STUD.value
    trend_recommendations: Tuple[TrendRecommendation, ...] = field(default=())

    @property
    def fmax_hz(self) -> float:
        return self.fmax * (self.rpm / 60.0)

    @property
    def bin_width_hz(self) -> Optional[float]:
        if self.lor <= 0:
            return None
        return self.fmax_hz / self.lor

    @property
    def has_bearing_frequencies(self) -> bool:
        return any(order > 0 for order in (self.order_bpfi, self.order_bpfo, self.order_bsf, self.order_ftf))

    def with_trends(self, trends) -> 'APSetResult':
        return replace(self, trend_recommendations=tuple(trends))

    def recommended_trends(self):
        return [trend for trend in self.trend_recommendations if trend.is_recommended]
