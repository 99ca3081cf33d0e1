"""
Saved build persistence.

A "build" is one complete calculator session: the inputs (equipment, sensor,
speed, bearings, advanced settings) together with the AP Set results that
were computed for them. Builds are kept in a single JSON file and results are
stored as computed data; loading a build never recalculates anything.

Classes:
    BuildConfiguration: Calculator inputs of a build
    SavedBuild: A named build with its results
    BuildStore: JSON-file backed collection of saved builds

Functions:
    result_to_dict / result_from_dict: APSetResult (de)serialization
"""

import os
import json
import uuid
import datetime
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from calculation.constants import AdvancedCalculationSettings, STANDARD_SETTINGS
from calculation.models import (
    AnalysisMode, APSetResult, CalculationPath, MountingMethod, SensorType,
    TrendCategory, TrendPriority, TrendRecommendation,
)
from utils.logger import Logger


def trend_to_dict(trend: TrendRecommendation) -> Dict[str, Any]:
    data = asdict(trend)
    data['category'] = trend.category.value
    data['priority'] = trend.priority.name
    data['analysis_mode'] = trend.analysis_mode.value
    data['band_orders'] = list(trend.band_orders) if trend.band_orders else None
    return data


def trend_from_dict(data: Dict[str, Any]) -> TrendRecommendation:
    values = dict(data)
    values['category'] = TrendCategory(values['category'])
    values['priority'] = TrendPriority[values['priority']]
    values['analysis_mode'] = AnalysisMode(values['analysis_mode'])
    if values.get('band_orders'):
        values['band_orders'] = tuple(values['band_orders'])
    return TrendRecommendation(**values)


def result_to_dict(result: APSetResult) -> Dict[str, Any]:
    """Serialize an AP Set result, including its trends, to JSON-compatible data."""
    data = {name: value for name, value in asdict(result).items() if name != 'trend_recommendations'}
    data['analysis_mode'] = result.analysis_mode.value
    data['validation_messages'] = list(result.validation_messages)
    data['trend_recommendations'] = [trend_to_dict(trend) for trend in result.trend_recommendations]
    return data


def result_from_dict(data: Dict[str, Any]) -> APSetResult:
    values = dict(data)
    values['analysis_mode'] = AnalysisMode(values['analysis_mode'])
    values['validation_messages'] = tuple(values.get('validation_messages', ()))
    values['trend_recommendations'] = tuple(
        trend_from_dict(trend) for trend in values.get('trend_recommendations', ()))
    return APSetResult(**values)


@dataclass
class BuildConfiguration:
    """Calculator inputs captured with a build."""

    equipment_type: str = ""
    sensor_type: str = SensorType.ACCELEROMETER.value
    mounting_method: str = MountingMethod.STUD.value
    rpm: float = 0.0
    bearing_models: List[str] = field(default_factory=list)
    vane_blade_count: Optional[int] = None
    advanced_settings: AdvancedCalculationSettings = STANDARD_SETTINGS
    calculation_path: str = CalculationPath.PER_SHAFT.value

    @property
    def bearing_info_known(self) -> bool:
        return any(model for model in self.bearing_models)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'equipment_type': self.equipment_type,
            'sensor_type': self.sensor_type,
            'mounting_method': self.mounting_method,
            'rpm': self.rpm,
            'bearing_models': list(self.bearing_models),
            'vane_blade_count': self.vane_blade_count,
            'advanced_settings': self.advanced_settings.to_dict(),
            'calculation_path': self.calculation_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BuildConfiguration':
        return cls(
            equipment_type=data.get('equipment_type', ""),
            sensor_type=data.get('sensor_type', SensorType.ACCELEROMETER.value),
            mounting_method=data.get('mounting_method', MountingMethod.STUD.value),
            rpm=float(data.get('rpm', 0.0)),
            bearing_models=list(data.get('bearing_models', [])),
            vane_blade_count=data.get('vane_blade_count'),
            advanced_settings=AdvancedCalculationSettings.from_dict(data.get('advanced_settings', {})),
            calculation_path=data.get('calculation_path', CalculationPath.PER_SHAFT.value),
        )


@dataclass
class SavedBuild:
    name: str
    configuration: BuildConfiguration
    results: List[APSetResult] = field(default_factory=list)
    notes: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created: datetime.datetime = field(default_factory=datetime.datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'created': self.created.isoformat(),
            'configuration': self.configuration.to_dict(),
            'results': [result_to_dict(result) for result in self.results],
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SavedBuild':
        return cls(
            id=data['id'],
            name=data['name'],
            created=datetime.datetime.fromisoformat(data['created']),
            configuration=BuildConfiguration.from_dict(data.get('configuration', {})),
            results=[result_from_dict(result) for result in data.get('results', [])],
            notes=data.get('notes'),
        )


class BuildStore:
    """
    Saved builds persisted to one JSON file.

    The file is read once when the store is created and rewritten after
    every change. A store without a file path keeps builds in memory only.
    """

    def __init__(self, file_path: Optional[str]):
        self.file_path = file_path
        self._builds: List[SavedBuild] = []
        if file_path and os.path.exists(file_path):
            self._load()

    def _load(self):
        Logger.log_message_static(f"Builds: Loading saved builds from {os.path.basename(self.file_path)}", Logger.INFO)
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            self._builds = [SavedBuild.from_dict(item) for item in raw.get('builds', [])]
        except json.JSONDecodeError as e:
            Logger.log_message_static(f"Builds: Invalid JSON in build file: {str(e)}", Logger.ERROR)
            raise IOError(f"Failed to load saved builds: Invalid JSON format - {e}")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            Logger.log_message_static(f"Builds: Malformed build file: {str(e)}", Logger.ERROR)
            raise IOError(f"Failed to load saved builds: {e}")
        Logger.log_message_static(f"Builds: Loaded {len(self._builds)} saved builds", Logger.DEBUG)

    def _persist(self):
        if not self.file_path:
            return
        try:
            directory = os.path.dirname(self.file_path)
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump({'builds': [build.to_dict() for build in self._builds]}, f, indent=4)
        except OSError as e:
            Logger.log_message_static(f"Builds: Failed to save builds: {str(e)}", Logger.ERROR)
            raise IOError(f"Failed to save builds: {e}")

    def save_build(self, build: SavedBuild) -> SavedBuild:
        self._builds.append(build)
        self._persist()
        Logger.log_message_static(f"Builds: Saved build '{build.name}'", Logger.INFO)
        return build

    def all_builds(self) -> List[SavedBuild]:
        return list(self._builds)

    def get_build(self, build_id: str) -> Optional[SavedBuild]:
        return next((build for build in self._builds if build.id == build_id), None)

    def update_build(self, build: SavedBuild) -> bool:
        """Replace the stored build with the same id. Returns False if it is unknown."""
        for index, existing in enumerate(self._builds):
            if existing.id == build.id:
                self._builds[index] = build
                self._persist()
                return True
        return False

    def delete_build(self, build_id: str) -> bool:
        remaining = [build for build in self._builds if build.id != build_id]
        if len(remaining) == len(self._builds):
            return False
        self._builds = remaining
        self._persist()
        Logger.log_message_static(f"Builds: Deleted build {build_id}", Logger.INFO)
        return True
