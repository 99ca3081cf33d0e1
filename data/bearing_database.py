"""
Bearing fault-frequency database.

Loads the bearing master file, a JSON object mapping "MANUFACTURER MODEL"
strings to their fault frequency coefficients (in orders):

    {
        "SKF 6205": {"BPFI": 5.415, "BPFO": 3.585, "BSF": 2.357, "FTF": 0.398, "BR_COUNT": 9},
        ...
    }

Entries are converted to ``BearingData`` at load time, so anything with an
incomplete or non-positive coefficient set is rejected here and never reaches
the calculation engine.
"""

import os
import json
from typing import Dict, List, Optional

from calculation.models import BearingData, BearingDataError
from utils.logger import Logger

DEFAULT_DATABASE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "_assets", "bearings-master.json")

_COEFFICIENT_KEYS = ('BPFI', 'BPFO', 'BSF', 'FTF')


def _split_model(model: str):
    """Return (manufacturer, number) for "SKF 6205", or (None, model) without a manufacturer."""
    parts = model.split(" ", 1)
    if len(parts) > 1:
        return parts[0], parts[1]
    return None, model


def _series_of(number: str) -> Optional[str]:
    """Series of a bearing number, e.g. "620" for 6203, "NU" for NU210, "73" for 7307."""
    if number.startswith("6"):
        return number[:3]
    if number.startswith("NU"):
        return "NU"
    if number.startswith("22"):
        return "22"
    if number.startswith("32"):
        return "32"
    if number.startswith("7"):
        return number[:2]
    if number.startswith("N"):
        return "N"
    return None


class BearingDatabase:
    """In-memory lookup of bearing models loaded from a master JSON file."""

    def __init__(self, bearings: Optional[Dict[str, BearingData]] = None):
        self.bearings: Dict[str, BearingData] = dict(bearings or {})
        self.loaded_sources: List[str] = []

    @classmethod
    def load(cls, file_path: str = DEFAULT_DATABASE_PATH) -> 'BearingDatabase':
        """
        Load a bearing master file.

        Args:
            file_path (str): Path to the JSON master file.

        Returns:
            BearingDatabase: Database holding every valid entry of the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            IOError: If the file cannot be read or is not a JSON object.
        """
        Logger.log_message_static(f"Bearing-DB: Loading bearings from {os.path.basename(file_path)}", Logger.INFO)

        if not os.path.exists(file_path):
            Logger.log_message_static(f"Bearing-DB: File not found: {file_path}", Logger.ERROR)
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            Logger.log_message_static(f"Bearing-DB: Invalid JSON in bearing file: {str(e)}", Logger.ERROR)
            raise IOError(f"Failed to load bearing database: Invalid JSON format - {e}")
        except OSError as e:
            Logger.log_message_static(f"Bearing-DB: Failed to read bearing file: {str(e)}", Logger.ERROR)
            raise IOError(f"Failed to load bearing database: {e}")

        if not isinstance(raw, dict):
            Logger.log_message_static("Bearing-DB: Bearing file root is not a JSON object", Logger.ERROR)
            raise IOError("Failed to load bearing database: expected a JSON object of bearing models")

        bearings = {}
        skipped = 0
        for model, info in raw.items():
            try:
                bearings[model] = cls._parse_entry(model, info)
            except BearingDataError as e:
                skipped += 1
                Logger.log_message_static(f"Bearing-DB: Skipping '{model}': {e}", Logger.WARNING)

        database = cls(bearings)
        database.loaded_sources.append(file_path)
        Logger.log_message_static(
            f"Bearing-DB: Loaded {len(bearings)} bearings ({skipped} skipped)", Logger.INFO)
        return database

    @staticmethod
    def _parse_entry(model: str, info) -> BearingData:
        if not isinstance(info, dict):
            raise BearingDataError("entry is not an object")

        values = {key: info.get(key) for key in _COEFFICIENT_KEYS}
        for key, value in values.items():
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise BearingDataError(f"{key} is not a number")

        count = info.get('BR_COUNT')
        return BearingData.from_coefficients(
            model,
            bpfi=None if values['BPFI'] is None else float(values['BPFI']),
            bpfo=None if values['BPFO'] is None else float(values['BPFO']),
            bsf=None if values['BSF'] is None else float(values['BSF']),
            ftf=None if values['FTF'] is None else float(values['FTF']),
            ball_roller_count=int(count) if isinstance(count, (int, float)) else None,
        )

    def __len__(self):
        return len(self.bearings)

    def __contains__(self, model):
        return model in self.bearings

    def get_bearing(self, model: str) -> Optional[BearingData]:
        return self.bearings.get(model)

    def all_models(self) -> List[str]:
        return sorted(self.bearings)

    def models_with_prefix(self, prefix: str) -> List[str]:
        """Models starting with ``prefix`` (case-insensitive), e.g. a brand."""
        prefix = prefix.lower()
        return sorted(model for model in self.bearings if model.lower().startswith(prefix))

    def models_by_series(self, series: str) -> List[str]:
        """Models whose bearing number starts with ``series`` (e.g. "620", "NU")."""
        return sorted(model for model in self.bearings if _split_model(model)[1].startswith(series))

    def available_series(self) -> List[str]:
        series = {_series_of(_split_model(model)[1]) for model in self.bearings}
        series.discard(None)
        return sorted(series)

    def available_manufacturers(self) -> List[str]:
        manufacturers = {_split_model(model)[0].upper() for model in self.bearings if _split_model(model)[0]}
        return sorted(manufacturers)

    def bearings_by_manufacturer(self, manufacturer: str) -> List[str]:
        manufacturer = manufacturer.upper()
        return sorted(model for model in self.bearings
                      if (_split_model(model)[0] or "").upper() == manufacturer)

    def search(self, query: str) -> List[str]:
        query = query.lower()
        return sorted(model for model in self.bearings if query in model.lower())

    def stats(self) -> Dict[str, int]:
        return {
            'total': len(self.bearings),
            'series': len(self.available_series()),
            'manufacturers': len(self.available_manufacturers()),
        }
