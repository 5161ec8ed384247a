# File: utils/helpers.py
import enum
import logging
import json
import math
from typing import Optional

import numpy as np

def setup_main_logging(level: Optional[str] = None):
    """Sets up basic root logging configuration."""
    logging.basicConfig(
        level=(level or "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def kelvin_to_celsius(temperature_k: float) -> float:
    return temperature_k - 273.15


def celsius_to_kelvin(temperature_c: float) -> float:
    return temperature_c + 273.15


class CustomJsonEncoder(json.JSONEncoder):
    """
    Custom JSON encoder to handle types not serializable by default,
    specifically numpy scalars and arrays, enums and non-finite floats.
    """
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return _finite_or_string(float(obj))
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, enum.Enum):
            return obj.value
        # Let the base class default method raise the TypeError for other types
        return json.JSONEncoder.default(self, obj)

    def iterencode(self, o, _one_shot=False):
        # Plain floats never reach default(); replace non-finite ones up front
        return super().iterencode(_sanitize(o), _one_shot)


def _finite_or_string(value: float):
    # Unlimited capacities are infinite; JSON has no literal for them
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if math.isnan(value):
        return None
    return value


def _sanitize(obj):
    if isinstance(obj, float):
        return _finite_or_string(obj)
    if isinstance(obj, dict):
        return {k: _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    return obj
