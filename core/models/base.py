# File: hvac_component_models/core/models/base.py
import logging
from typing import Any, Optional, Dict

logger = logging.getLogger(__name__)

class DataPoint:
    """Represents a single output signal of a component, like a heat flow rate or outlet temperature."""
    def __init__(self, name: str, unit: Optional[str] = None):
        self.name: str = name
        self.value: Any = None
        self.unit: Optional[str] = unit
        self.time_s: Optional[float] = None
        self.status: str = "NoData"

    def update(self, value: Any, time_s: Optional[float] = None, status: str = "OK"):
        self.value = value
        self.time_s = time_s
        self.status = status

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "unit": self.unit,
            "time_s": self.time_s,
            "status": self.status
        }

    def __str__(self) -> str:
        time_str = f"{self.time_s:g} s" if self.time_s is not None else "N/A"
        unit_str = f" {self.unit}" if self.unit else ""
        return f"{self.name}: {self.value}{unit_str} (Status: {self.status} @ {time_str})"

class Component:
    """Base class for all component models evaluated by the simulation harness."""
    def __init__(self,
                 component_id: str,
                 component_type: str,
                 description: Optional[str] = None,
                 **kwargs):
        self.component_id: str = component_id
        self.component_type: str = component_type
        self.description: Optional[str] = description

        self._additional_properties: Dict[str, Any] = kwargs
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.debug(f"Skipping kwarg '{key}' for component '{component_id}': attribute already exists.")

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the static configuration of the component to a dictionary."""
        data = {
            "component_id": self.component_id,
            "component_type": self.component_type,
            "description": self.description,
        }
        data.update(self._additional_properties)
        return data

    def __str__(self) -> str:
        return f"{self.component_type} '{self.component_id}'"
