# hvac_component_models/config/component_loader.py

import json
import logging
import os
from typing import Dict, Any, Optional, Tuple

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from core.models import (
    Component, OutletStateConfig, PrescribedOutletState, SetpointChannel
)
from core.physics.media import MEDIA
from config import settings

logger = logging.getLogger(__name__)

INF = float("inf")


# --- Pydantic Models for Component Configuration Validation ---
class SetpointChannelModel(BaseModel):
    enabled: bool = True
    fallback: Optional[float] = None


class OutletStateConfigModel(BaseModel):
    component_id: str
    component_type: str = "PrescribedOutletState"
    description: Optional[str] = None
    medium: str = settings.DEFAULT_MEDIUM
    m_flow_nominal: float = Field(gt=0)
    m_flow_small: Optional[float] = Field(default=None, gt=0)
    q_max_flow: float = Field(default=INF, ge=0)
    q_min_flow: float = Field(default=-INF, le=0)
    m_wat_max_flow: float = Field(default=INF, ge=0)
    m_wat_min_flow: float = Field(default=-INF, le=0)
    temperature_setpoint: SetpointChannelModel = Field(default_factory=SetpointChannelModel)
    moisture_setpoint: SetpointChannelModel = Field(default_factory=lambda: SetpointChannelModel(enabled=False))
    delta_t_smoothing_k: float = Field(default=settings.DELTA_T_SMOOTHING_K, gt=0)
    delta_x_smoothing: float = Field(default=settings.DELTA_X_SMOOTHING, gt=0)
    tau: float = Field(default=settings.DEFAULT_TAU_SECONDS, ge=0)

    @field_validator('q_max_flow', 'q_min_flow', 'm_wat_max_flow', 'm_wat_min_flow', mode='before')
    @classmethod
    def parse_unlimited(cls, v, info: ValidationInfo):
        # JSON has no infinity literal; accept "inf", "-inf", "unlimited" and null
        unlimited = -INF if info.field_name.endswith("min_flow") else INF
        if v is None:
            return unlimited
        if isinstance(v, str):
            text = v.strip().lower()
            if text == "unlimited":
                return unlimited
            if text in ("inf", "+inf", "infinity"):
                return INF
            if text in ("-inf", "-infinity"):
                return -INF
        return v

    @field_validator('medium', mode='before')
    @classmethod
    def validate_medium(cls, v):
        if not isinstance(v, str) or v.lower() not in MEDIA:
            raise ValueError(f"Unknown medium '{v}'. Available media: {', '.join(sorted(MEDIA))}")
        return v.lower()

    def to_config(self) -> OutletStateConfig:
        return OutletStateConfig(
            m_flow_nominal=self.m_flow_nominal,
            medium=self.medium,
            m_flow_small=self.m_flow_small,
            q_max_flow=self.q_max_flow,
            q_min_flow=self.q_min_flow,
            m_wat_max_flow=self.m_wat_max_flow,
            m_wat_min_flow=self.m_wat_min_flow,
            temperature_setpoint=SetpointChannel(**self.temperature_setpoint.model_dump()),
            moisture_setpoint=SetpointChannel(**self.moisture_setpoint.model_dump()),
            delta_t_smoothing_k=self.delta_t_smoothing_k,
            delta_x_smoothing=self.delta_x_smoothing,
            tau=self.tau,
        )


# A mapping from component_type string in the configuration to its model and Python class
COMPONENT_CLASS_MAP: Dict[str, Tuple[type, type]] = {
    "PrescribedOutletState": (OutletStateConfigModel, PrescribedOutletState),
}


def create_component(component_data: Dict[str, Any]) -> Component:
    """
    Factory function to create a component instance from its configuration data.

    Raises:
        ValueError: If the component type is unknown or the configuration is inconsistent
        pydantic.ValidationError: If the configuration data fails validation
    """
    component_type = component_data.get("component_type", "PrescribedOutletState")
    entry = COMPONENT_CLASS_MAP.get(component_type)
    if not entry:
        raise ValueError(f"Unknown component type '{component_type}' for component_id '{component_data.get('component_id')}'.")

    model_class, component_class = entry
    model = model_class(**component_data)
    component = component_class(model.component_id, model.to_config(), description=model.description)
    logger.info(f"Created {component} from configuration.")
    return component


def load_component_config(file_path: str) -> Dict[str, Any]:
    """Reads a component configuration JSON file into a dictionary."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Component configuration file not found: {file_path}")

    with open(file_path, mode='r', encoding='utf-8') as f:
        component_data = json.load(f)
    logger.info(f"Loaded component configuration from: {file_path}")
    return component_data


def load_component(file_path: str) -> Component:
    """Loads a component configuration file and creates the component instance."""
    return create_component(load_component_config(file_path))
