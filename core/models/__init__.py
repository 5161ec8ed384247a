# File: hvac_component_models/core/models/__init__.py
import logging

logger = logging.getLogger(__name__)
logger.debug("Initializing core.models package...")

from .base import Component, DataPoint
from .prescribed_outlet_state import (
    OutletState,
    OutletStateConfig,
    PrescribedOutletState,
    SetpointChannel,
    SetpointSource,
)

# Define what is typically imported, like `from core.models import PrescribedOutletState`.
__all__ = [
    "Component",
    "DataPoint",
    "OutletState",
    "OutletStateConfig",
    "PrescribedOutletState",
    "SetpointChannel",
    "SetpointSource",
]

logger.debug("core.models package initialization complete. Available models/classes: %s", ", ".join(__all__))
