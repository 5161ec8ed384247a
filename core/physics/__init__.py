# File: hvac_component_models/core/physics/__init__.py
"""
Physics Module for HVAC Component Models

This module provides the numerical building blocks of the component models:
- Smoothing: differentiable min/max/limit functions
- Setpoint Controller: capacity-limited setpoint tracking
- Flow Regularization: zero and reverse flow handling
- Media: enthalpy and temperature of moist air and liquid water
"""

from .smoothing import reg_non_zero_power, smooth_max, smooth_min, smooth_limit
from .setpoint_controller import (
    CapacityLimitedSetpointController,
    LimitMode,
    SetpointRequest,
    SetpointResult,
    evaluate,
)
from .flow_regularization import positive_flow, non_zero_flow, regularization_width
from .media import MoistAir, Water, get_medium

__all__ = [
    # Smoothing
    'reg_non_zero_power',
    'smooth_max',
    'smooth_min',
    'smooth_limit',
    # Setpoint Controller
    'CapacityLimitedSetpointController',
    'LimitMode',
    'SetpointRequest',
    'SetpointResult',
    'evaluate',
    # Flow Regularization
    'positive_flow',
    'non_zero_flow',
    'regularization_width',
    # Media
    'MoistAir',
    'Water',
    'get_medium',
]
