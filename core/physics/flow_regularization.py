# File: hvac_component_models/core/physics/flow_regularization.py
"""
Flow rate regularization for setpoint tracking.

The capacity-limited controller divides by the flow rate and multiplies the
deliverable change by it. These helpers produce the two floored flow values
it expects, smoothly, so that zero and reversed flow stay well-posed.
"""

import sys

from .smoothing import smooth_max

# Float machine epsilon, the floor for the divisor flow rate
EPS = sys.float_info.epsilon


def regularization_width(m_flow_small: float) -> float:
    """Smoothing width used around zero flow [kg/s]."""
    return m_flow_small / 1E3


def positive_flow(m_flow: float, delta_reg: float) -> float:
    """Flow rate floored smoothly at zero; never negative for reverse flow."""
    return smooth_max(m_flow, 0.0, delta_reg)


def non_zero_flow(m_flow: float, delta_reg: float) -> float:
    """Flow magnitude floored smoothly away from zero, safe to divide by."""
    return smooth_max(abs(m_flow), EPS, delta_reg)
