# File: hvac_component_models/core/physics/setpoint_controller.py
"""
Capacity-Limited Setpoint Controller

Computes the value a device can actually deliver for a transported scalar
(specific enthalpy, or water vapor mass fraction) given a desired setpoint,
the inlet value and the flow rate, subject to independent upper and lower
capacity limits:

    Δ_desired = desired_value - inlet_value
    Δ_actual  = smooth clamp of Δ_desired to [Q_neg / ṁ, Q_pos / ṁ]
    value_out = inlet_value + Δ_actual
    Q̇         = ṁ⁺ × Δ_actual

The clamp is never sharp (see core.physics.smoothing). Evaluation is a single
closed-form pass with no state, so one controller may be shared freely
between component instances and threads.

Caller contract:
- non_zero_flow must be floored away from zero before the call
  (core.physics.flow_regularization.non_zero_flow). A value of exactly zero
  divides by zero and the result is undefined: a non-zero capacity turns
  into an infinite bound (no limit) and a zero capacity into nan.
- positive_flow must be floored at zero (flow_regularization.positive_flow),
  so reverse flow never reports a negative exchanged flow.
Infinite capacities are allowed with their limit flag set; an infinite
bound never binds. Nothing is validated here and nothing is raised.
"""

import enum
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .smoothing import smooth_limit, smooth_max, smooth_min


class LimitMode(enum.Enum):
    """Which capacity limits take part in the evaluation."""
    UNCONSTRAINED = "unconstrained"
    UPPER_ONLY = "upper_only"
    LOWER_ONLY = "lower_only"
    BOTH = "both"

    @classmethod
    def from_flags(cls, max_limit_active: bool, min_limit_active: bool) -> "LimitMode":
        if max_limit_active and min_limit_active:
            return cls.BOTH
        if max_limit_active:
            return cls.UPPER_ONLY
        if min_limit_active:
            return cls.LOWER_ONLY
        return cls.UNCONSTRAINED


@dataclass(frozen=True)
class SetpointRequest:
    """Inputs to one controller evaluation."""
    desired_value: float
    inlet_value: float
    positive_flow: float
    non_zero_flow: float
    max_capacity_positive: float = float("inf")
    max_capacity_negative: float = float("-inf")
    max_limit_active: bool = False
    min_limit_active: bool = False
    smoothing_width: float = 1e-6

    @property
    def limit_mode(self) -> LimitMode:
        return LimitMode.from_flags(self.max_limit_active, self.min_limit_active)

    @property
    def desired_delta(self) -> float:
        return self.desired_value - self.inlet_value

    @property
    def capacity_bounds(self) -> Tuple[float, float]:
        """Bounds (lower, upper) on the change of the tracked quantity."""
        # A zero divisor is a contract violation and yields inf/nan rather than raising
        with np.errstate(divide='ignore', invalid='ignore'):
            lower = float(np.float64(self.max_capacity_negative) / self.non_zero_flow)
            upper = float(np.float64(self.max_capacity_positive) / self.non_zero_flow)
        return lower, upper

    @property
    def exceeds_capacity(self) -> bool:
        """True if an active limit would bind the hard-clipped result."""
        mode = self.limit_mode
        lower, upper = self.capacity_bounds
        if mode in (LimitMode.UPPER_ONLY, LimitMode.BOTH) and self.desired_delta > upper:
            return True
        if mode in (LimitMode.LOWER_ONLY, LimitMode.BOTH) and self.desired_delta < lower:
            return True
        return False


@dataclass(frozen=True)
class SetpointResult:
    """Result of one controller evaluation."""
    actual_value: float
    applied_flow_of_quantity: float
    actual_delta: float

    def to_dict(self) -> dict:
        return {
            "actual_value": self.actual_value,
            "applied_flow_of_quantity": self.applied_flow_of_quantity,
            "actual_delta": self.actual_delta,
        }


class CapacityLimitedSetpointController:
    """
    Stateless evaluator for capacity-limited setpoint tracking.

    Usage:
        controller = CapacityLimitedSetpointController()
        result = controller.evaluate(SetpointRequest(
            desired_value=300.0,
            inlet_value=290.0,
            positive_flow=1.0,
            non_zero_flow=1.0,
            max_capacity_positive=5.0,
            max_limit_active=True,
        ))
    """

    def evaluate(self, request: SetpointRequest) -> SetpointResult:
        actual_delta = self.actual_delta(request)
        return SetpointResult(
            actual_value=request.inlet_value + actual_delta,
            applied_flow_of_quantity=request.positive_flow * actual_delta,
            actual_delta=actual_delta,
        )

    @staticmethod
    def actual_delta(request: SetpointRequest) -> float:
        """Deliverable change of the tracked quantity across the device."""
        mode = request.limit_mode
        desired_delta = request.desired_delta

        if mode is LimitMode.UNCONSTRAINED:
            return desired_delta

        lower, upper = request.capacity_bounds

        if mode is LimitMode.BOTH:
            return smooth_limit(desired_delta, lower, upper, request.smoothing_width)
        if mode is LimitMode.UPPER_ONLY:
            return smooth_min(desired_delta, upper, request.smoothing_width)
        return smooth_max(desired_delta, lower, request.smoothing_width)


_default_controller = CapacityLimitedSetpointController()


def evaluate(request: SetpointRequest) -> SetpointResult:
    """Evaluate a request with the shared stateless controller."""
    return _default_controller.evaluate(request)
