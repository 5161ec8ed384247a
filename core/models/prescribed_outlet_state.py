# File: hvac_component_models/core/models/prescribed_outlet_state.py
"""
Prescribed Outlet State Component

Ideal heater/cooler and humidifier/dehumidifier that drives the fluid leaving
the component toward a temperature setpoint and, for moist air, a water vapor
mass fraction setpoint. Each channel is bounded by its own capacities:

- Heat flow rate:       q_min_flow <= Q̇ <= q_max_flow          [W]
- Water vapor flow:     m_wat_min_flow <= ṁ_wat <= m_wat_max_flow [kg/s]

An infinite capacity disables the corresponding limit. Limits are applied
with smooth clamping (core.physics.setpoint_controller), so the outlet state
is continuously differentiable in its inputs.

Sign convention: positive Q̇ and ṁ_wat are added to the fluid when it flows
from the inlet to the outlet. For reverse flow the exchanged flows vanish.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from config import settings
from core.physics.flow_regularization import non_zero_flow, positive_flow, regularization_width
from core.physics.media import get_medium
from core.physics.setpoint_controller import (
    CapacityLimitedSetpointController,
    LimitMode,
    SetpointRequest,
)
from .base import Component, DataPoint

logger = logging.getLogger(__name__)

INF = float("inf")
# Capacities at or beyond this are treated as unlimited
UNLIMITED_THRESHOLD = 1e60


class SetpointSource(enum.Enum):
    """Where a channel takes its setpoint from, resolved once at construction."""
    INPUT = "input"
    FIXED = "fixed"
    OFF = "off"


@dataclass(frozen=True)
class SetpointChannel:
    """
    Conditional setpoint input.

    enabled=True tracks a setpoint supplied at every evaluation. With
    enabled=False the fallback, if given, is a fixed setpoint; otherwise the
    channel is off and its quantity passes through unchanged.
    """
    enabled: bool = True
    fallback: Optional[float] = None

    @property
    def source(self) -> SetpointSource:
        if self.enabled:
            return SetpointSource.INPUT
        if self.fallback is not None:
            return SetpointSource.FIXED
        return SetpointSource.OFF


@dataclass(frozen=True)
class OutletStateConfig:
    """Static configuration of a PrescribedOutletState component."""
    m_flow_nominal: float
    medium: str = settings.DEFAULT_MEDIUM
    m_flow_small: Optional[float] = None
    q_max_flow: float = INF
    q_min_flow: float = -INF
    m_wat_max_flow: float = INF
    m_wat_min_flow: float = -INF
    temperature_setpoint: SetpointChannel = field(default_factory=SetpointChannel)
    moisture_setpoint: SetpointChannel = field(default_factory=lambda: SetpointChannel(enabled=False))
    delta_t_smoothing_k: float = settings.DELTA_T_SMOOTHING_K
    delta_x_smoothing: float = settings.DELTA_X_SMOOTHING
    tau: float = settings.DEFAULT_TAU_SECONDS


@dataclass(frozen=True)
class OutletState:
    """Result of one component evaluation."""
    m_flow: float
    t_in: float
    t_out: float
    h_in: float
    h_out: float
    x_w_in: float
    x_w_out: float
    q_flow: float
    m_wat_flow: float
    t_set: Optional[float] = None
    x_w_set: Optional[float] = None
    heat_limited: bool = False
    moisture_limited: bool = False

    def to_dict(self) -> dict:
        return {
            "m_flow": self.m_flow,
            "t_in": self.t_in,
            "t_out": self.t_out,
            "h_in": self.h_in,
            "h_out": self.h_out,
            "x_w_in": self.x_w_in,
            "x_w_out": self.x_w_out,
            "q_flow": self.q_flow,
            "m_wat_flow": self.m_wat_flow,
            "t_set": self.t_set,
            "x_w_set": self.x_w_set,
            "heat_limited": self.heat_limited,
            "moisture_limited": self.moisture_limited,
        }


class PrescribedOutletState(Component):
    """
    Component that sets the outlet temperature and humidity subject to capacity limits.

    Usage:
        heater = PrescribedOutletState(
            "AHU-1-HC",
            OutletStateConfig(m_flow_nominal=1.2, q_max_flow=5000.0),
        )
        state = heater.compute(m_flow=1.0, t_in=283.15, x_w_in=0.005, t_set=293.15)
    """

    def __init__(self, component_id: str, config: OutletStateConfig,
                 description: Optional[str] = None, **kwargs):
        super().__init__(component_id, component_type="PrescribedOutletState",
                         description=description, **kwargs)
        self._validate(config)

        self.config = config
        self.medium = get_medium(config.medium)
        self.controller = CapacityLimitedSetpointController()

        m_flow_small = config.m_flow_small
        if m_flow_small is None:
            m_flow_small = settings.M_FLOW_SMALL_FRACTION * abs(config.m_flow_nominal)
        self.m_flow_small = m_flow_small
        self.delta_reg = regularization_width(m_flow_small)

        self.temperature_source = config.temperature_setpoint.source
        self.moisture_source = config.moisture_setpoint.source
        if self.moisture_source is not SetpointSource.OFF and not self.medium.has_moisture:
            raise ValueError(
                f"Component '{component_id}': medium '{self.medium.name}' has no water vapor, "
                f"the moisture setpoint must be disabled."
            )

        self.restrict_heat = config.q_max_flow < UNLIMITED_THRESHOLD
        self.restrict_cool = config.q_min_flow > -UNLIMITED_THRESHOLD
        self.restrict_humidify = config.m_wat_max_flow < UNLIMITED_THRESHOLD
        self.restrict_dehumidify = config.m_wat_min_flow > -UNLIMITED_THRESHOLD
        self.heat_limit_mode = LimitMode.from_flags(self.restrict_heat, self.restrict_cool)
        self.moisture_limit_mode = LimitMode.from_flags(self.restrict_humidify, self.restrict_dehumidify)

        self.delta_h = self.medium.cp_default * config.delta_t_smoothing_k
        self.delta_x = config.delta_x_smoothing

        self.heat_flow = DataPoint(name="Heat Flow Rate", unit="W")
        self.water_flow = DataPoint(name="Water Vapor Flow Rate", unit="kg/s")
        self.outlet_temperature = DataPoint(name="Outlet Temperature", unit="K")
        self.outlet_moisture = DataPoint(name="Outlet Water Vapor Mass Fraction", unit="kg/kg")

        logger.info(
            f"PrescribedOutletState '{component_id}' initialized: medium={self.medium.name}, "
            f"temperature setpoint={self.temperature_source.value} (limits: {self.heat_limit_mode.value}), "
            f"moisture setpoint={self.moisture_source.value} (limits: {self.moisture_limit_mode.value})"
        )

    @staticmethod
    def _validate(config: OutletStateConfig):
        if not config.m_flow_nominal > 0:
            raise ValueError(f"m_flow_nominal must be positive, got {config.m_flow_nominal}")
        if config.m_flow_small is not None and not config.m_flow_small > 0:
            raise ValueError(f"m_flow_small must be positive, got {config.m_flow_small}")
        if config.q_max_flow < 0 or config.q_min_flow > 0:
            raise ValueError(
                f"Heat capacities must satisfy q_min_flow <= 0 <= q_max_flow, "
                f"got q_min_flow={config.q_min_flow}, q_max_flow={config.q_max_flow}"
            )
        if config.m_wat_max_flow < 0 or config.m_wat_min_flow > 0:
            raise ValueError(
                f"Moisture capacities must satisfy m_wat_min_flow <= 0 <= m_wat_max_flow, "
                f"got m_wat_min_flow={config.m_wat_min_flow}, m_wat_max_flow={config.m_wat_max_flow}"
            )
        if config.delta_t_smoothing_k <= 0 or config.delta_x_smoothing <= 0:
            raise ValueError("Smoothing widths must be positive.")
        if config.tau < 0:
            raise ValueError(f"tau must not be negative, got {config.tau}")

    def _resolve_setpoint(self, source: SetpointSource, channel: SetpointChannel,
                          value: Optional[float], label: str) -> Optional[float]:
        if source is SetpointSource.INPUT:
            if value is None:
                raise ValueError(f"Component '{self.component_id}' tracks '{label}' but no value was supplied.")
            return value
        if source is SetpointSource.FIXED:
            return channel.fallback
        return None

    def compute(self, m_flow: float, t_in: float, x_w_in: Optional[float] = None,
                t_set: Optional[float] = None, x_w_set: Optional[float] = None,
                time_s: Optional[float] = None) -> OutletState:
        """
        Evaluate the outlet state for one inlet state and setpoint.

        Args:
            m_flow: Mass flow rate from inlet to outlet (kg/s), negative for reverse flow
            t_in: Inlet temperature (K)
            x_w_in: Inlet water vapor mass fraction (kg/kg), required for moist air
            t_set: Temperature setpoint (K), used if the temperature setpoint is an input
            x_w_set: Water vapor mass fraction setpoint (kg/kg), used if the moisture setpoint is an input
            time_s: Simulation time stamped on the output data points

        Returns:
            OutletState with the conditioned outlet state and exchanged flows
        """
        if self.medium.has_moisture:
            if x_w_in is None:
                raise ValueError(f"Component '{self.component_id}': inlet water vapor mass fraction is required for moist air.")
        else:
            x_w_in = 0.0

        t_set_value = self._resolve_setpoint(
            self.temperature_source, self.config.temperature_setpoint, t_set, "t_set")
        x_w_set_value = self._resolve_setpoint(
            self.moisture_source, self.config.moisture_setpoint, x_w_set, "x_w_set")

        m_flow_pos = positive_flow(m_flow, self.delta_reg)
        m_flow_non_zero = non_zero_flow(m_flow, self.delta_reg)
        h_in = self.medium.specific_enthalpy(t_in, x_w_in)

        dx_act = 0.0
        m_wat_flow = 0.0
        moisture_limited = False
        if x_w_set_value is not None:
            request = SetpointRequest(
                desired_value=x_w_set_value,
                inlet_value=x_w_in,
                positive_flow=m_flow_pos,
                non_zero_flow=m_flow_non_zero,
                max_capacity_positive=self.config.m_wat_max_flow,
                max_capacity_negative=self.config.m_wat_min_flow,
                max_limit_active=self.restrict_humidify,
                min_limit_active=self.restrict_dehumidify,
                smoothing_width=self.delta_x,
            )
            result = self.controller.evaluate(request)
            dx_act = result.actual_delta
            m_wat_flow = result.applied_flow_of_quantity
            moisture_limited = request.exceeds_capacity

        dh_act = 0.0
        q_flow = 0.0
        heat_limited = False
        if t_set_value is not None:
            # Enthalpy setpoint uses the moisture setpoint, not the outlet mass fraction
            # the humidity limits actually allow.
            x_w_for_h_set = x_w_set_value if x_w_set_value is not None else x_w_in
            h_set = self.medium.specific_enthalpy(t_set_value, x_w_for_h_set)
            request = SetpointRequest(
                desired_value=h_set,
                inlet_value=h_in,
                positive_flow=m_flow_pos,
                non_zero_flow=m_flow_non_zero,
                max_capacity_positive=self.config.q_max_flow,
                max_capacity_negative=self.config.q_min_flow,
                max_limit_active=self.restrict_heat,
                min_limit_active=self.restrict_cool,
                smoothing_width=self.delta_h,
            )
            result = self.controller.evaluate(request)
            dh_act = result.actual_delta
            q_flow = result.applied_flow_of_quantity
            heat_limited = request.exceeds_capacity

        h_out = h_in + dh_act
        x_w_out = x_w_in + dx_act
        t_out = self.medium.temperature(h_out, x_w_out)

        self.heat_flow.update(q_flow, time_s)
        self.water_flow.update(m_wat_flow, time_s)
        self.outlet_temperature.update(t_out, time_s)
        self.outlet_moisture.update(x_w_out, time_s)

        return OutletState(
            m_flow=m_flow,
            t_in=t_in,
            t_out=t_out,
            h_in=h_in,
            h_out=h_out,
            x_w_in=x_w_in,
            x_w_out=x_w_out,
            q_flow=q_flow,
            m_wat_flow=m_wat_flow,
            t_set=t_set_value,
            x_w_set=x_w_set_value,
            heat_limited=heat_limited,
            moisture_limited=moisture_limited,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "medium": self.medium.name,
            "m_flow_nominal": self.config.m_flow_nominal,
            "m_flow_small": self.m_flow_small,
            "q_max_flow": self.config.q_max_flow,
            "q_min_flow": self.config.q_min_flow,
            "m_wat_max_flow": self.config.m_wat_max_flow,
            "m_wat_min_flow": self.config.m_wat_min_flow,
            "temperature_setpoint": self.temperature_source.value,
            "moisture_setpoint": self.moisture_source.value,
            "tau": self.config.tau,
            "heat_flow_details": self.heat_flow.to_dict(),
            "water_flow_details": self.water_flow.to_dict(),
            "outlet_temperature_details": self.outlet_temperature.to_dict(),
            "outlet_moisture_details": self.outlet_moisture.to_dict(),
        })
        return data
