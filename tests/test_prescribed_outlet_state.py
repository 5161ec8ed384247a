"""
Prescribed Outlet State Component Tests

This test suite validates:
- Setpoint tracking within capacity
- Heating, cooling, humidification and dehumidification limits
- Conditional setpoint channels (input, fixed fallback, off)
- Zero and reverse flow
- Configuration errors
"""

import math

import pytest

from core.models import (
    OutletStateConfig,
    PrescribedOutletState,
    SetpointChannel,
    SetpointSource,
)
from core.physics.media import MoistAir, Water
from core.physics.setpoint_controller import LimitMode


class TestTracking:

    def test_reaches_setpoint_within_capacity(self, air_heater):
        state = air_heater.compute(m_flow=1.0, t_in=288.15, x_w_in=0.005, t_set=290.15)
        assert state.t_out == pytest.approx(290.15, abs=1e-6)
        # cp = 1006*0.995 + 1860*0.005 = 1010.27 J/(kg·K)
        assert state.q_flow == pytest.approx(2 * 1010.27, rel=1e-6)
        assert state.x_w_out == state.x_w_in
        assert not state.heat_limited

    def test_heating_limited_by_capacity(self, air_heater):
        state = air_heater.compute(m_flow=1.0, t_in=273.15, x_w_in=0.005, t_set=298.15)
        assert state.q_flow == pytest.approx(5000.0, rel=1e-6)
        assert state.t_out < 298.15
        assert state.t_out == pytest.approx(273.15 + 5000.0 / 1010.27, abs=1e-3)
        assert state.heat_limited

    def test_heater_without_cooling_capacity_still_cools(self, air_heater):
        # Only the heating limit is set, cooling is unlimited
        state = air_heater.compute(m_flow=1.0, t_in=303.15, x_w_in=0.005, t_set=293.15)
        assert state.t_out == pytest.approx(293.15, abs=1e-6)
        assert state.q_flow < 0

    def test_cooling_limited_by_capacity(self, water_chiller):
        state = water_chiller.compute(m_flow=0.5, t_in=290.15, t_set=278.15)
        assert state.q_flow == pytest.approx(-20000.0, rel=1e-6)
        assert state.t_out == pytest.approx(290.15 - 20000.0 / (0.5 * Water.CP), abs=1e-3)
        assert state.heat_limited

    def test_limited_heat_flow_scales_with_flow_rate(self, air_heater):
        low = air_heater.compute(m_flow=0.2, t_in=273.15, x_w_in=0.005, t_set=298.15)
        high = air_heater.compute(m_flow=1.0, t_in=273.15, x_w_in=0.005, t_set=298.15)
        assert low.q_flow == pytest.approx(high.q_flow, rel=1e-6)
        assert low.t_out > high.t_out

    def test_outlet_signals_updated(self, air_heater):
        air_heater.compute(m_flow=1.0, t_in=288.15, x_w_in=0.005, t_set=290.15, time_s=60.0)
        assert air_heater.heat_flow.value == pytest.approx(2 * 1010.27, rel=1e-6)
        assert air_heater.heat_flow.time_s == 60.0
        assert air_heater.outlet_temperature.status == "OK"


class TestMoistureChannel:

    def test_humidification_within_capacity(self, air_conditioner):
        state = air_conditioner.compute(m_flow=1.0, t_in=293.15, x_w_in=0.005,
                                        t_set=293.15, x_w_set=0.0055)
        assert state.x_w_out == pytest.approx(0.0055, abs=1e-9)
        assert state.m_wat_flow == pytest.approx(0.0005, abs=1e-9)
        assert state.t_out == pytest.approx(293.15, abs=1e-6)
        assert not state.moisture_limited

    def test_humidification_limited(self, air_conditioner):
        state = air_conditioner.compute(m_flow=0.1, t_in=293.15, x_w_in=0.005,
                                        t_set=293.15, x_w_set=0.02)
        assert state.m_wat_flow == pytest.approx(0.001, abs=1e-6)
        assert state.x_w_out == pytest.approx(0.015, abs=2e-6)
        assert state.moisture_limited

    def test_dehumidification_limited(self, air_conditioner):
        state = air_conditioner.compute(m_flow=0.1, t_in=300.15, x_w_in=0.02,
                                        t_set=300.15, x_w_set=0.005)
        assert state.m_wat_flow == pytest.approx(-0.001, abs=1e-6)
        assert state.x_w_out == pytest.approx(0.01, abs=2e-6)

    def test_enthalpy_setpoint_uses_moisture_setpoint(self, air_conditioner):
        # Moisture is capacity limited, so the outlet mass fraction misses its setpoint
        # and the outlet temperature misses the temperature setpoint accordingly.
        state = air_conditioner.compute(m_flow=0.1, t_in=293.15, x_w_in=0.005,
                                        t_set=293.15, x_w_set=0.02)
        air = MoistAir()
        h_set = air.specific_enthalpy(293.15, 0.02)
        assert state.h_out == pytest.approx(h_set, rel=1e-9)
        assert state.t_out == pytest.approx(air.temperature(h_set, state.x_w_out), rel=1e-9)
        assert state.t_out > 293.15

    def test_moisture_input_required(self, air_conditioner):
        with pytest.raises(ValueError, match="x_w_set"):
            air_conditioner.compute(m_flow=1.0, t_in=293.15, x_w_in=0.005, t_set=293.15)

    def test_inlet_moisture_required_for_air(self, air_heater):
        with pytest.raises(ValueError, match="mass fraction"):
            air_heater.compute(m_flow=1.0, t_in=293.15, t_set=295.15)


class TestSetpointChannels:

    def test_channel_sources(self):
        assert SetpointChannel().source is SetpointSource.INPUT
        assert SetpointChannel(enabled=False, fallback=293.15).source is SetpointSource.FIXED
        assert SetpointChannel(enabled=False).source is SetpointSource.OFF

    def test_fixed_fallback_setpoint(self):
        config = OutletStateConfig(
            m_flow_nominal=1.0, medium="water",
            temperature_setpoint=SetpointChannel(enabled=False, fallback=280.15),
        )
        chiller = PrescribedOutletState("CHW-FIXED", config)
        state = chiller.compute(m_flow=1.0, t_in=285.15, t_set=300.0)
        assert state.t_set == 280.15
        assert state.t_out == pytest.approx(280.15, abs=1e-9)

    def test_temperature_channel_off_passes_through(self):
        config = OutletStateConfig(
            m_flow_nominal=1.0, medium="air",
            temperature_setpoint=SetpointChannel(enabled=False),
            moisture_setpoint=SetpointChannel(enabled=True),
        )
        humidifier = PrescribedOutletState("HUM-1", config)
        state = humidifier.compute(m_flow=1.0, t_in=293.15, x_w_in=0.005, x_w_set=0.008)
        assert state.q_flow == 0.0
        assert state.h_out == state.h_in
        assert state.x_w_out == pytest.approx(0.008)
        # Adiabatic humidification cools the air
        assert state.t_out < 293.15
        assert state.t_set is None

    def test_temperature_input_required(self, air_heater):
        with pytest.raises(ValueError, match="t_set"):
            air_heater.compute(m_flow=1.0, t_in=293.15, x_w_in=0.005)


class TestFlowEdgeCases:

    def test_zero_flow_is_finite(self, air_heater):
        state = air_heater.compute(m_flow=0.0, t_in=273.15, x_w_in=0.005, t_set=298.15)
        assert math.isfinite(state.t_out)
        assert math.isfinite(state.q_flow)
        assert 0.0 <= state.q_flow <= 5000.0

    def test_reverse_flow_exchanges_nothing(self, air_heater):
        state = air_heater.compute(m_flow=-1.0, t_in=273.15, x_w_in=0.005, t_set=298.15)
        assert state.q_flow == 0.0
        assert math.isfinite(state.t_out)


class TestNarrowCapacity:

    @pytest.mark.parametrize("t_set", [280.0, 290.0, 300.0])
    def test_zero_capacity_device_exchanges_nothing(self, t_set):
        config = OutletStateConfig(m_flow_nominal=1.0, medium="water", q_max_flow=0.0, q_min_flow=0.0)
        idle = PrescribedOutletState("HX-0", config)
        assert idle.heat_limit_mode is LimitMode.BOTH

        state = idle.compute(m_flow=1.0, t_in=290.0, t_set=t_set)
        assert state.q_flow == 0.0
        assert state.t_out == pytest.approx(290.0, abs=1e-9)

    def test_capacity_below_smoothing_width_stays_within_capacity(self):
        # 1 W each way against a smoothing width of 4.184 J/kg at 1 kg/s
        config = OutletStateConfig(m_flow_nominal=1.0, medium="water", q_max_flow=1.0, q_min_flow=-1.0)
        small = PrescribedOutletState("HX-S", config)
        for t_set in (289.0, 289.9999, 290.0, 290.0001, 291.0):
            state = small.compute(m_flow=1.0, t_in=290.0, t_set=t_set)
            assert -1.0 <= state.q_flow <= 1.0


class TestConfiguration:

    def test_limit_modes_resolved_at_construction(self, air_heater, air_conditioner, water_chiller):
        assert air_heater.heat_limit_mode is LimitMode.UPPER_ONLY
        assert water_chiller.heat_limit_mode is LimitMode.LOWER_ONLY
        assert air_conditioner.heat_limit_mode is LimitMode.BOTH
        assert air_conditioner.moisture_limit_mode is LimitMode.BOTH
        assert air_heater.moisture_source is SetpointSource.OFF

    def test_default_small_flow(self, air_heater):
        assert air_heater.m_flow_small == pytest.approx(1e-4)
        assert air_heater.delta_reg == pytest.approx(1e-7)

    def test_moisture_channel_rejected_for_water(self):
        config = OutletStateConfig(m_flow_nominal=1.0, medium="water",
                                   moisture_setpoint=SetpointChannel(enabled=True))
        with pytest.raises(ValueError, match="no water vapor"):
            PrescribedOutletState("BAD-1", config)

    @pytest.mark.parametrize("kwargs", [
        {"m_flow_nominal": 0.0},
        {"m_flow_nominal": 1.0, "q_max_flow": -1.0},
        {"m_flow_nominal": 1.0, "q_min_flow": 1.0},
        {"m_flow_nominal": 1.0, "m_wat_max_flow": -1e-3},
        {"m_flow_nominal": 1.0, "m_wat_min_flow": 1e-3},
        {"m_flow_nominal": 1.0, "tau": -5.0},
        {"m_flow_nominal": 1.0, "delta_t_smoothing_k": 0.0},
    ])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            PrescribedOutletState("BAD-2", OutletStateConfig(**kwargs))

    def test_to_dict(self, air_heater):
        data = air_heater.to_dict()
        assert data["component_id"] == "HC-1"
        assert data["component_type"] == "PrescribedOutletState"
        assert data["medium"] == "air"
        assert data["q_max_flow"] == 5000.0
        assert data["temperature_setpoint"] == "input"
        assert data["moisture_setpoint"] == "off"
