import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import OutletStateConfig, PrescribedOutletState, SetpointChannel


@pytest.fixture
def air_heater():
    """Air heater with 5 kW heating capacity and no cooling."""
    config = OutletStateConfig(m_flow_nominal=1.0, medium="air", q_max_flow=5000.0)
    return PrescribedOutletState("HC-1", config)


@pytest.fixture
def air_conditioner():
    """Air handler tracking temperature and humidity with limits on every channel."""
    config = OutletStateConfig(
        m_flow_nominal=1.0,
        medium="air",
        q_max_flow=10000.0,
        q_min_flow=-10000.0,
        m_wat_max_flow=0.001,
        m_wat_min_flow=-0.001,
        moisture_setpoint=SetpointChannel(enabled=True),
    )
    return PrescribedOutletState("AHU-1", config)


@pytest.fixture
def water_chiller():
    """Water-side device with cooling capacity only."""
    config = OutletStateConfig(m_flow_nominal=0.5, medium="water", q_min_flow=-20000.0)
    return PrescribedOutletState("CHW-1", config)
