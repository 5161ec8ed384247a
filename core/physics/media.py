# File: hvac_component_models/core/physics/media.py
"""
Medium Property Providers

Supplies the thermodynamic properties the outlet-state component needs from
the fluid it conditions:
- Specific enthalpy from temperature (and water vapor mass fraction)
- Temperature from specific enthalpy (inverse)
- Specific heat capacity

Units:
- Temperature in K
- Specific enthalpy in J/kg (of total mass), zero at 0°C
- Water vapor mass fraction X_w in kg water vapor / kg total mass

Properties follow ideal-gas moist air with constant specific heats, valid in
the normal HVAC range (roughly -20°C to 60°C at atmospheric pressure).
"""

import logging
from typing import Dict

logger = logging.getLogger(__name__)


# --- Physical Constants ---
T_ZERO_C_K = 273.15  # Temperature of 0°C in K


class MoistAir:
    """
    Moist air as a mixture of dry air and water vapor.

    h = (T - 273.15)·cp_air·(1 - X_w) + (h_fg + (T - 273.15)·cp_steam)·X_w

    Usage:
        air = MoistAir()
        h = air.specific_enthalpy(temperature_k=293.15, x_w=0.01)
    """

    name = "air"
    has_moisture = True

    CP_DRY_AIR = 1006.0  # J/(kg·K)
    CP_STEAM = 1860.0  # J/(kg·K)
    H_FG = 2501014.5  # J/kg, enthalpy of vaporization at 0°C

    T_DEFAULT_K = 293.15
    X_W_DEFAULT = 0.01

    def specific_enthalpy(self, temperature_k: float, x_w: float = X_W_DEFAULT) -> float:
        t_c = temperature_k - T_ZERO_C_K
        return t_c * self.CP_DRY_AIR * (1 - x_w) + (self.H_FG + t_c * self.CP_STEAM) * x_w

    def temperature(self, specific_enthalpy: float, x_w: float = X_W_DEFAULT) -> float:
        """Inverse of specific_enthalpy at fixed X_w."""
        return T_ZERO_C_K + (specific_enthalpy - self.H_FG * x_w) / self.specific_heat_capacity(x_w)

    def specific_heat_capacity(self, x_w: float = X_W_DEFAULT) -> float:
        return self.CP_DRY_AIR * (1 - x_w) + self.CP_STEAM * x_w

    @property
    def cp_default(self) -> float:
        return self.specific_heat_capacity(self.X_W_DEFAULT)


class Water:
    """
    Liquid water with constant specific heat.

    h = cp·(T - 273.15)

    The mass fraction argument is accepted for a uniform interface and ignored.
    """

    name = "water"
    has_moisture = False

    CP = 4184.0  # J/(kg·K)

    T_DEFAULT_K = 293.15
    X_W_DEFAULT = 0.0

    def specific_enthalpy(self, temperature_k: float, x_w: float = 0.0) -> float:
        return self.CP * (temperature_k - T_ZERO_C_K)

    def temperature(self, specific_enthalpy: float, x_w: float = 0.0) -> float:
        return T_ZERO_C_K + specific_enthalpy / self.CP

    def specific_heat_capacity(self, x_w: float = 0.0) -> float:
        return self.CP

    @property
    def cp_default(self) -> float:
        return self.CP


MEDIA: Dict[str, type] = {
    MoistAir.name: MoistAir,
    Water.name: Water,
}


def get_medium(name: str):
    """Return a property provider instance by medium name ("air" or "water")."""
    medium_class = MEDIA.get(name.lower()) if name else None
    if medium_class is None:
        raise ValueError(f"Unknown medium '{name}'. Available media: {', '.join(sorted(MEDIA))}")
    logger.debug(f"Resolved medium '{name}' to {medium_class.__name__}")
    return medium_class()
