import logging
from typing import Dict, Any, List, Optional

import numpy as np
import pandas as pd

from core.models import PrescribedOutletState, SetpointSource

logger = logging.getLogger(__name__)

J_PER_KWH = 3.6e6


def _optional(row: pd.Series, column: str) -> Optional[float]:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return float(value)


class OutletStateSimulator:
    """
    Evaluates a PrescribedOutletState component over an input profile.

    Each profile row is one evaluation. With tau > 0 the reported outlet state
    follows the conditioned state through a first-order lag whose time
    constant is tau at nominal flow and scales with m_flow_nominal / |m_flow|,
    integrated with backward Euler between rows.
    """
    def __init__(self, component: PrescribedOutletState):
        self.component = component
        self.tau = component.config.tau
        self.m_flow_nominal = component.config.m_flow_nominal

        logger.info(f"OutletStateSimulator initialized for {component} (tau={self.tau} s)")

    def _lag(self, state: float, target: float, m_flow: float, dt: float) -> float:
        if self.tau <= 0:
            return target
        rate = abs(m_flow) / (self.m_flow_nominal * self.tau)
        return (state + rate * dt * target) / (1 + rate * dt)

    def _channel_columns(self) -> List[str]:
        """Profile columns the component needs on every row."""
        columns = []
        if self.component.medium.has_moisture:
            columns.append("x_w_in")
        if self.component.temperature_source is SetpointSource.INPUT:
            columns.append("t_set")
        if self.component.moisture_source is SetpointSource.INPUT:
            columns.append("x_w_set")
        return columns

    def run(self, profile: pd.DataFrame) -> Dict[str, Any]:
        """Runs the component over the profile."""
        if profile is None or profile.empty:
            raise ValueError("Cannot run simulation: the input profile is empty.")

        needed = [c for c in self._channel_columns() if c in profile.columns]
        incomplete = profile[needed].isna().any(axis=1)
        if incomplete.any():
            logger.warning(
                f"Skipping {int(incomplete.sum())} profile rows without the {', '.join(needed)} values {self.component} needs."
            )
            profile = profile[~incomplete]
            if profile.empty:
                raise ValueError("Cannot run simulation: no profile row carries the inputs the component needs.")

        medium = self.component.medium
        records = []
        h_state: Optional[float] = None
        x_state: Optional[float] = None
        previous_time: Optional[float] = None

        for _, row in profile.iterrows():
            time_s = float(row["time"])
            state = self.component.compute(
                m_flow=float(row["m_flow"]),
                t_in=float(row["t_in"]),
                x_w_in=_optional(row, "x_w_in"),
                t_set=_optional(row, "t_set"),
                x_w_set=_optional(row, "x_w_set"),
                time_s=time_s,
            )

            if h_state is None or self.tau <= 0:
                if self.tau > 0:
                    # Dynamic outlet starts at the inlet state
                    h_state, x_state = state.h_in, state.x_w_in
                else:
                    h_state, x_state = state.h_out, state.x_w_out
            else:
                dt = time_s - previous_time
                h_state = self._lag(h_state, state.h_out, state.m_flow, dt)
                x_state = self._lag(x_state, state.x_w_out, state.m_flow, dt)
            previous_time = time_s

            record = state.to_dict()
            record["time"] = time_s
            record["h_out"] = h_state
            record["x_w_out"] = x_state
            record["t_out"] = medium.temperature(h_state, x_state)
            records.append(record)

        results = pd.DataFrame.from_records(records)
        results = results[["time"] + [c for c in results.columns if c != "time"]]
        summary = self.summarize(results)

        logger.info(
            f"Simulation of {self.component} finished: {len(results)} steps, "
            f"heating {summary['heating_energy_kwh']:.3f} kWh, cooling {summary['cooling_energy_kwh']:.3f} kWh"
        )
        return {
            "summary": summary,
            "results": results,
        }

    @staticmethod
    def summarize(results: pd.DataFrame) -> Dict[str, Any]:
        """
        Energy and water totals over the run.

        Each row's flows are held constant until the next row, so the last row
        has no duration and does not count toward the totals. Peaks include it.
        """
        times = results["time"].to_numpy(dtype=float)
        dt = np.diff(times, append=times[-1])
        q_flow = results["q_flow"].to_numpy(dtype=float)
        m_wat_flow = results["m_wat_flow"].to_numpy(dtype=float)

        heating_j = float(np.sum(np.clip(q_flow, 0.0, None) * dt))
        cooling_j = float(np.sum(np.clip(q_flow, None, 0.0) * dt))

        return {
            "steps": int(len(results)),
            "duration_hours": round(float(times[-1] - times[0]) / 3600, 4),
            "heating_energy_kwh": heating_j / J_PER_KWH,
            "cooling_energy_kwh": cooling_j / J_PER_KWH,
            "humidification_kg": float(np.sum(np.clip(m_wat_flow, 0.0, None) * dt)),
            "dehumidification_kg": float(np.sum(np.clip(m_wat_flow, None, 0.0) * dt)),
            "peak_heating_w": float(max(np.max(q_flow), 0.0)),
            "peak_cooling_w": float(min(np.min(q_flow), 0.0)),
            "heat_limited_steps": int(results["heat_limited"].sum()),
            "moisture_limited_steps": int(results["moisture_limited"].sum()),
        }
