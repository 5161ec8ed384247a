# File: hvac_component_models/data/profile_loader.py
import os
import logging
from typing import Optional, List

import pandas as pd

from utils.helpers import celsius_to_kelvin

logger = logging.getLogger(__name__)

# --- Profile CSV Layout ---
# time [s], m_flow [kg/s], t_in [K] and optional x_w_in, t_set [K], x_w_set [kg/kg].
# Temperatures may instead be given in °C as t_in_degC / t_set_degC.
REQUIRED_COLUMNS: List[str] = ["time", "m_flow", "t_in"]
OPTIONAL_COLUMNS: List[str] = ["x_w_in", "t_set", "x_w_set"]
CELSIUS_COLUMNS = {"t_in_degC": "t_in", "t_set_degC": "t_set"}


def _convert_celsius_columns(df: pd.DataFrame) -> pd.DataFrame:
    for celsius_column, kelvin_column in CELSIUS_COLUMNS.items():
        if celsius_column in df.columns and kelvin_column not in df.columns:
            df[kelvin_column] = celsius_to_kelvin(pd.to_numeric(df[celsius_column], errors='coerce'))
            logger.debug(f"Converted column '{celsius_column}' to '{kelvin_column}' in K.")
    return df.drop(columns=[c for c in CELSIUS_COLUMNS if c in df.columns])


def prepare_profile(df: pd.DataFrame) -> Optional[pd.DataFrame]:
    """
    Normalizes an input profile: unit conversion, numeric coercion, row cleaning, time ordering.
    Returns None if required columns are missing or no usable rows remain.
    """
    df = _convert_celsius_columns(df.copy())

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        logger.error(f"Profile is missing required columns: {', '.join(missing)}")
        return None

    columns = REQUIRED_COLUMNS + [c for c in OPTIONAL_COLUMNS if c in df.columns]
    df = df[columns].apply(pd.to_numeric, errors='coerce')

    invalid_rows = df[REQUIRED_COLUMNS].isna().any(axis=1)
    if invalid_rows.any():
        logger.warning(f"Skipping {int(invalid_rows.sum())} profile rows with missing or non-numeric required values.")
        df = df[~invalid_rows]

    if df.empty:
        logger.warning("No valid rows in profile.")
        return None

    if not df["time"].is_monotonic_increasing:
        logger.warning("Profile time column is not sorted. Sorting rows by time.")
        df = df.sort_values("time")

    return df.reset_index(drop=True)


def load_profile(file_path: str) -> Optional[pd.DataFrame]:
    """
    Loads an input profile from a CSV file for the simulation harness.
    Returns None if the file is missing or unusable.
    """
    if not os.path.exists(file_path):
        logger.warning(f"Profile file not found: {file_path}")
        return None

    try:
        df = pd.read_csv(file_path, header=0)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logger.error(f"Error reading profile from {file_path}: {e}", exc_info=True)
        return None

    profile = prepare_profile(df)
    if profile is not None:
        logger.info(f"Successfully loaded profile from: {file_path} with {len(profile)} rows.")
    return profile
