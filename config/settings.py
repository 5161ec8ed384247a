# File: hvac_component_models/config/settings.py
import os
import logging
from dotenv import load_dotenv

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(),
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
dotenv_path = os.path.join(project_root, '.env')

if os.path.exists(dotenv_path):
    if load_dotenv(dotenv_path=dotenv_path):
        logger.info(f"Successfully loaded .env file from {dotenv_path}")
    else:
        logger.info(f".env file at {dotenv_path} processed but might be empty or set no new vars.")
else:
    logger.debug(f".env file not found at {dotenv_path}. Using system environment variables or defaults.")


# --- Medium Defaults ---
DEFAULT_MEDIUM = os.getenv("DEFAULT_MEDIUM", "air")


# --- Smoothing Settings ---
# Enthalpy smoothing width is cp_default * DELTA_T_SMOOTHING_K (J/kg)
DELTA_T_SMOOTHING_K = float(os.getenv("DELTA_T_SMOOTHING_K", "1e-3"))
# Water vapor mass fraction smoothing width (kg/kg)
DELTA_X_SMOOTHING = float(os.getenv("DELTA_X_SMOOTHING", "1e-6"))

if DELTA_T_SMOOTHING_K <= 0 or DELTA_X_SMOOTHING <= 0:
    logger.warning("Smoothing widths must be positive. Falling back to 1e-3 K and 1e-6 kg/kg.")
    DELTA_T_SMOOTHING_K = 1e-3
    DELTA_X_SMOOTHING = 1e-6


# --- Flow Settings ---
# Small flow rate used for regularization, as a fraction of the nominal flow rate
M_FLOW_SMALL_FRACTION = float(os.getenv("M_FLOW_SMALL_FRACTION", "1e-4"))


# --- Simulation Settings ---
DEFAULT_TAU_SECONDS = float(os.getenv("DEFAULT_TAU_SECONDS", "0"))
RESULTS_DIR = os.getenv("RESULTS_DIR", os.path.join(project_root, "results"))

logger.debug(f"DEFAULT_MEDIUM = {DEFAULT_MEDIUM}")
logger.debug(f"DELTA_T_SMOOTHING_K = {DELTA_T_SMOOTHING_K}")
logger.debug(f"DELTA_X_SMOOTHING = {DELTA_X_SMOOTHING}")
logger.debug(f"M_FLOW_SMALL_FRACTION = {M_FLOW_SMALL_FRACTION}")
logger.debug(f"DEFAULT_TAU_SECONDS = {DEFAULT_TAU_SECONDS}")
