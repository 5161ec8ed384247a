#!/usr/bin/env python
"""
Prescribed Outlet State Simulation Runner

Runs a configured component over an input profile and writes the results:
1. Loads and validates the component configuration (JSON)
2. Loads the input profile (CSV)
3. Evaluates the component at every profile row
4. Writes the results CSV and a JSON summary

Usage:
    python run_simulation.py --config component.json --profile inputs.csv [--output results.csv] [--summary summary.json]
"""

import os
import sys
import json
import logging
import argparse

# --- ROBUST PATH SETUP ---
project_root = os.path.abspath(os.path.dirname(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from pydantic import ValidationError

from config import settings
from config.component_loader import load_component
from data.profile_loader import load_profile
from simulation.outlet_state_simulator import OutletStateSimulator
from utils.helpers import CustomJsonEncoder, kelvin_to_celsius, setup_main_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run a prescribed outlet state component over an input profile.")
    parser.add_argument("--config", required=True, help="Component configuration JSON file")
    parser.add_argument("--profile", required=True, help="Input profile CSV file")
    parser.add_argument("--output", help="Results CSV file (default: <RESULTS_DIR>/<component_id>_results.csv)")
    parser.add_argument("--summary", help="Summary JSON file (default: <RESULTS_DIR>/<component_id>_summary.json)")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"), help="Logging level")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_main_logging(args.log_level)

    try:
        component = load_component(args.config)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError, ValueError) as e:
        logger.critical(f"Could not create component from '{args.config}': {e}")
        return 1

    profile = load_profile(args.profile)
    if profile is None:
        logger.critical(f"Could not load a usable input profile from '{args.profile}'.")
        return 1

    try:
        outcome = OutletStateSimulator(component).run(profile)
    except ValueError as e:
        logger.critical(f"Simulation failed: {e}")
        return 1

    results = outcome["results"]
    results["t_out_degC"] = results["t_out"].map(kelvin_to_celsius)

    output_path = args.output or os.path.join(settings.RESULTS_DIR, f"{component.component_id}_results.csv")
    summary_path = args.summary or os.path.join(settings.RESULTS_DIR, f"{component.component_id}_summary.json")
    for path in (output_path, summary_path):
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)

    results.to_csv(output_path, index=False)
    with open(summary_path, 'w', encoding='utf-8') as f:
        json.dump({"component": component.to_dict(), "summary": outcome["summary"]}, f,
                  cls=CustomJsonEncoder, indent=2)

    logger.info(f"Results written to {output_path}")
    logger.info(f"Summary written to {summary_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
