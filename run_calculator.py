"""
Run the solar project calculator from the command line.
Prints headline results and optionally writes an Excel report.
"""

import argparse
import sys

from solar_calc.prices import state_options
from solar_calc.runner import run_model, run_from_inputs


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="run_calculator",
        description="Solar project financial calculator",
    )
    p.add_argument("--state", default="", help="US state name, e.g. 'New York'.")
    p.add_argument("--size", default="5.00", help="System size in kW-DC (default: 5.00).")
    p.add_argument(
        "--inputs",
        default=None,
        help="Path to a JSON scenario with 'state' and 'size_kw_dc'. Overrides --state/--size.",
    )
    p.add_argument("--output", default=None, help="Path for an Excel report (optional).")
    p.add_argument("--list-states", action="store_true", help="List states with prices and exit.")
    return p.parse_args(argv)


def main(argv=None) -> int:
    ns = _parse_args(argv)

    if ns.list_states:
        for option in state_options():
            print(option)
        return 0

    if ns.inputs:
        try:
            outcome = run_from_inputs(ns.inputs, ns.output)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
    else:
        outcome = run_model(ns.state, ns.size, ns.output)

    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
