"""
Model constants module.
Fixed cost, generation and incentive assumptions shared by every calculation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelConstants:
    """Immutable per-kW economics used to project a system's cash flow."""

    cost_per_watt: float = 2.5              # Installed cost, $/W
    generation_kwh_per_kw: float = 1400.0   # Annual yield, kWh per kW-DC
    escalation_rate: float = 0.025          # Electricity price escalation per year
    om_cost_per_kw_year: float = 15.0       # O&M, $ per kW per year
    itc_rate: float = 0.30                  # Investment tax credit


DEFAULT_CONSTANTS = ModelConstants()

# Projection horizon (operating years after year 0)
PROJECTION_YEARS = 25

# IRR solver settings
IRR_INITIAL_GUESS = 0.10
IRR_MAX_ITERATIONS = 100
IRR_NPV_TOLERANCE = 1e-4
IRR_RATE_FLOOR = -0.99
