"""
Cashflow projection module.
Builds the year 0..25 nominal cash-flow series for a solar system and its
per-year breakdown table.
"""

import pandas as pd
import numpy as np
from typing import Sequence, Tuple

from .constants import ModelConstants, DEFAULT_CONSTANTS, PROJECTION_YEARS


class CashflowModel:
    """Projects annual cash flows from system size and electricity price."""

    def __init__(self, constants: ModelConstants = DEFAULT_CONSTANTS,
                 years: int = PROJECTION_YEARS):
        self.constants = constants
        self.years = years

    def annual_generation_kwh(self, size_kw_dc: float) -> float:
        return size_kw_dc * self.constants.generation_kwh_per_kw

    def capital_cost(self, size_kw_dc: float) -> float:
        """Installed cost before incentives."""
        return size_kw_dc * 1000 * self.constants.cost_per_watt

    def itc_amount(self, size_kw_dc: float) -> float:
        return self.capital_cost(size_kw_dc) * self.constants.itc_rate

    def price_in_year(self, price_per_kwh: float, year: int) -> float:
        """Escalated electricity price for operating year 1..N."""
        return price_per_kwh * (1 + self.constants.escalation_rate) ** (year - 1)

    def build_cashflow(self, size_kw_dc: float, price_per_kwh: float) -> Tuple[float, ...]:
        """
        Build the nominal cash-flow series.

        Args:
            size_kw_dc: System size in kW-DC (must be > 0)
            price_per_kwh: Year-1 electricity price in $/kWh

        Returns:
            Tuple of years + 1 flows: index 0 is the upfront outlay net of
            ITC, indices 1..N are operating revenue minus O&M
        """
        kwh_year1 = self.annual_generation_kwh(size_kw_dc)
        capex = self.capital_cost(size_kw_dc)
        om_cost = size_kw_dc * self.constants.om_cost_per_kw_year

        flows = [-capex + capex * self.constants.itc_rate]
        for year in range(1, self.years + 1):
            price = self.price_in_year(price_per_kwh, year)
            flows.append(kwh_year1 * price - om_cost)

        return tuple(flows)

    def build_cashflow_table(self, size_kw_dc: float, price_per_kwh: float) -> pd.DataFrame:
        """
        Build the per-year breakdown of the cash-flow series.

        Returns:
            DataFrame with columns: year, price_per_kwh, generation_kwh, revenue,
            om_cost, capital_cost, itc_credit, annual, cumulative
        """
        flows = self.build_cashflow(size_kw_dc, price_per_kwh)
        years = np.arange(self.years + 1)
        operating = years > 0

        price = np.where(operating,
                         price_per_kwh * (1 + self.constants.escalation_rate) ** (years - 1),
                         0.0)
        generation = np.where(operating, self.annual_generation_kwh(size_kw_dc), 0.0)
        om_cost = np.where(operating, size_kw_dc * self.constants.om_cost_per_kw_year, 0.0)

        capex = np.zeros(len(years))
        itc = np.zeros(len(years))
        capex[0] = self.capital_cost(size_kw_dc)
        itc[0] = self.itc_amount(size_kw_dc)

        df = pd.DataFrame({
            'year': years,
            'price_per_kwh': price,
            'generation_kwh': generation,
            'revenue': generation * price,
            'om_cost': om_cost,
            'capital_cost': capex,
            'itc_credit': itc,
            'annual': list(flows),
        })
        df['cumulative'] = df['annual'].cumsum()

        return df


def build_cashflow(size_kw_dc: float, price_per_kwh: float,
                   constants: ModelConstants = DEFAULT_CONSTANTS) -> Tuple[float, ...]:
    """Build the 26-entry cash-flow series with the given constants."""
    return CashflowModel(constants).build_cashflow(size_kw_dc, price_per_kwh)


def chart_data(cash_flow: Sequence[float]) -> pd.DataFrame:
    """
    Per-year chart rows for a cash-flow series.

    Returns:
        DataFrame with columns: year, annual, cumulative
    """
    annual = pd.Series(list(cash_flow), dtype=float)
    return pd.DataFrame({
        'year': range(len(annual)),
        'annual': annual,
        'cumulative': annual.cumsum(),
    })
