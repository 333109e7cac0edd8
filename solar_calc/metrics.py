"""
Financial metrics calculation module.
Calculates NPV, IRR (Newton-Raphson), payback period, and summary figures.
"""

import re
import numpy as np
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, NamedTuple, Sequence

from .constants import (
    ModelConstants, DEFAULT_CONSTANTS,
    IRR_INITIAL_GUESS, IRR_MAX_ITERATIONS, IRR_NPV_TOLERANCE, IRR_RATE_FLOOR,
)


class IrrSolution(NamedTuple):
    rate: float
    iterations: int
    converged: bool


class MetricsCalculator:
    """Calculates financial metrics from a cash-flow series."""

    def __init__(self, constants: ModelConstants = DEFAULT_CONSTANTS,
                 initial_guess: float = IRR_INITIAL_GUESS,
                 max_iterations: int = IRR_MAX_ITERATIONS,
                 tolerance: float = IRR_NPV_TOLERANCE):
        self.constants = constants
        self.initial_guess = initial_guess
        self.max_iterations = max_iterations
        self.tolerance = tolerance

    def calculate_npv(self, cash_flow: Sequence[float], rate: float) -> float:
        """
        Calculate NPV with period t discounted by (1 + rate)^t.

        Args:
            cash_flow: Flows for periods 0..n-1
            rate: Discount rate (decimal)

        Returns:
            NPV
        """
        flows = np.asarray(cash_flow, dtype=float)
        periods = np.arange(len(flows))
        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            return float(np.sum(flows / (1 + rate) ** periods))

    def calculate_npv_derivative(self, cash_flow: Sequence[float], rate: float) -> float:
        """
        Calculate dNPV/drate = -sum(t * CF_t * (1 + rate)^-(t+1)) for t >= 1.
        """
        flows = np.asarray(cash_flow, dtype=float)
        periods = np.arange(len(flows))
        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            return float(-np.sum(periods[1:] * flows[1:] / (1 + rate) ** (periods[1:] + 1)))

    def solve_irr(self, cash_flow: Sequence[float]) -> IrrSolution:
        """
        Find the IRR by Newton-Raphson iteration on NPV.

        Stops once |NPV| is below tolerance. Otherwise runs max_iterations
        updates and returns the last estimate unconverged rather than raising.
        A zero or non-finite NPV or slope also ends the search early with the
        current estimate.

        Args:
            cash_flow: Flows for periods 0..n-1 (n >= 2)

        Returns:
            IrrSolution(rate, iterations, converged)
        """
        rate = self.initial_guess

        for iteration in range(self.max_iterations):
            npv = self.calculate_npv(cash_flow, rate)
            if not np.isfinite(npv):
                return IrrSolution(rate, iteration, False)
            if abs(npv) < self.tolerance:
                return IrrSolution(rate, iteration, True)

            slope = self.calculate_npv_derivative(cash_flow, rate)
            if slope == 0 or not np.isfinite(slope):
                return IrrSolution(rate, iteration, False)

            rate -= npv / slope

            # (1 + rate) must stay positive
            if rate <= -1:
                rate = IRR_RATE_FLOOR

        return IrrSolution(rate, self.max_iterations, False)

    def calculate_irr(self, cash_flow: Sequence[float]) -> float:
        """
        Calculate IRR.

        Returns:
            IRR as decimal (e.g., 0.12 for 12%), best effort if unconverged
        """
        return self.solve_irr(cash_flow).rate

    def calculate_payback(self, cash_flow: Sequence[float]) -> str:
        """
        Calculate simple payback period (years), interpolated within the
        crossing year.

        Args:
            cash_flow: Flows for years 0..n-1

        Returns:
            Payback formatted to one decimal (e.g. "9.3"), "0.0" if year 0 is
            non-negative, or ">{n-1}" if never recovered
        """
        if cash_flow[0] >= 0:
            return "0.0"

        cumulative = cash_flow[0]
        for year in range(1, len(cash_flow)):
            previous = cumulative
            cumulative += cash_flow[year]

            if cumulative >= 0:
                # previous < 0 <= cumulative, so this year's flow is positive
                fraction = -previous / cash_flow[year]
                return format_years(year - 1 + fraction)

        return f">{len(cash_flow) - 1}"

    def calculate_all_metrics(self, cash_flow: Sequence[float], size_kw_dc: float) -> Dict[str, Any]:
        """
        Calculate all financial metrics.

        Args:
            cash_flow: Complete cash-flow series
            size_kw_dc: System size in kW-DC

        Returns:
            Dictionary of all metrics
        """
        metrics = {}

        # IRR
        irr = self.solve_irr(cash_flow)
        metrics['irr'] = irr.rate
        metrics['irr_percent'] = irr.rate * 100
        metrics['irr_iterations'] = irr.iterations
        metrics['irr_converged'] = irr.converged

        # Payback
        metrics['payback_years'] = self.calculate_payback(cash_flow)

        # Headline figures
        system_cost = size_kw_dc * 1000 * self.constants.cost_per_watt
        metrics['system_cost'] = system_cost
        metrics['itc_amount'] = system_cost * self.constants.itc_rate
        metrics['annual_kwh'] = size_kw_dc * self.constants.generation_kwh_per_kw
        metrics['net_investment'] = -cash_flow[0]
        metrics['lifetime_net_cash'] = float(sum(cash_flow))

        return metrics


def format_years(years: float) -> str:
    """One-decimal years, rounding the exact binary value half up (2.25 -> "2.3")."""
    return str(Decimal(years).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def npv(cash_flow: Sequence[float], rate: float) -> float:
    return MetricsCalculator().calculate_npv(cash_flow, rate)


def calculate_irr(cash_flow: Sequence[float]) -> float:
    return MetricsCalculator().calculate_irr(cash_flow)


def calculate_payback(cash_flow: Sequence[float]) -> str:
    return MetricsCalculator().calculate_payback(cash_flow)


def payback_year_index(payback: str) -> int:
    """Whole year in which payback occurs, or -1 when not recovered."""
    if not isinstance(payback, str) or '>' in payback:
        return -1
    match = re.match(r'^(\d+)', payback)
    return int(match.group(1)) if match else -1
