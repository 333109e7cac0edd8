"""
Main runner module.
Orchestrates validation, price lookup, cash-flow projection and metrics,
and reports or exports the results.
"""

import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .constants import ModelConstants, DEFAULT_CONSTANTS
from .prices import ELECTRICITY_PRICES, get_price
from .inputs import SystemSpec, validate_request, load_inputs
from .cashflow import CashflowModel, chart_data
from .metrics import MetricsCalculator
from .writer_excel import ExcelWriter


@dataclass(frozen=True)
class CalculationResult:
    """Results of one calculator run."""

    state_name: str
    size_kw_dc: float
    cash_flow: Tuple[float, ...]
    effective_price_per_kwh: float
    irr_percent: float
    payback_years: str
    irr_iterations: int
    irr_converged: bool
    system_cost: float
    itc_amount: float
    annual_kwh: float
    cashflow_table: pd.DataFrame = field(compare=False, repr=False)

    def chart_rows(self) -> List[Dict[str, float]]:
        """Per-year {year, annual, cumulative} rows for charting."""
        return chart_data(self.cash_flow).to_dict('records')


@dataclass(frozen=True)
class CalculationOutcome:
    """Either a result or the validation message that prevented one."""

    result: Optional[CalculationResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class SolarCalculator:
    """Main solar calculator orchestrator."""

    def __init__(self, constants: ModelConstants = DEFAULT_CONSTANTS,
                 prices: Mapping[str, float] = ELECTRICITY_PRICES):
        """
        Initialize calculator.

        Args:
            constants: Cost, yield and incentive assumptions
            prices: State name to $/kWh lookup
        """
        self.constants = constants
        self.prices = prices
        self.cashflow_model = CashflowModel(constants)
        self.metrics_calc = MetricsCalculator(constants)

    def calculate(self, state: Optional[str],
                  size: Union[str, float, int, None]) -> CalculationOutcome:
        """
        Validate inputs and run the calculation.

        Args:
            state: Selected state name, empty when none is selected
            size: System size in kW-DC, as entered text or a number

        Returns:
            CalculationOutcome holding a result or an error message
        """
        spec, error = validate_request(state, size)
        if error:
            return CalculationOutcome(error=error)

        return CalculationOutcome(result=self.run(spec))

    def run(self, spec: SystemSpec) -> CalculationResult:
        """Run the projection for an already validated system."""
        price = get_price(spec.state_name, self.prices)

        table = self.cashflow_model.build_cashflow_table(spec.size_kw_dc, price)
        cash_flow = self.cashflow_model.build_cashflow(spec.size_kw_dc, price)
        metrics = self.metrics_calc.calculate_all_metrics(cash_flow, spec.size_kw_dc)

        return CalculationResult(
            state_name=spec.state_name,
            size_kw_dc=spec.size_kw_dc,
            cash_flow=cash_flow,
            effective_price_per_kwh=price,
            irr_percent=metrics['irr_percent'],
            payback_years=metrics['payback_years'],
            irr_iterations=metrics['irr_iterations'],
            irr_converged=metrics['irr_converged'],
            system_cost=metrics['system_cost'],
            itc_amount=metrics['itc_amount'],
            annual_kwh=metrics['annual_kwh'],
            cashflow_table=table,
        )


def run_calculation(state: Optional[str], size: Union[str, float, int, None],
                    constants: ModelConstants = DEFAULT_CONSTANTS) -> CalculationOutcome:
    """Run one calculation with the built-in price table."""
    return SolarCalculator(constants).calculate(state, size)


def format_currency(value: float) -> str:
    """Whole-dollar USD string, e.g. -8750 -> "-$8,750"."""
    sign = '-' if round(value) < 0 else ''
    return f"{sign}${abs(value):,.0f}"


def print_summary(result: CalculationResult):
    """Print headline figures for a result."""
    print(f"  State: {result.state_name}")
    print(f"  System Size: {result.size_kw_dc:.2f} kW-DC")
    print(f"  System Cost: {format_currency(result.system_cost)}")
    print(f"  Annual kWh: {result.annual_kwh:,.0f}")
    print(f"  Elec Price: ${result.effective_price_per_kwh:.2f}/kWh")
    print(f"  IRR: {result.irr_percent:.1f} %")
    if not result.irr_converged:
        print(f"  (IRR did not converge after {result.irr_iterations} iterations)")
    print(f"  Payback: {result.payback_years} yr")
    itc_pct = result.itc_amount / result.system_cost * 100
    print(f"  ITC ({itc_pct:.0f} %): {format_currency(result.itc_amount)}")


def run_model(state: Optional[str], size: Union[str, float, int, None],
              output_path: Optional[str] = None) -> CalculationOutcome:
    """
    Convenience function to run the calculator, print a summary and
    optionally export to Excel.

    Args:
        state: Selected state name
        size: System size in kW-DC
        output_path: Path for output Excel (skipped when None)

    Returns:
        CalculationOutcome
    """
    print("Running Solar Project Calculator...")
    outcome = run_calculation(state, size)

    if not outcome.ok:
        print(f"  Error: {outcome.error}")
        return outcome

    print_summary(outcome.result)

    if output_path:
        print(f"Exporting to Excel: {output_path}")
        ExcelWriter(outcome.result).write_workbook(output_path)
        print("Export complete!")

    return outcome


def run_from_inputs(inputs_path: str, output_path: Optional[str] = None) -> CalculationOutcome:
    """
    Run the calculator for a JSON scenario file.

    Raises:
        ValueError: If the scenario fails validation
    """
    inputs, defaults_used, warnings = load_inputs(inputs_path)

    for default in defaults_used:
        print(f"  Default used: {default}")
    for warning in warnings:
        print(f"  Warning: {warning}")

    return run_model(inputs['state'], inputs['size_kw_dc'], output_path)
