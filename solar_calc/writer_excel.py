"""
Excel workbook writer module.
Generates the calculator report: summary figures, per-year cash flow table,
line chart of annual and cumulative cash flow, and notes.
"""

import pandas as pd
from typing import Any
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils.dataframe import dataframe_to_rows
from openpyxl.chart import LineChart, Reference

from .metrics import payback_year_index

CURRENCY_FORMAT = '"$"#,##0;-"$"#,##0'

TOOLTIPS = [
    ("IRR", "Internal Rate of Return (IRR) is the annual rate of growth an investment is "
            "expected to generate. Higher IRR means a more profitable investment."),
    ("Payback", "Payback Period is the time it takes for the cumulative cash flow to turn "
                "positive, representing how long it takes to recover the initial investment."),
    ("System Cost", "Total upfront cost of the solar system before applying tax credits."),
    ("Annual kWh", "Estimated annual electricity production from the solar system."),
    ("ITC", "Investment Tax Credit - a 30% federal tax credit for solar systems installed "
            "on residential and commercial properties."),
]


class ExcelWriter:
    """Writes a calculation result to an Excel workbook."""

    def __init__(self, result: Any):
        self.result = result
        self.cashflow = result.cashflow_table

        # Styling
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.header_font = Font(color="FFFFFF", bold=True)
        self.section_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
        self.section_font = Font(bold=True)
        self.payback_fill = PatternFill(start_color="E2EFDA", end_color="E2EFDA", fill_type="solid")

    def write_workbook(self, output_path: str):
        """Write complete workbook to file."""
        wb = Workbook()

        # Remove default sheet
        if 'Sheet' in wb.sheetnames:
            wb.remove(wb['Sheet'])

        self._create_summary_tab(wb)
        self._create_cashflow_tab(wb)
        self._create_chart_tab(wb)
        self._create_notes_tab(wb)

        wb.save(output_path)

    def _create_summary_tab(self, wb: Workbook):
        """Create Summary tab with the headline figures."""
        ws = wb.create_sheet("Summary")

        ws['A1'] = "Solar Project Financial Calculator"
        ws['A1'].font = Font(size=14, bold=True)

        ws['A3'] = "INPUTS"
        self._apply_section_style(ws['A3'])
        ws['A4'] = "US State"
        ws['B4'] = self.result.state_name
        ws['A5'] = "System size (kW-DC)"
        ws['B5'] = self.result.size_kw_dc
        ws['B5'].number_format = '0.00'

        ws['A7'] = "RESULTS"
        self._apply_section_style(ws['A7'])

        itc_pct = self.result.itc_amount / self.result.system_cost * 100
        cards = [
            ("System Cost", self.result.system_cost, CURRENCY_FORMAT),
            ("Annual kWh", self.result.annual_kwh, '#,##0'),
            ("Elec Price", self.result.effective_price_per_kwh, '"$"0.00"/kWh"'),
            ("IRR", self.result.irr_percent / 100, '0.0%'),
            ("Payback", f"{self.result.payback_years} yr", None),
            (f"ITC ({itc_pct:.0f} %)", self.result.itc_amount, CURRENCY_FORMAT),
        ]

        row = 8
        for label, value, number_format in cards:
            ws[f'A{row}'] = label
            ws[f'B{row}'] = value
            if number_format:
                ws[f'B{row}'].number_format = number_format
            row += 1

        if not self.result.irr_converged:
            ws[f'A{row + 1}'] = (f"Note: IRR did not converge after "
                                 f"{self.result.irr_iterations} iterations; value is a best estimate.")

        ws.column_dimensions['A'].width = 30
        ws.column_dimensions['B'].width = 20

    def _create_cashflow_tab(self, wb: Workbook):
        """Create Cash_Flow tab, highlighting the payback year."""
        ws = wb.create_sheet("Cash_Flow")

        self._write_dataframe_to_sheet(ws, self.cashflow, start_row=1)

        payback_year = payback_year_index(self.result.payback_years)
        if payback_year >= 0:
            # Header is row 1, year 0 is row 2
            for cell in ws[payback_year + 2]:
                cell.fill = self.payback_fill

        ws.freeze_panes = 'B2'

    def _create_chart_tab(self, wb: Workbook):
        """Create Chart tab with annual and cumulative cash flow lines."""
        ws = wb.create_sheet("Chart")

        chart_df = self.cashflow[['year', 'annual', 'cumulative']]
        self._write_dataframe_to_sheet(ws, chart_df, start_row=1)

        n_rows = len(chart_df) + 1
        chart = LineChart()
        chart.title = "Cash Flow"
        chart.x_axis.title = "Year"
        chart.y_axis.title = "USD"
        chart.y_axis.numFmt = CURRENCY_FORMAT
        chart.height = 10
        chart.width = 20

        data = Reference(ws, min_col=2, max_col=3, min_row=1, max_row=n_rows)
        years = Reference(ws, min_col=1, min_row=2, max_row=n_rows)
        chart.add_data(data, titles_from_data=True)
        chart.set_categories(years)

        ws.add_chart(chart, "E2")

    def _create_notes_tab(self, wb: Workbook):
        """Create Notes tab."""
        ws = wb.create_sheet("Notes")

        ws['A1'] = "Model Notes and Documentation"
        ws['A1'].font = Font(size=14, bold=True)

        row = 3
        ws[f'A{row}'] = "DEFINITIONS"
        self._apply_section_style(ws[f'A{row}'])
        row += 1
        for label, text in TOOLTIPS:
            ws[f'A{row}'] = f"{label}: {text}"
            row += 1

        notes = [
            "",
            "METHODOLOGY:",
            "- Generation is a flat annual yield per kW-DC with no degradation",
            "- Electricity price escalates annually from the state average",
            "- Year 0 is the installed cost net of the ITC",
            "- IRR: Newton-Raphson on annual cash flows, at most 100 iterations",
            "- Payback: linear interpolation within the year cumulative cash turns positive",
        ]
        for note in notes:
            ws[f'A{row}'] = note
            row += 1

        ws.column_dimensions['A'].width = 100

    def _write_dataframe_to_sheet(self, ws, df: pd.DataFrame, start_row: int = 1):
        """Helper to write DataFrame to sheet with formatting."""
        # Write headers
        for col_idx, col_name in enumerate(df.columns, start=1):
            cell = ws.cell(row=start_row, column=col_idx, value=col_name)
            self._apply_header_style(cell)

        # Write data
        for row_idx, row in enumerate(dataframe_to_rows(df, index=False, header=False), start=start_row + 1):
            for col_idx, value in enumerate(row, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)

                if col_idx > 1:  # Skip year column
                    col_name = df.columns[col_idx - 1].lower()

                    if 'price' in col_name:
                        cell.number_format = '0.0000'
                    elif 'kwh' in col_name:
                        cell.number_format = '#,##0'
                    else:
                        cell.number_format = CURRENCY_FORMAT

        # Auto-width columns
        for column in ws.columns:
            column_letter = column[0].column_letter
            max_length = max(len(str(cell.value)) for cell in column if cell.value is not None)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    def _apply_header_style(self, cell):
        """Apply header style to cell."""
        cell.fill = self.header_fill
        cell.font = self.header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    def _apply_section_style(self, cell):
        """Apply section header style to cell."""
        cell.fill = self.section_fill
        cell.font = self.section_font
