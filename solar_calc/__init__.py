"""
Solar Project Calculator Package
Cash flow, IRR and payback estimates for residential and commercial solar systems.
"""

__version__ = "1.0.0"
__author__ = "Solar Model Team"

from .runner import run_calculation, run_model

__all__ = ["run_calculation", "run_model"]
