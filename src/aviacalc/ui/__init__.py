"""UI components for AviaCalc.

This module provides the fuel form, its summary table and the pygame window
that displays them.
"""

from aviacalc.ui.fuel_form import FormField, FuelForm
from aviacalc.ui.summary_table import SummaryTable, TableRow

__all__ = ["FormField", "FuelForm", "SummaryTable", "TableRow"]
