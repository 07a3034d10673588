"""Fuel balance calculation.

This module provides:
- Parsers for flight times and decimal quantities typed into the form
- The fuel policy constant set
- The fuel balance engine returning Ok/Err results
"""

from aviacalc.systems.fuel.fuel_balance import (
    CalculationInput,
    CalculationResult,
    FuelBalanceCalculator,
    compute_fuel_balance,
)
from aviacalc.systems.fuel.parsing import parse_decimal, parse_duration_minutes
from aviacalc.systems.fuel.policy import DEFAULT_POLICY, FuelPolicy
from aviacalc.systems.fuel.result import CalculationError, Err, ErrorKind, Ok, Result

__all__ = [
    "CalculationError",
    "CalculationInput",
    "CalculationResult",
    "DEFAULT_POLICY",
    "Err",
    "ErrorKind",
    "FuelBalanceCalculator",
    "FuelPolicy",
    "Ok",
    "Result",
    "compute_fuel_balance",
    "parse_decimal",
    "parse_duration_minutes",
]
