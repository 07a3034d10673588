"""Fuel balance calculation for a single flight log entry.

Turns refuel quantities, densities and flight times into the figures the
flight log needs: fuel before engine start, fuel consumed in flight, the
prescribed consumption for the flown times and the resulting economy.
"""

import math
from dataclasses import dataclass

from aviacalc.core.logging_system import get_logger
from aviacalc.systems.fuel.policy import DEFAULT_POLICY, FuelPolicy
from aviacalc.systems.fuel.result import Err, ErrorKind, Ok, Result

logger = get_logger(__name__)


@dataclass(frozen=True)
class CalculationInput:
    """Parsed form values for one calculation.

    Attributes:
        ground_minutes: Time on the ground with engines running (min).
        air_minutes: Time in the air (min).
        main_fuel_liters: Fuel added to the main tanks after flight (L).
        main_fuel_density: Density of the main tank fuel (kg/L).
        main_fuel_doc_ref: Fuel document reference for the main tanks.
        aux_tank_used: Whether the aux (end) tanks were filled before flight.
        aux_fuel_liters: Fuel added to the aux tanks (L).
        aux_fuel_density: Density of the aux tank fuel (kg/L).
        aux_fuel_doc_ref: Fuel document reference for the aux tanks.
    """

    ground_minutes: float
    air_minutes: float
    main_fuel_liters: float
    main_fuel_density: float
    main_fuel_doc_ref: str
    aux_tank_used: bool = False
    aux_fuel_liters: float = 0.0
    aux_fuel_density: float = 0.0
    aux_fuel_doc_ref: str = ""


@dataclass(frozen=True)
class CalculationResult:
    """Derived fuel balance figures, all in kilograms."""

    main_fuel_kg: float
    aux_fuel_kg: float
    drain_before_flight: float
    fuel_before_start: float
    consumed_in_flight: float
    ground_consumption: float
    air_consumption: float
    prescribed_consumption: float
    economy: float
    initial_fuel: float
    final_fuel: float


def _validate(calc_input: CalculationInput) -> Err | None:
    """Check engine preconditions.

    Returns:
        Err describing the first violated precondition, or None.
    """
    checks: list[tuple[str, float, bool]] = [
        ("ground_minutes", calc_input.ground_minutes, False),
        ("air_minutes", calc_input.air_minutes, False),
        ("main_fuel_liters", calc_input.main_fuel_liters, True),
        ("main_fuel_density", calc_input.main_fuel_density, True),
    ]
    if calc_input.aux_tank_used:
        checks.append(("aux_fuel_liters", calc_input.aux_fuel_liters, False))
        checks.append(("aux_fuel_density", calc_input.aux_fuel_density, False))

    for name, value, strictly_positive in checks:
        if not math.isfinite(value):
            return Err(ErrorKind.INVALID_ARGUMENT, f"{name} must be finite, got {value!r}")
        if strictly_positive and value <= 0:
            return Err(ErrorKind.INVALID_ARGUMENT, f"{name} must be > 0, got {value!r}")
        if value < 0:
            return Err(ErrorKind.INVALID_ARGUMENT, f"{name} must be >= 0, got {value!r}")

    return None


def compute_fuel_balance(
    calc_input: CalculationInput, policy: FuelPolicy = DEFAULT_POLICY
) -> Result[CalculationResult]:
    """Compute the fuel balance for one flight.

    Args:
        calc_input: Parsed and validated form values.
        policy: Fuel policy constants.

    Returns:
        Ok(CalculationResult), or Err(INVALID_ARGUMENT) when a numeric input
        is non-finite or out of range.

    Examples:
        >>> outcome = compute_fuel_balance(CalculationInput(30, 60, 600, 0.8, "T-1"))
        >>> round(outcome.unwrap().economy, 1)
        -58.5
    """
    error = _validate(calc_input)
    if error is not None:
        logger.debug("Rejected fuel balance input: %s", error.message)
        return error

    main_fuel_kg = calc_input.main_fuel_liters * calc_input.main_fuel_density
    aux_fuel_kg = (
        calc_input.aux_fuel_liters * calc_input.aux_fuel_density if calc_input.aux_tank_used else 0.0
    )
    drain = policy.drain_for(calc_input.aux_tank_used)

    fuel_before_start = policy.initial_fuel_kg + aux_fuel_kg - drain
    if calc_input.aux_tank_used:
        consumed_in_flight = main_fuel_kg + aux_fuel_kg - policy.drain_with_aux_kg
    else:
        consumed_in_flight = main_fuel_kg - policy.drain_without_aux_kg

    ground_consumption = policy.ground_rate_kg_per_min * calc_input.ground_minutes
    air_consumption = policy.air_rate_kg_per_min * calc_input.air_minutes
    prescribed_consumption = ground_consumption + air_consumption

    result = CalculationResult(
        main_fuel_kg=main_fuel_kg,
        aux_fuel_kg=aux_fuel_kg,
        drain_before_flight=drain,
        fuel_before_start=fuel_before_start,
        consumed_in_flight=consumed_in_flight,
        ground_consumption=ground_consumption,
        air_consumption=air_consumption,
        prescribed_consumption=prescribed_consumption,
        economy=prescribed_consumption - consumed_in_flight,
        initial_fuel=policy.initial_fuel_kg,
        final_fuel=policy.final_fuel_kg,
    )

    logger.debug(
        "Fuel balance: consumed=%.1f kg, prescribed=%.1f kg, economy=%.1f kg",
        result.consumed_in_flight,
        result.prescribed_consumption,
        result.economy,
    )

    return Ok(result)


class FuelBalanceCalculator:
    """Fuel balance calculator bound to a configured policy.

    Examples:
        >>> calc = FuelBalanceCalculator({"air_rate_kg_per_hour": 300})
        >>> calc.policy.air_rate_kg_per_hour
        300.0
    """

    def __init__(self, config: dict | None = None):
        """Initialize calculator.

        Args:
            config: ``fuel_policy`` config section (see FuelPolicy.from_config).

        Raises:
            ConfigError: If the config section is invalid.
        """
        self.policy = FuelPolicy.from_config(config)

        logger.info(
            "FuelBalanceCalculator initialized: ground_rate=%.0f kg/h, air_rate=%.0f kg/h",
            self.policy.ground_rate_kg_per_hour,
            self.policy.air_rate_kg_per_hour,
        )

    def calculate(self, calc_input: CalculationInput) -> Result[CalculationResult]:
        """Compute the fuel balance using this calculator's policy."""
        return compute_fuel_balance(calc_input, self.policy)
