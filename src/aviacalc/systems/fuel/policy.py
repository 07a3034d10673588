"""Fixed fuel policy values used by the fuel balance calculation.

All masses are in kilograms and rates in kilograms per hour. The defaults are
the operator's standing values; a deployment may override them from the
``fuel_policy`` section of ``config/fuel_policy.yaml``.

Example config:
    fuel_policy:
      initial_fuel_kg: 1000
      final_fuel_kg: 1000
      drain_with_aux_kg: 8
      drain_without_aux_kg: 4
      ground_rate_kg_per_hour: 185
      air_rate_kg_per_hour: 325
"""

import math
from dataclasses import dataclass, fields
from typing import Any

from aviacalc.core.config import ConfigError


@dataclass(frozen=True)
class FuelPolicy:
    """Constant set injected into the fuel balance calculation.

    Attributes:
        initial_fuel_kg: Fuel on board before refuelling (before flight).
        final_fuel_kg: Fuel on board after the post-flight refuel.
        drain_with_aux_kg: Technical drain before flight when the aux tanks were filled.
        drain_without_aux_kg: Technical drain before flight otherwise.
        ground_rate_kg_per_hour: Prescribed burn rate while taxiing/on the ground.
        air_rate_kg_per_hour: Prescribed burn rate in the air.
    """

    initial_fuel_kg: float = 1000.0
    final_fuel_kg: float = 1000.0
    drain_with_aux_kg: float = 8.0
    drain_without_aux_kg: float = 4.0
    ground_rate_kg_per_hour: float = 185.0
    air_rate_kg_per_hour: float = 325.0

    @property
    def ground_rate_kg_per_min(self) -> float:
        return self.ground_rate_kg_per_hour / 60.0

    @property
    def air_rate_kg_per_min(self) -> float:
        return self.air_rate_kg_per_hour / 60.0

    def drain_for(self, aux_tank_used: bool) -> float:
        """Get the pre-flight drain for the given aux tank usage."""
        return self.drain_with_aux_kg if aux_tank_used else self.drain_without_aux_kg

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> "FuelPolicy":
        """Build a policy from a ``fuel_policy`` config section.

        Missing keys keep their defaults.

        Args:
            config: Mapping of field name to value, or None.

        Returns:
            FuelPolicy instance.

        Raises:
            ConfigError: On unknown keys or values that are not finite,
                non-negative numbers.
        """
        if not config:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ConfigError(f"Unknown fuel policy keys: {', '.join(unknown)}")

        values: dict[str, float] = {}
        for name, raw in config.items():
            if isinstance(raw, bool):
                raise ConfigError(f"Fuel policy value {name} must be a number, got {raw!r}")
            try:
                value = float(raw)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Fuel policy value {name} must be a number, got {raw!r}") from e
            if not math.isfinite(value) or value < 0:
                raise ConfigError(f"Fuel policy value {name} must be finite and >= 0, got {raw!r}")
            values[name] = value

        return cls(**values)


DEFAULT_POLICY = FuelPolicy()
