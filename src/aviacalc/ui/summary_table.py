"""Read-only summary table mirroring the paper flight log fuel section.

Each row carries a value column and, for refuel and drain rows, a fuel
document column. Values are preformatted strings ready for display.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

from aviacalc.systems.fuel.fuel_balance import CalculationInput, CalculationResult
from aviacalc.systems.fuel.policy import FuelPolicy

NO_VALUE = "-"

DATE_FORMAT = "%d.%m.%Y"


def _fixed(value: float, places: int) -> str:
    """Format with a fixed number of decimals, rounding halves away from zero."""
    exact = Decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimals
        ctx.prec = max(28, exact.adjusted() + places + 2)
        return str(exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def format_minutes(minutes: float) -> str:
    """Format a duration in whole minutes, e.g. 90.4 -> "90"."""
    return _fixed(minutes, 0)


def format_kg(kg: float) -> str:
    """Format a mass with one decimal, e.g. 476 -> "476.0"."""
    return _fixed(kg, 1)


def format_whole_kg(kg: float) -> str:
    """Format a policy mass without decimals, e.g. 1000.0 -> "1000"."""
    return _fixed(kg, 0)


def format_density(density: float) -> str:
    """Format a density with three decimals, e.g. 0.8 -> "0.800"."""
    return _fixed(density, 3)


@dataclass(frozen=True)
class TableRow:
    """One summary table row.

    Attributes:
        key: Stable row identifier.
        label: Display label.
        value: Formatted value ("" when not yet computed).
        doc: Fuel document column, or None for rows without one.
    """

    key: str
    label: str
    value: str = ""
    doc: str | None = None


# key, label, has document column
ROW_LAYOUT: tuple[tuple[str, str, bool], ...] = (
    ("date", "Date", False),
    ("doc", "Flight document", False),
    ("route", "Route", False),
    ("exercise", "Exercise", False),
    ("ground", "Ground time, min", False),
    ("air", "Air time, min", False),
    ("density", "VSU (density), kg/L", False),
    ("before_flight", "Fuel before flight, kg", False),
    ("refueled_before", "Refueled before flight, kg", True),
    ("drained_before", "Drained before flight, kg", True),
    ("before_start", "Fuel before start, kg", False),
    ("consumed", "Consumed in flight, kg", False),
    ("refueled_after", "Refueled after flight, kg", True),
    ("after_flight", "Fuel after flight, kg", False),
    ("prescribed", "Prescribed consumption, kg", False),
    ("economy", "Economy, kg", False),
)


class SummaryTable:
    """Ordered collection of formatted summary rows.

    Examples:
        >>> table = SummaryTable.initial(FuelPolicy(), date(2024, 5, 1))
        >>> table.value("date"), table.value("before_flight")
        ('01.05.2024', '1000')
    """

    def __init__(self, rows: list[TableRow]):
        self._rows = rows
        self._index = {row.key: i for i, row in enumerate(rows)}

    @classmethod
    def blank(cls) -> "SummaryTable":
        """Table with every cell empty."""
        return cls(
            [TableRow(key, label, "", "" if has_doc else None) for key, label, has_doc in ROW_LAYOUT]
        )

    @classmethod
    def initial(cls, policy: FuelPolicy, today: date) -> "SummaryTable":
        """Table shown before any calculation and after a reset."""
        table = cls.blank()
        table._set("date", today.strftime(DATE_FORMAT))
        table._set("before_flight", format_whole_kg(policy.initial_fuel_kg))
        table._set("drained_before", doc=NO_VALUE)
        table._set("after_flight", format_whole_kg(policy.final_fuel_kg))
        return table

    @classmethod
    def from_result(
        cls, calc_input: CalculationInput, result: CalculationResult, today: date
    ) -> "SummaryTable":
        """Table filled from a successful calculation."""
        table = cls.blank()
        table._set("date", today.strftime(DATE_FORMAT))
        table._set("ground", format_minutes(calc_input.ground_minutes))
        table._set("air", format_minutes(calc_input.air_minutes))
        table._set("density", format_density(calc_input.main_fuel_density))
        table._set("before_flight", format_whole_kg(result.initial_fuel))

        if calc_input.aux_tank_used:
            table._set("refueled_before", format_kg(result.aux_fuel_kg), calc_input.aux_fuel_doc_ref)
        else:
            table._set("refueled_before", NO_VALUE, NO_VALUE)

        table._set("drained_before", format_whole_kg(result.drain_before_flight), NO_VALUE)
        table._set("before_start", format_kg(result.fuel_before_start))
        table._set("consumed", format_kg(result.consumed_in_flight))
        table._set("refueled_after", format_kg(result.main_fuel_kg), calc_input.main_fuel_doc_ref)
        table._set("after_flight", format_whole_kg(result.final_fuel))
        table._set("prescribed", format_kg(result.prescribed_consumption))
        table._set("economy", format_kg(result.economy))
        return table

    def _set(self, key: str, value: str | None = None, doc: str | None = None) -> None:
        i = self._index[key]
        row = self._rows[i]
        if value is not None:
            row = replace(row, value=value)
        if doc is not None:
            row = replace(row, doc=doc)
        self._rows[i] = row

    @property
    def rows(self) -> list[TableRow]:
        """Copy of the rows in display order."""
        return list(self._rows)

    def row(self, key: str) -> TableRow:
        """Get a row by key.

        Raises:
            KeyError: If no row has this key.
        """
        return self._rows[self._index[key]]

    def value(self, key: str) -> str:
        return self.row(key).value

    def doc(self, key: str) -> str | None:
        return self.row(key).doc

    def to_text(self) -> str:
        """Render the table as aligned plain text."""
        label_width = max(len(row.label) for row in self._rows)
        value_width = max(len(row.value) for row in self._rows)
        lines = []
        for row in self._rows:
            line = f"{row.label:<{label_width}}  {row.value:>{value_width}}"
            if row.doc:
                line += f"  [{row.doc}]"
            lines.append(line.rstrip())
        return "\n".join(lines)
