"""Unit tests for the summary table and its formatting helpers."""

from datetime import date

import pytest

from aviacalc.systems.fuel import CalculationInput, FuelPolicy, compute_fuel_balance
from aviacalc.ui.summary_table import (
    NO_VALUE,
    ROW_LAYOUT,
    SummaryTable,
    format_density,
    format_kg,
    format_minutes,
)

TODAY = date(2024, 3, 7)


def test_formatters() -> None:
    """Test fixed-decimal formatting with halves rounded away from zero."""
    assert format_minutes(90) == "90"
    assert format_minutes(12.5) == "13"
    assert format_kg(476) == "476.0"
    assert format_kg(-58.5) == "-58.5"
    assert format_kg(92.25) == "92.3"
    assert format_density(0.8) == "0.800"
    assert format_density(0.785) == "0.785"


def test_initial_table() -> None:
    """Test the table shown before any calculation."""
    table = SummaryTable.initial(FuelPolicy(), TODAY)

    assert table.value("date") == "07.03.2024"
    assert table.value("before_flight") == "1000"
    assert table.value("after_flight") == "1000"
    assert table.doc("drained_before") == NO_VALUE
    assert table.value("economy") == ""
    assert table.value("consumed") == ""


def test_initial_table_uses_policy() -> None:
    """Test before/after flight rows follow the policy."""
    table = SummaryTable.initial(FuelPolicy(initial_fuel_kg=950, final_fuel_kg=900), TODAY)

    assert table.value("before_flight") == "950"
    assert table.value("after_flight") == "900"


def test_rows_in_layout_order() -> None:
    """Test rows follow the flight log layout."""
    table = SummaryTable.blank()

    assert [row.key for row in table.rows] == [key for key, _, _ in ROW_LAYOUT]
    assert table.row("refueled_after").doc == ""
    assert table.row("economy").doc is None


def test_from_result_without_aux() -> None:
    """Test the filled table for a flight without aux tanks."""
    calc_input = CalculationInput(30, 60, 600, 0.8, "T-118")
    result = compute_fuel_balance(calc_input).unwrap()

    table = SummaryTable.from_result(calc_input, result, TODAY)

    assert table.value("ground") == "30"
    assert table.value("air") == "60"
    assert table.value("density") == "0.800"
    assert table.value("refueled_before") == NO_VALUE
    assert table.doc("refueled_before") == NO_VALUE
    assert table.value("drained_before") == "4"
    assert table.value("before_start") == "996.0"
    assert table.value("consumed") == "476.0"
    assert table.value("refueled_after") == "480.0"
    assert table.doc("refueled_after") == "T-118"
    assert table.value("prescribed") == "417.5"
    assert table.value("economy") == "-58.5"


def test_from_result_with_aux() -> None:
    """Test aux rows carry the aux mass and document."""
    calc_input = CalculationInput(30, 60, 600, 0.8, "T-118", True, 50, 0.8, "T-117")
    result = compute_fuel_balance(calc_input).unwrap()

    table = SummaryTable.from_result(calc_input, result, TODAY)

    assert table.value("refueled_before") == "40.0"
    assert table.doc("refueled_before") == "T-117"
    assert table.value("drained_before") == "8"
    assert table.value("before_start") == "1032.0"


def test_unknown_row_raises() -> None:
    """Test looking up a missing row."""
    with pytest.raises(KeyError):
        SummaryTable.blank().row("fuel_flow")


def test_to_text() -> None:
    """Test plain-text rendering includes labels, values and documents."""
    calc_input = CalculationInput(30, 60, 600, 0.8, "T-118")
    table = SummaryTable.from_result(calc_input, compute_fuel_balance(calc_input).unwrap(), TODAY)

    text = table.to_text()

    assert "Economy, kg" in text
    assert "-58.5" in text
    assert "[T-118]" in text
    assert len(text.splitlines()) == len(ROW_LAYOUT)


def test_formatters_handle_large_values() -> None:
    """Test values with more than 28 significant digits still format."""
    assert format_kg(1e30) == f"{1e30:.1f}"
    assert format_density(1e26) == f"{1e26:.3f}"
    assert format_minutes(-1e40) == f"{-1e40:.0f}"
