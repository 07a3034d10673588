"""Unit tests for FuelForm."""

import pytest

from aviacalc.core.messaging import Message, MessageTopic
from aviacalc.systems.fuel import Err, ErrorKind, Ok
from aviacalc.ui.fuel_form import (
    AUX_TOGGLE,
    MSG_AUX_FIELDS_REQUIRED,
    MSG_CHECK_NUMBERS,
    MSG_INVALID_TIME,
    MSG_MAIN_FIELDS_REQUIRED,
    FormField,
    FuelForm,
)


@pytest.fixture
def alerts(message_queue):
    """Collect form.alert payloads."""
    received: list[dict] = []
    message_queue.subscribe(MessageTopic.FORM_ALERT, lambda msg: received.append(msg.data))
    return received


def fill_main(form: FuelForm, ground="0:30", air="1:00", qty="600", density="0.8", doc="T-118"):
    form.set_field(FormField.GROUND_TIME, ground)
    form.set_field(FormField.AIR_TIME, air)
    form.set_field(FormField.MAIN_QTY, qty)
    form.set_field(FormField.MAIN_DENSITY, density)
    form.set_field(FormField.MAIN_DOC, doc)


def fill_aux(form: FuelForm, qty="50", density="0,8", doc="T-117"):
    form.set_aux_used(True)
    form.set_field(FormField.AUX_QTY, qty)
    form.set_field(FormField.AUX_DENSITY, density)
    form.set_field(FormField.AUX_DOC, doc)


class TestCalculate:
    """Test calculate() outcomes."""

    def test_reference_flight(self, form, message_queue, alerts) -> None:
        """Test a complete main-tank entry fills the table."""
        fill_main(form)

        outcome = form.calculate()
        message_queue.process()

        assert isinstance(outcome, Ok)
        assert form.table.value("consumed") == "476.0"
        assert form.table.value("prescribed") == "417.5"
        assert form.table.value("economy") == "-58.5"
        assert form.table.value("refueled_before") == "-"
        assert alerts[-1]["level"] == "info"

    def test_with_aux_tanks(self, form) -> None:
        """Test aux fields with comma decimals."""
        fill_main(form)
        fill_aux(form)

        form.calculate().unwrap()

        assert form.table.value("refueled_before") == "40.0"
        assert form.table.doc("refueled_before") == "T-117"
        assert form.table.value("before_start") == "1032.0"

    def test_empty_times_count_as_zero(self, form) -> None:
        """Test empty time fields are zero minutes."""
        fill_main(form, ground="", air="")

        form.calculate().unwrap()

        assert form.table.value("ground") == "0"
        assert form.table.value("prescribed") == "0.0"


class TestValidation:
    """Test error outcomes and their order."""

    @pytest.mark.parametrize("ground", ["abc", "1:30:00", "-30"])
    def test_bad_time(self, form, message_queue, alerts, ground: str) -> None:
        """Test unparseable or negative times are FORMAT errors."""
        fill_main(form, ground=ground)

        outcome = form.calculate()
        message_queue.process()

        assert isinstance(outcome, Err)
        assert outcome.kind == ErrorKind.FORMAT
        assert outcome.message == MSG_INVALID_TIME
        assert alerts[-1]["level"] == "error"
        assert alerts[-1]["kind"] == ErrorKind.FORMAT

    def test_time_checked_before_missing_fields(self, form) -> None:
        """Test a bad time is reported even when main fields are empty."""
        form.set_field(FormField.AIR_TIME, "x")

        assert form.calculate().kind == ErrorKind.FORMAT

    @pytest.mark.parametrize("missing", ["qty", "density", "doc"])
    def test_missing_main_field(self, form, missing: str) -> None:
        """Test each empty main-tank field is MISSING_FIELD."""
        fill_main(form, **{missing: ""})

        outcome = form.calculate()

        assert outcome.kind == ErrorKind.MISSING_FIELD
        assert outcome.message == MSG_MAIN_FIELDS_REQUIRED

    def test_bad_main_number(self, form) -> None:
        """Test a non-numeric main quantity is a FORMAT error."""
        fill_main(form, qty="six hundred")

        outcome = form.calculate()

        assert outcome.kind == ErrorKind.FORMAT
        assert outcome.message == MSG_CHECK_NUMBERS

    def test_missing_aux_field(self, form) -> None:
        """Test empty aux fields are required only when aux is used."""
        fill_main(form)
        fill_aux(form, doc="")

        outcome = form.calculate()

        assert outcome.kind == ErrorKind.MISSING_FIELD
        assert outcome.message == MSG_AUX_FIELDS_REQUIRED

        form.set_aux_used(False)
        assert form.calculate().is_ok()

    def test_bad_aux_number(self, form) -> None:
        """Test a non-numeric aux density is a FORMAT error."""
        fill_main(form)
        fill_aux(form, density="heavy")

        assert form.calculate().kind == ErrorKind.FORMAT

    def test_huge_quantity_formats(self, form) -> None:
        """Test a very large but finite quantity fills the table."""
        fill_main(form, qty="1e30")

        outcome = form.calculate()

        assert isinstance(outcome, Ok)
        assert form.table.value("refueled_after") == f"{1e30 * 0.8:.1f}"

    def test_engine_rejection_propagates(self, form) -> None:
        """Test a zero main quantity reaches the engine and is rejected."""
        fill_main(form, qty="0")

        assert form.calculate().kind == ErrorKind.INVALID_ARGUMENT

    def test_error_keeps_previous_table(self, form) -> None:
        """Test no partial result replaces a previous table."""
        fill_main(form)
        form.calculate().unwrap()

        form.set_field(FormField.MAIN_DOC, "")
        form.calculate()

        assert form.table.value("economy") == "-58.5"


class TestClear:
    """Test form reset."""

    def test_clear_resets_everything(self, form, message_queue) -> None:
        """Test fields, toggle, focus and table are reset."""
        cleared: list[Message] = []
        message_queue.subscribe(MessageTopic.FORM_CLEARED, cleared.append)
        fill_main(form)
        fill_aux(form)
        form.focus_next()
        form.calculate()

        form.clear()
        message_queue.process()

        assert all(form.get_field(f) == "" for f in FormField)
        assert not form.aux_used
        assert form.focused() == FormField.GROUND_TIME
        assert form.table.value("economy") == ""
        assert form.table.value("before_flight") == "1000"
        assert form.table.value("date") == "07.03.2024"
        assert len(cleared) == 1


class TestKeyboardEditing:
    """Test focus movement and text editing."""

    def test_focus_order_without_aux(self, form) -> None:
        """Test aux fields are skipped while the toggle is off."""
        slots = form.focus_slots()

        assert slots[-1] == AUX_TOGGLE
        assert FormField.AUX_QTY not in slots
        assert form.visible_fields()[-1] == FormField.MAIN_DOC

    def test_focus_order_with_aux(self, form) -> None:
        """Test aux fields follow the toggle."""
        form.set_aux_used(True)
        slots = form.focus_slots()

        assert slots.index(AUX_TOGGLE) == slots.index(FormField.MAIN_DOC) + 1
        assert slots[-1] == FormField.AUX_DOC

    def test_focus_bounds(self, form) -> None:
        """Test focus stops at both ends."""
        assert not form.focus_previous()
        while form.focus_next():
            pass
        assert form.focused() == AUX_TOGGLE
        assert not form.focus_next()

    def test_type_and_backspace(self, form) -> None:
        """Test typing into and deleting from the focused field."""
        assert form.type_text("1")
        assert form.type_text(":30")
        assert form.get_field(FormField.GROUND_TIME) == "1:30"

        assert form.backspace()
        assert form.get_field(FormField.GROUND_TIME) == "1:3"

    def test_backspace_on_empty_field(self, form) -> None:
        """Test backspace on an empty field does nothing."""
        assert not form.backspace()

    def test_typing_on_toggle_ignored(self, form) -> None:
        """Test text cannot be typed into the aux toggle."""
        while form.focused() != AUX_TOGGLE:
            form.focus_next()

        assert not form.type_text("x")

    def test_hiding_aux_moves_focus_to_toggle(self, form) -> None:
        """Test focus on a hidden aux field falls back to the toggle."""
        form.set_aux_used(True)
        while form.focus_next():
            pass
        assert form.focused() == FormField.AUX_DOC

        form.toggle_aux()

        assert not form.aux_used
        assert form.focused() == AUX_TOGGLE
