"""Fuel form: raw text fields in, summary table out.

The form owns the text the user typed, the aux tank toggle and the keyboard
focus. ``calculate()`` validates the text, runs the fuel balance engine and
stores the resulting summary table. Every outcome is announced on the message
queue as a ``form.alert`` so a window (or test) can show it.

Typical usage:
    form = FuelForm(calculator, message_queue)
    form.set_field(FormField.GROUND_TIME, "0:30")
    form.set_field(FormField.AIR_TIME, "1:00")
    form.set_field(FormField.MAIN_QTY, "600")
    form.set_field(FormField.MAIN_DENSITY, "0.8")
    form.set_field(FormField.MAIN_DOC, "T-118")
    outcome = form.calculate()
    print(form.table.value("economy"))  # -58.5
"""

from collections.abc import Callable
from datetime import date
from enum import Enum

from aviacalc.core.logging_system import get_logger
from aviacalc.core.messaging import Message, MessagePriority, MessageQueue, MessageTopic
from aviacalc.systems.fuel.fuel_balance import CalculationInput, FuelBalanceCalculator
from aviacalc.systems.fuel.parsing import parse_decimal, parse_duration_minutes
from aviacalc.systems.fuel.result import Err, ErrorKind, Ok, Result
from aviacalc.ui.summary_table import SummaryTable

logger = get_logger(__name__)

MSG_TITLE_ERROR = "Error"
MSG_TITLE_SUCCESS = "Success"
MSG_INVALID_TIME = "Invalid time format"
MSG_MAIN_FIELDS_REQUIRED = "Fill in all main tank fields"
MSG_AUX_FIELDS_REQUIRED = "Fill in all aux tank fields"
MSG_CHECK_NUMBERS = "Check the numeric values"
MSG_CALCULATION_DONE = "Calculation complete!\nResults are shown in the table"


class FormField(Enum):
    """Text fields of the form, in keyboard focus order."""

    GROUND_TIME = "ground_time"
    AIR_TIME = "air_time"
    MAIN_QTY = "main_qty"
    MAIN_DENSITY = "main_density"
    MAIN_DOC = "main_doc"
    AUX_QTY = "aux_qty"
    AUX_DENSITY = "aux_density"
    AUX_DOC = "aux_doc"


FIELD_LABELS: dict[FormField, str] = {
    FormField.GROUND_TIME: "Ground time (H:MM or min)",
    FormField.AIR_TIME: "Air time (H:MM or min)",
    FormField.MAIN_QTY: "Main tanks, L",
    FormField.MAIN_DENSITY: "Main density, kg/L",
    FormField.MAIN_DOC: "Main fuel document",
    FormField.AUX_QTY: "Aux tanks, L",
    FormField.AUX_DENSITY: "Aux density, kg/L",
    FormField.AUX_DOC: "Aux fuel document",
}

AUX_FIELDS = (FormField.AUX_QTY, FormField.AUX_DENSITY, FormField.AUX_DOC)

# Focus slot for the aux yes/no toggle, placed between main and aux fields
AUX_TOGGLE = "aux_toggle"


class FuelForm:
    """Single-screen fuel calculation form.

    Focus moves through the visible fields plus the aux toggle. Hidden aux
    fields keep their text while the toggle is off but are ignored by
    calculate(), matching what the user sees.

    Examples:
        >>> form = FuelForm(FuelBalanceCalculator())
        >>> form.set_aux_used(True)
        >>> [f.value for f in form.visible_fields()][-1]
        'aux_doc'
    """

    def __init__(
        self,
        calculator: FuelBalanceCalculator,
        message_queue: MessageQueue | None = None,
        sender_name: str = "fuel_form",
        today: Callable[[], date] = date.today,
    ):
        """Initialize the form.

        Args:
            calculator: Fuel balance calculator with the active policy.
            message_queue: Queue for alert and reset notifications.
            sender_name: Name used as message sender.
            today: Clock used for the table date (injectable for tests).
        """
        self.calculator = calculator
        self._message_queue = message_queue
        self._sender_name = sender_name
        self._today = today

        self._fields: dict[FormField, str] = {f: "" for f in FormField}
        self._aux_used = False
        self._focus_index = 0
        self.table = SummaryTable.initial(calculator.policy, today())

        logger.debug("%s initialized", sender_name)

    # Field access

    def set_field(self, field: FormField, text: str) -> None:
        self._fields[field] = text

    def get_field(self, field: FormField) -> str:
        return self._fields[field]

    def set_aux_used(self, used: bool) -> None:
        """Set the aux tank toggle; aux fields show only when it is on."""
        if self._aux_used == used:
            return

        current = self.focused()
        self._aux_used = used
        slots = self.focus_slots()
        self._focus_index = slots.index(current) if current in slots else slots.index(AUX_TOGGLE)
        logger.debug("Aux tanks used: %s", used)

    def toggle_aux(self) -> None:
        self.set_aux_used(not self._aux_used)

    @property
    def aux_used(self) -> bool:
        return self._aux_used

    def visible_fields(self) -> list[FormField]:
        """Fields currently shown, in focus order."""
        return [f for f in FormField if self._aux_used or f not in AUX_FIELDS]

    # Keyboard focus

    def focus_slots(self) -> list[FormField | str]:
        """Focusable slots: visible fields with the aux toggle after the main doc."""
        slots: list[FormField | str] = []
        for field in self.visible_fields():
            slots.append(field)
            if field == FormField.MAIN_DOC:
                slots.append(AUX_TOGGLE)
        return slots

    def focused(self) -> FormField | str:
        """Get the focused slot (a FormField or AUX_TOGGLE)."""
        return self.focus_slots()[self._focus_index]

    def focus_next(self) -> bool:
        """Move focus down. Returns False if already at the last slot."""
        if self._focus_index < len(self.focus_slots()) - 1:
            self._focus_index += 1
            return True
        return False

    def focus_previous(self) -> bool:
        """Move focus up. Returns False if already at the first slot."""
        if self._focus_index > 0:
            self._focus_index -= 1
            return True
        return False

    def type_text(self, text: str) -> bool:
        """Append text to the focused field.

        Returns:
            False if the focus is on the aux toggle.
        """
        focused = self.focused()
        if not isinstance(focused, FormField):
            return False
        self._fields[focused] += text
        return True

    def backspace(self) -> bool:
        """Delete the last character of the focused field."""
        focused = self.focused()
        if not isinstance(focused, FormField) or not self._fields[focused]:
            return False
        self._fields[focused] = self._fields[focused][:-1]
        return True

    # Actions

    def build_input(self) -> Result[CalculationInput]:
        """Validate the raw text and build the engine input.

        Returns:
            Ok(CalculationInput), or Err(FORMAT / MISSING_FIELD) for the
            first problem found.
        """
        ground_minutes = parse_duration_minutes(self._fields[FormField.GROUND_TIME])
        air_minutes = parse_duration_minutes(self._fields[FormField.AIR_TIME])
        if ground_minutes is None or air_minutes is None or ground_minutes < 0 or air_minutes < 0:
            return Err(ErrorKind.FORMAT, MSG_INVALID_TIME)

        main_fields = (FormField.MAIN_QTY, FormField.MAIN_DENSITY, FormField.MAIN_DOC)
        if any(not self._fields[f] for f in main_fields):
            return Err(ErrorKind.MISSING_FIELD, MSG_MAIN_FIELDS_REQUIRED)

        main_qty = parse_decimal(self._fields[FormField.MAIN_QTY])
        main_density = parse_decimal(self._fields[FormField.MAIN_DENSITY])
        if main_qty is None or main_density is None:
            return Err(ErrorKind.FORMAT, MSG_CHECK_NUMBERS)

        aux_qty = 0.0
        aux_density = 0.0
        aux_doc = ""
        if self._aux_used:
            if any(not self._fields[f] for f in AUX_FIELDS):
                return Err(ErrorKind.MISSING_FIELD, MSG_AUX_FIELDS_REQUIRED)

            parsed_qty = parse_decimal(self._fields[FormField.AUX_QTY])
            parsed_density = parse_decimal(self._fields[FormField.AUX_DENSITY])
            if parsed_qty is None or parsed_density is None:
                return Err(ErrorKind.FORMAT, MSG_CHECK_NUMBERS)
            aux_qty, aux_density = parsed_qty, parsed_density
            aux_doc = self._fields[FormField.AUX_DOC]

        return Ok(
            CalculationInput(
                ground_minutes=ground_minutes,
                air_minutes=air_minutes,
                main_fuel_liters=main_qty,
                main_fuel_density=main_density,
                main_fuel_doc_ref=self._fields[FormField.MAIN_DOC],
                aux_tank_used=self._aux_used,
                aux_fuel_liters=aux_qty,
                aux_fuel_density=aux_density,
                aux_fuel_doc_ref=aux_doc,
            )
        )

    def calculate(self) -> Result[SummaryTable]:
        """Validate, compute and refresh the summary table.

        On failure the previous table is kept and an error alert is
        published; on success the new table is stored and returned.
        """
        built = self.build_input()
        if isinstance(built, Err):
            return self._fail(built)

        calc_input = built.unwrap()
        computed = self.calculator.calculate(calc_input)
        if isinstance(computed, Err):
            return self._fail(computed)

        result = computed.unwrap()
        self.table = SummaryTable.from_result(calc_input, result, self._today())

        logger.info(
            "Calculated: consumed=%.1f kg, prescribed=%.1f kg, economy=%.1f kg",
            result.consumed_in_flight,
            result.prescribed_consumption,
            result.economy,
        )

        self._alert(MSG_TITLE_SUCCESS, MSG_CALCULATION_DONE, "info")
        return Ok(self.table)

    def clear(self) -> None:
        """Reset every field, the aux toggle, the focus and the table."""
        self._fields = {f: "" for f in FormField}
        self._aux_used = False
        self._focus_index = 0
        self.table = SummaryTable.initial(self.calculator.policy, self._today())

        logger.info("Form cleared")
        self._publish(MessageTopic.FORM_CLEARED, {})

    # Notifications

    def _fail(self, error: Err) -> Err:
        logger.warning("Calculation rejected (%s): %s", error.kind.value, error.message)
        self._alert(MSG_TITLE_ERROR, error.message, "error", kind=error.kind)
        return error

    def _alert(self, title: str, text: str, level: str, kind: ErrorKind | None = None) -> None:
        data = {"title": title, "text": text, "level": level}
        if kind is not None:
            data["kind"] = kind
        self._publish(
            MessageTopic.FORM_ALERT,
            data,
            MessagePriority.HIGH if level == "error" else MessagePriority.NORMAL,
        )

    def _publish(
        self,
        topic: str,
        data: dict,
        priority: MessagePriority = MessagePriority.NORMAL,
    ) -> None:
        if not self._message_queue:
            return

        self._message_queue.publish(
            Message(
                sender=self._sender_name,
                recipients=["*"],
                topic=topic,
                data=data,
                priority=priority,
            )
        )
