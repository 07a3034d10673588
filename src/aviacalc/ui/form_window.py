"""pygame rendering and keyboard handling for the fuel form.

Keys:
- Up/Down, Tab/Shift+Tab: move between fields
- Typing: edit the focused field, Backspace deletes
- Space/Left/Right on the aux row: toggle aux tanks
- Enter: calculate
- F5: clear the form
- Escape: dismiss the alert, or quit when no alert is shown
"""

import pygame

from aviacalc.core.logging_system import get_logger
from aviacalc.core.messaging import Message, MessageQueue, MessageTopic
from aviacalc.ui.fuel_form import AUX_TOGGLE, FIELD_LABELS, FormField, FuelForm

logger = get_logger(__name__)

BACKGROUND = (18, 22, 30)
TEXT = (230, 230, 230)
DIM = (150, 155, 165)
FOCUS = (255, 210, 80)
ERROR = (235, 90, 90)
SUCCESS = (110, 210, 120)
GRID = (60, 66, 80)

HELP_TEXT = "Up/Down: field  Space: aux  Enter: calculate  F5: clear  Esc: quit"


class FormWindow:
    """Draws the fuel form and routes pygame events to it.

    Examples:
        >>> window = FormWindow(form, queue, screen)
        >>> for event in pygame.event.get():
        ...     window.handle_event(event)
        >>> queue.process()
        >>> window.render()
    """

    def __init__(
        self,
        form: FuelForm,
        message_queue: MessageQueue,
        screen: pygame.Surface,
        font_size: int = 16,
    ):
        """Initialize the window.

        Args:
            form: Form to display and edit.
            message_queue: Queue the form publishes alerts on.
            screen: Surface to draw on.
            font_size: Base font size in points.
        """
        self.form = form
        self.screen = screen
        self._message_queue = message_queue

        self.font = pygame.font.SysFont("monospace", font_size)
        self.title_font = pygame.font.SysFont("monospace", font_size * 2, bold=True)
        self.line_height = self.font.get_linesize() + 4

        self.alert: dict | None = None
        self.quit_requested = False

        message_queue.subscribe(MessageTopic.FORM_ALERT, self._on_alert)
        message_queue.subscribe(MessageTopic.FORM_CLEARED, self._on_cleared)

        logger.debug("FormWindow initialized")

    def close(self) -> None:
        """Unsubscribe from the message queue."""
        self._message_queue.unsubscribe(MessageTopic.FORM_ALERT, self._on_alert)
        self._message_queue.unsubscribe(MessageTopic.FORM_CLEARED, self._on_cleared)

    # Messages

    def _on_alert(self, message: Message) -> None:
        self.alert = message.data

    def _on_cleared(self, message: Message) -> None:
        self.alert = None

    # Input

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process one pygame event.

        Returns:
            True if the event was consumed.
        """
        if event.type == pygame.TEXTINPUT:
            return self.form.type_text(event.text)

        if event.type != pygame.KEYDOWN:
            return False

        key = event.key
        on_toggle = self.form.focused() == AUX_TOGGLE

        if key == pygame.K_ESCAPE:
            if self.alert is not None:
                self.alert = None
            else:
                self.quit_requested = True
            return True

        if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.form.calculate()
            return True

        if key == pygame.K_F5:
            self.form.clear()
            return True

        if key == pygame.K_DOWN or (key == pygame.K_TAB and not event.mod & pygame.KMOD_SHIFT):
            self.form.focus_next()
            return True

        if key == pygame.K_UP or key == pygame.K_TAB:
            self.form.focus_previous()
            return True

        if key == pygame.K_BACKSPACE:
            self.form.backspace()
            return True

        if on_toggle and key in (pygame.K_SPACE, pygame.K_LEFT, pygame.K_RIGHT):
            self.form.toggle_aux()
            return True

        return False

    # Rendering

    def render(self) -> None:
        """Draw the whole form onto the screen surface."""
        self.screen.fill(BACKGROUND)

        title = self.title_font.render("AviaCalc - Fuel Balance", True, TEXT)
        self.screen.blit(title, (20, 12))

        top = 20 + title.get_height() + 10
        self._render_fields(20, top)
        self._render_table(self.screen.get_width() // 2, top)
        self._render_alert()

        help_surface = self.font.render(HELP_TEXT, True, DIM)
        self.screen.blit(help_surface, (20, self.screen.get_height() - self.line_height))

    def _render_fields(self, x: int, y: int) -> None:
        focused = self.form.focused()

        for slot in self.form.focus_slots():
            color = FOCUS if slot == focused else TEXT
            marker = ">" if slot == focused else " "

            if slot == AUX_TOGGLE:
                state = "[Yes]  No " if self.form.aux_used else " Yes  [No]"
                line = f"{marker} Aux tanks refueled: {state}"
            else:
                cursor = "_" if slot == focused else ""
                line = f"{marker} {FIELD_LABELS[slot]}: {self.form.get_field(slot)}{cursor}"

            self.screen.blit(self.font.render(line, True, color), (x, y))
            y += self.line_height

    def _render_table(self, x: int, y: int) -> None:
        pygame.draw.line(self.screen, GRID, (x - 10, y), (x - 10, self.screen.get_height() - 40))

        for row in self.form.table.rows:
            label = self.font.render(row.label, True, DIM)
            self.screen.blit(label, (x, y))

            cell = row.value
            if row.doc:
                cell = f"{cell}  [{row.doc}]" if cell else f"[{row.doc}]"
            value = self.font.render(cell, True, TEXT)
            self.screen.blit(value, (x + 300, y))
            y += self.line_height

    def _render_alert(self) -> None:
        if self.alert is None:
            return

        color = ERROR if self.alert.get("level") == "error" else SUCCESS
        text = f"{self.alert.get('title', '')}: {self.alert.get('text', '')}".replace("\n", " ")
        surface = self.font.render(text, True, color)
        y = self.screen.get_height() - self.line_height * 3
        pygame.draw.rect(
            self.screen, BACKGROUND, (10, y - 4, surface.get_width() + 20, self.line_height + 8)
        )
        pygame.draw.rect(
            self.screen, color, (10, y - 4, surface.get_width() + 20, self.line_height + 8), 1
        )
        self.screen.blit(surface, (20, y))
