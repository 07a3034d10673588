"""AviaCalc - flight log fuel balance calculator.

Main entry point. Opens the pygame form window, or with --compute fills the
form from the command line and prints the summary table.

Typical usage:
    python -m aviacalc.main
    python -m aviacalc.main --compute --ground 0:30 --air 1:00 \\
        --main-qty 600 --main-density 0.8 --main-doc T-118
"""

import argparse
import sys
from pathlib import Path
from typing import Any

import pygame

from aviacalc.core.config import ConfigError, ConfigLoader
from aviacalc.core.logging_system import get_logger, initialize_logging, shutdown_logging
from aviacalc.core.messaging import MessageQueue
from aviacalc.core.resource_path import get_config_path
from aviacalc.systems.fuel.fuel_balance import FuelBalanceCalculator
from aviacalc.systems.fuel.result import Err
from aviacalc.ui.form_window import FormWindow
from aviacalc.ui.fuel_form import FormField, FuelForm

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FORM_ERROR = 2
EXIT_FAILURE = 1


def setup_logging() -> None:
    """Initialize logging from config/logging.yaml, or defaults if absent."""
    logging_config = get_config_path("logging.yaml")
    if logging_config.exists():
        initialize_logging(str(logging_config), use_platform_dir=True)
    else:
        initialize_logging(use_platform_dir=True)


def load_policy_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load the ``fuel_policy`` config section.

    config/fuel_policy.yaml is loaded when it exists; an explicit path is
    merged over it, so an override file only needs the keys it changes.

    Args:
        path: Optional override YAML path.

    Returns:
        The fuel_policy section (empty dict for built-in defaults).

    Raises:
        ConfigError: If an explicit path is missing or any file is invalid.
    """
    config = ConfigLoader()

    default_path = get_config_path("fuel_policy.yaml")
    if default_path.exists():
        config = ConfigLoader.load(default_path)
    else:
        logger.info("No bundled fuel policy config found, using defaults")

    if path is not None:
        config.merge(ConfigLoader.load(path))

    # An absent or empty section means defaults
    if config.get("fuel_policy") is None:
        return {}
    return config.get_section("fuel_policy")


class AviaCalc:
    """Windowed application: owns pygame, the form and the main loop."""

    def __init__(self, calculator: FuelBalanceCalculator) -> None:
        """Initialize the application.

        Args:
            calculator: Configured fuel balance calculator.
        """
        logger.info("AviaCalc starting up...")

        pygame.init()
        pygame.display.set_caption("AviaCalc - Fuel Balance")

        self.screen = pygame.display.set_mode((1100, 640), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.message_queue = MessageQueue()
        self.form = FuelForm(calculator, self.message_queue)
        self.window = FormWindow(self.form, self.message_queue, self.screen)

        logger.info("AviaCalc initialized successfully")

    def run(self) -> None:
        """Run the main loop until the window is closed."""
        logger.info("Starting main loop")

        while self.running:
            self.clock.tick(30)
            self._process_events()
            self.message_queue.process()

            if self.window.quit_requested:
                self.running = False

            self.window.render()
            pygame.display.flip()

        self._shutdown()

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.window.screen = self.screen
                logger.debug("Window resized to %dx%d", event.w, event.h)
            else:
                self.window.handle_event(event)

    def _shutdown(self) -> None:
        logger.info("AviaCalc shutting down...")
        self.window.close()
        pygame.quit()
        logger.info("Shutdown complete")


def fill_form(form: FuelForm, args: argparse.Namespace) -> None:
    """Copy command line values into the form fields."""
    form.set_field(FormField.GROUND_TIME, args.ground)
    form.set_field(FormField.AIR_TIME, args.air)
    form.set_field(FormField.MAIN_QTY, args.main_qty)
    form.set_field(FormField.MAIN_DENSITY, args.main_density)
    form.set_field(FormField.MAIN_DOC, args.main_doc)
    form.set_aux_used(args.aux)
    form.set_field(FormField.AUX_QTY, args.aux_qty)
    form.set_field(FormField.AUX_DENSITY, args.aux_density)
    form.set_field(FormField.AUX_DOC, args.aux_doc)


def run_headless(args: argparse.Namespace, calculator: FuelBalanceCalculator) -> int:
    """Fill the form from args, calculate and print the table.

    Returns:
        EXIT_OK on success, EXIT_FORM_ERROR if the form rejected the input.
    """
    form = FuelForm(calculator)
    fill_form(form, args)

    outcome = form.calculate()
    if isinstance(outcome, Err):
        print(f"Error: {outcome.message}", file=sys.stderr)
        return EXIT_FORM_ERROR

    print(outcome.unwrap().to_text())
    return EXIT_OK


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="AviaCalc - flight log fuel balance calculator")

    parser.add_argument("--config", type=str, help="Fuel policy YAML file")
    parser.add_argument(
        "--compute",
        action="store_true",
        help="Compute from the options below and print the table instead of opening a window",
    )
    parser.add_argument("--ground", default="", help="Ground time (H:MM, H-MM or minutes)")
    parser.add_argument("--air", default="", help="Air time (H:MM, H-MM or minutes)")
    parser.add_argument("--main-qty", default="", help="Main tanks refuel quantity (L)")
    parser.add_argument("--main-density", default="", help="Main tanks fuel density (kg/L)")
    parser.add_argument("--main-doc", default="", help="Main tanks fuel document")
    parser.add_argument("--aux", action="store_true", help="Aux tanks were refueled before flight")
    parser.add_argument("--aux-qty", default="", help="Aux tanks refuel quantity (L)")
    parser.add_argument("--aux-density", default="", help="Aux tanks fuel density (kg/L)")
    parser.add_argument("--aux-doc", default="", help="Aux tanks fuel document")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    try:
        args = parse_args(argv)
        setup_logging()
        calculator = FuelBalanceCalculator(load_policy_config(args.config))

        if args.compute:
            return run_headless(args, calculator)

        app = AviaCalc(calculator)
        app.run()
        return EXIT_OK
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return EXIT_FAILURE
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
