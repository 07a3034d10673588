"""Pytest configuration and fixtures for all tests."""

import os
from datetime import date

import pygame
import pytest

from aviacalc.core.messaging import MessageQueue
from aviacalc.systems.fuel import FuelBalanceCalculator
from aviacalc.ui.fuel_form import FuelForm


@pytest.fixture(scope="session", autouse=True)
def initialize_pygame():
    """Initialize pygame for the form window tests.

    Session-scoped and automatic, so every test runs against the dummy
    video driver.
    """
    os.environ["SDL_VIDEODRIVER"] = "dummy"

    pygame.init()

    yield

    pygame.quit()


@pytest.fixture
def pygame_display():
    """Create a pygame display surface on the dummy video driver."""
    screen = pygame.display.set_mode((1100, 640))
    yield screen


@pytest.fixture
def message_queue():
    """Create a message queue for testing."""
    return MessageQueue()


@pytest.fixture
def form(message_queue):
    """Create a fuel form with the default policy and a fixed date."""
    return FuelForm(FuelBalanceCalculator(), message_queue, today=lambda: date(2024, 3, 7))
