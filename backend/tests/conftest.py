"""
Pytest configuration and shared fixtures for backend tests.

WHAT: Centralized test configuration with markers
WHY: Enable test organization, filtering, and shared test utilities
HOW: Define pytest markers, fixtures, and host collaborator fakes
"""

import os
import tempfile

# Keep test runs from writing logs into the working tree
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "shopmate-tests", "app.log"))

import pytest

from shopmate.core.conversation import Conversation, conversation_manager
from shopmate.models.negotiation import Product, NegotiationPolicy


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (multiple components)"
    )


class RecordingNavigator:
    """Host router fake that records navigations."""

    def __init__(self):
        self.routes: list[str] = []

    def navigate_to(self, route: str) -> None:
        self.routes.append(route)


class RecordingNegotiationOwner:
    """Host negotiation-context fake counting clear calls."""

    def __init__(self):
        self.clear_calls = 0

    def clear_negotiation(self) -> None:
        self.clear_calls += 1


class RecordingScheduler:
    """Scheduler fake that records delays and runs callbacks at once."""

    def __init__(self):
        self.delays: list[float] = []

    def schedule(self, delay_seconds, callback):
        self.delays.append(delay_seconds)
        callback()


@pytest.fixture
def product():
    """Product priced at 1000 (floor 800 at the default 20% cap)."""
    return Product(id="sku-kurta-001", name="Cotton Kurta", price=1000)


@pytest.fixture
def other_product():
    return Product(id="sku-phone-042", name="Budget Phone", price=12000)


@pytest.fixture
def policy():
    """Default escalation: 5% base, +3% per round, 20% cap."""
    return NegotiationPolicy(base_percent=5, increment_percent=3, max_discount_percent=20)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def negotiation_owner():
    return RecordingNegotiationOwner()


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def conversation(navigator, negotiation_owner, scheduler, policy):
    """Conversation wired to recording host fakes."""
    return Conversation(
        "conv-test",
        navigator=navigator,
        negotiation_owner=negotiation_owner,
        scheduler=scheduler,
        policy=policy,
        reply_delay_ms=500,
        navigation_delay_ms=1000,
    )


@pytest.fixture(autouse=True)
def reset_conversation_manager():
    """
    Clear the global conversation cache between tests.

    WHAT: Empty conversation_manager before and after each test
    WHY: Prevent test pollution through the module-level singleton
    """
    conversation_manager.clear()
    yield
    conversation_manager.clear()
