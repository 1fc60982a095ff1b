"""
Shared fixtures for the SeaTrace test suite.

The chain mirrors the lifecycle: supplier → receipts → lot →
depurated lot → processed lot.
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from seatrace import trace
from seatrace.gateway import reset_subscriptions
from seatrace.models import ProductType

NOW = datetime(2024, 5, 17, 12, 30, tzinfo=dt_timezone.utc)


@pytest.fixture(autouse=True)
def clean_subscriptions():
    yield
    reset_subscriptions()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def supplier(db):
    return trace.register_supplier("Baía Azul", "+55 48 99999-0000", "LIC-001")


@pytest.fixture
def grades(db):
    """Grade A for shell-on boxes, grade P for meat boxes."""
    return [
        trace.add_grade("A", "Grade A", ProductType.SHELL_ON),
        trace.add_grade("P", "Premium", ProductType.MEAT),
    ]


@pytest.fixture
def materials(supplier):
    """Two pending receipts, 6 kg + 4 kg."""
    return [
        trace.receive_raw_material(supplier, "6.0"),
        trace.receive_raw_material(supplier, "4.0"),
    ]


@pytest.fixture
def lot(materials, now):
    """A 10 kg pending lot."""
    return trace.create_lot([m.pk for m in materials], now=now).lot


@pytest.fixture
def depurated_lot(lot, now):
    trace.start_depuration(lot, "T3", "12.5", "33", now=now)
    trace.complete_depuration(lot, "12.0", "33", now=now + timedelta(hours=20))
    lot.refresh_from_db()
    return lot


@pytest.fixture
def boxes():
    return [
        {"type": "shell-on", "weight": "5.0", "grade": "A", "boxNumber": "SO000001"},
        {"type": "meat", "weight": "3.0", "grade": "P", "boxNumber": "CM000002"},
    ]


@pytest.fixture
def processed(depurated_lot, grades, boxes):
    """ProcessingResult of the depurated lot (9 kg out of 10 kg in)."""
    return trace.process(depurated_lot, boxes, "1.0")


def checklist(passed=True, **overrides):
    """All six QC answers, optionally overriding single items by id."""
    answers = []
    for item_id in ("1", "2", "3", "4", "5", "6"):
        answers.append({"id": item_id, "passed": overrides.get(f"item_{item_id}", passed)})
    return answers
