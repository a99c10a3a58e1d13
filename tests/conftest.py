from __future__ import annotations

import itertools

import pytest

from vitalchain.core.ledger import Ledger


@pytest.fixture
def fixed_clock():
    counter = itertools.count()
    return lambda: f"2024-01-01T00:00:{next(counter) % 60:02d}Z"


@pytest.fixture
def ledger(fixed_clock) -> Ledger:
    return Ledger(clock=fixed_clock)
