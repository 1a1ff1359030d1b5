"""Hypothesis profiles and shared pytest fixtures for the payment engine."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from payment_engine.ledger.engine import PaymentEngine

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings read the process environment; start every test without overrides."""
    for name in list(os.environ):
        if name.startswith("PAYMENT_ENGINE_"):
            monkeypatch.delenv(name)


@pytest.fixture
def engine() -> PaymentEngine:
    """A fresh engine; one per test, like one per run."""
    return PaymentEngine()


@pytest.fixture
def csv_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write text to a CSV file under tmp_path and return its path."""
    counter = {"n": 0}

    def _write(text: str) -> Path:
        counter["n"] += 1
        path = tmp_path / f"transactions_{counter['n']}.csv"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
