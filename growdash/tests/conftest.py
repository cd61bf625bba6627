"""
Shared test fixtures for grow dashboard tests.

Cleans GROWDASH_* environment variables before each test and chdirs into
tmp_path so no .env file is picked up by Pydantic BaseSettings. Provides a
seeded mock generator, sample readings, and a recording renderer.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

import os
import random

import pytest
from growdash.src.mock import MockGenerator
from growdash.src.models import DashboardFrame, Reading

FIXED_NOW_MS: float = 1_760_000_000_000.0
"""Arbitrary fixed wall-clock time for deterministic mock readings."""


@pytest.fixture(autouse=True)
def _clean_growdash_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all GROWDASH_* env vars and isolate from .env files."""
    for var in list(os.environ):
        if var.startswith("GROWDASH_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def generator() -> MockGenerator:
    """Mock generator with a seeded RNG and a frozen clock."""
    return MockGenerator(rng=random.Random(42), clock_ms=lambda: FIXED_NOW_MS)


@pytest.fixture()
def stressed_reading() -> Reading:
    """Dry, hot, dry-air, dark: triggers four tips."""
    return Reading(temperature=32, humidity=35, soil=20, light=100)


@pytest.fixture()
def nominal_reading() -> Reading:
    """Every metric within range: no tips."""
    return Reading(temperature=22, humidity=55, soil=60, light=600)


class RecordingRenderer:
    """Renderer that keeps every frame it is handed."""

    def __init__(self) -> None:
        self.frames: list[DashboardFrame] = []

    def render(self, frame: DashboardFrame) -> None:
        self.frames.append(frame)


@pytest.fixture()
def recorder() -> RecordingRenderer:
    return RecordingRenderer()
