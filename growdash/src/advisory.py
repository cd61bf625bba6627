"""
Rule-based cultivation advice.

The rule table is data: each AdvisoryRule names a metric, the bounds that
trigger it, a level, and the message to show. ``AdvisoryEngine.evaluate``
walks the table once, in order, and collects the messages of every rule
whose bounds the reading satisfies. Metrics are evaluated independently, so
a reading can trigger any number of rules.

Levels:
    - ``act``: something needs doing (water, heat, shade, ...).
    - ``watch``: borderline, keep an eye on it.
    - ``ok``: confirmation that a metric is in range. These are reported as
      confirmations, not tips, so a healthy plant gets the all-nominal
      headline.

Rules can be loaded from a JSON file (a list of rule objects) to tune
thresholds without touching the evaluation loop.

CHANGELOG:
- 2026-10-19: Load rule tables from JSON (STORY-007)
- 2026-10-19: Initial creation (STORY-006)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, TypeAdapter, model_validator

from growdash.src.models import AdvisoryResult

if TYPE_CHECKING:
    from growdash.src.models import Reading

logger = logging.getLogger(__name__)

ALL_NOMINAL: str = "All sensors nominal."
"""Headline used when no actionable rule triggers."""


# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


class AdvisoryLevel(StrEnum):
    OK = "ok"
    WATCH = "watch"
    ACT = "act"


class AdvisoryRule(BaseModel):
    """One row of the advisory rule table.

    A rule triggers when the metric value is numeric and satisfies every
    bound that is set.

    Attributes:
        metric: Reading field to test (a metric or an extension field).
        message: Text shown when the rule triggers.
        level: ok, watch, or act.
        gt: Value must be strictly greater than this.
        gte: Value must be greater than or equal to this.
        lt: Value must be strictly less than this.
        lte: Value must be less than or equal to this.
    """

    model_config = ConfigDict(frozen=True)

    metric: str
    message: str
    level: AdvisoryLevel = AdvisoryLevel.ACT
    gt: float | None = None
    gte: float | None = None
    lt: float | None = None
    lte: float | None = None

    @model_validator(mode="after")
    def _must_have_a_bound(self) -> "AdvisoryRule":
        if self.gt is None and self.gte is None and self.lt is None and self.lte is None:
            raise ValueError(f"Rule for '{self.metric}' must set at least one bound")
        return self

    def matches(self, value: object) -> bool:
        """Return True if *value* is numeric and within every set bound."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if self.gt is not None and not value > self.gt:
            return False
        if self.gte is not None and not value >= self.gte:
            return False
        if self.lt is not None and not value < self.lt:
            return False
        if self.lte is not None and not value <= self.lte:
            return False
        return True


_RULE_LIST = TypeAdapter(list[AdvisoryRule])


# ---------------------------------------------------------------------------
# Default rule table (evaluation order matters: first tip is the headline)
# ---------------------------------------------------------------------------

DEFAULT_RULES: tuple[AdvisoryRule, ...] = (
    AdvisoryRule(
        metric="soil", lt=30,
        message="Soil too dry — consider watering soon.",
    ),
    AdvisoryRule(
        metric="soil", gte=30, lt=45, level=AdvisoryLevel.WATCH,
        message="Soil moisture moderate — monitor for changes.",
    ),
    AdvisoryRule(
        metric="soil", gte=45, level=AdvisoryLevel.OK,
        message="Soil moisture healthy.",
    ),
    AdvisoryRule(
        metric="temperature", lt=18,
        message="Temperature low — provide gentle heat or move to warmer zone.",
    ),
    AdvisoryRule(
        metric="temperature", gte=18, lte=28, level=AdvisoryLevel.OK,
        message="Temperature within ideal range.",
    ),
    AdvisoryRule(
        metric="temperature", gt=28,
        message="Temperature high — increase ventilation or shade.",
    ),
    AdvisoryRule(
        metric="humidity", lt=40,
        message="Humidity low — consider misting or humidifier.",
    ),
    AdvisoryRule(
        metric="humidity", gt=80,
        message="Humidity high — risk of fungal growth; improve airflow.",
    ),
    AdvisoryRule(
        metric="light", lt=150,
        message="Light low — increase exposure or turn on grow lights.",
    ),
    AdvisoryRule(
        metric="light", gt=1200,
        message="High light levels — ensure plants tolerate strong light or provide shading.",
    ),
)


def load_rules(path: str | Path) -> tuple[AdvisoryRule, ...]:
    """Load a rule table from a JSON file containing a list of rules.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If the content is not a valid rule list.
    """
    rules = _RULE_LIST.validate_json(Path(path).read_bytes())
    logger.info("Loaded %d advisory rule(s) from %s", len(rules), path)
    return tuple(rules)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class AdvisoryEngine:
    """Evaluates a rule table against readings.

    Stateless between calls: the same reading always yields the same result.

    Args:
        rules: Ordered rule table. Defaults to :data:`DEFAULT_RULES`.
        all_nominal: Headline used when no tip triggers.
    """

    def __init__(
        self,
        rules: Sequence[AdvisoryRule] = DEFAULT_RULES,
        *,
        all_nominal: str = ALL_NOMINAL,
    ) -> None:
        self._rules = tuple(rules)
        self._all_nominal = all_nominal

    @property
    def rules(self) -> tuple[AdvisoryRule, ...]:
        return self._rules

    def evaluate(self, reading: Reading) -> AdvisoryResult:
        """Apply every rule to *reading* and build the advisory result."""
        tips: dict[str, None] = {}
        confirmations: dict[str, None] = {}

        for rule in self._rules:
            if not rule.matches(reading.value(rule.metric)):
                continue
            if rule.level is AdvisoryLevel.OK:
                confirmations.setdefault(rule.message)
            else:
                tips.setdefault(rule.message)

        ordered = tuple(tips)
        return AdvisoryResult(
            headline=ordered[0] if ordered else self._all_nominal,
            tips=ordered,
            confirmations=tuple(confirmations),
        )


def build_engine(rules_path: str | Path = "") -> AdvisoryEngine:
    """Build an engine from a JSON rule file, or the default table if unset."""
    if rules_path:
        return AdvisoryEngine(load_rules(rules_path))
    return AdvisoryEngine(DEFAULT_RULES)
