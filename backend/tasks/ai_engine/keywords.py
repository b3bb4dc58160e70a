# tasks/ai_engine/keywords.py

import datetime
import logging
import math
from typing import Dict, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

# Tiered keyword sets, matched as plain substrings of the lower-cased text
COMPLEXITY_KEYWORDS: Dict[str, List[str]] = {
    "high": [
        "complex", "integration", "architecture", "algorithm", "optimization", "refactor",
        "migrate", "infrastructure", "distributed", "scalable", "multi-tier", "enterprise",
        "framework", "api", "database", "security", "authentication", "encryption",
        "deployment", "ci/cd", "emergency", "crashed", "server", "debugging",
    ],
    "medium": [
        "develop", "implement", "design", "create", "build", "configure", "setup", "test",
        "debug", "analyze", "research", "document", "coordinate", "multiple", "several",
        "system", "feature", "module",
    ],
    "low": [
        "update", "fix", "minor", "simple", "quick", "small", "basic", "review", "check",
        "verify", "email", "call", "schedule", "meeting",
    ],
}

IMPORTANCE_KEYWORDS: Dict[str, List[str]] = {
    "high": [
        "critical", "urgent", "essential", "vital", "crucial", "mandatory", "required",
        "must", "priority", "important", "revenue", "business", "strategic", "client",
        "customer", "executive", "ceo", "stakeholder", "deadline", "asap", "emergency",
        "immediate", "demanding",
    ],
    "medium": [
        "should", "needed", "necessary", "useful", "beneficial", "relevant", "significant",
        "team", "project", "department", "quarterly", "monthly", "report", "presentation",
    ],
    "low": [
        "optional", "nice to have", "consider", "maybe", "could", "suggest", "idea",
        "future", "backlog", "whenever", "eventually",
    ],
}

# Per-hit increments. Low-tier importance words pull the score down.
COMPLEXITY_WEIGHTS = {"high": 1.5, "medium": 0.8, "low": 0.3}
IMPORTANCE_WEIGHTS = {"high": 1.2, "medium": 0.6, "low": -0.3}

COMPLEXITY_START = 1.0
IMPORTANCE_START = 2.0
SCORE_MIN = 1
SCORE_MAX = 5


class KeywordAnalysis(NamedTuple):
    complexity: int
    importance: int
    priority: str

    @property
    def priority_score(self) -> int:
        """Score recorded for manually entered tasks (clamped on save)."""
        return (self.complexity + self.importance) * 10


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _scan(text: str, keyword_sets: Dict[str, List[str]], weights: Dict[str, float], start: float) -> float:
    # Every hit counts, no de-duplication, so the raw sum has no ceiling.
    score = start
    for tier, keywords in keyword_sets.items():
        for keyword in keywords:
            if keyword in text:
                score += weights[tier]
    return score


def _clamp(raw: float) -> int:
    return min(SCORE_MAX, max(SCORE_MIN, _round_half_up(raw)))


def score_complexity(text: str) -> int:
    return _clamp(_scan(text.lower(), COMPLEXITY_KEYWORDS, COMPLEXITY_WEIGHTS, COMPLEXITY_START))


def score_importance(text: str) -> int:
    return _clamp(_scan(text.lower(), IMPORTANCE_KEYWORDS, IMPORTANCE_WEIGHTS, IMPORTANCE_START))


def days_to_deadline_date(deadline: datetime.date, today: datetime.date) -> int:
    """Calendar days from today to the deadline, never below 1."""
    return max(1, (deadline - today).days)


def priority_tier(complexity: int, importance: int, days: int) -> str:
    total = (complexity + importance) / 2 + 5 / days
    if total >= 4.5 or days <= 1:
        return "critical"
    if total >= 3.5 or days <= 3:
        return "high"
    if total >= 2.5:
        return "medium"
    return "low"


def analyze_description(
    description: Optional[str],
    deadline: Optional[datetime.datetime],
    now: datetime.datetime
) -> KeywordAnalysis:
    """
    Scores a free-text description for complexity and importance (1-5 each)
    and derives a priority tier from them plus the deadline distance.

    A description stuffed with keywords does not error; both dimensions
    simply saturate at 5.
    """
    if not description or deadline is None:
        return KeywordAnalysis(0, 0, "low")

    complexity = score_complexity(description)
    importance = score_importance(description)

    if isinstance(deadline, datetime.datetime):
        # compare calendar dates in the caller's timezone
        if deadline.tzinfo is not None and now.tzinfo is not None:
            deadline = deadline.astimezone(now.tzinfo)
        deadline_date = deadline.date()
    else:
        deadline_date = deadline
    days = days_to_deadline_date(deadline_date, now.date())
    priority = priority_tier(complexity, importance, days)

    logger.debug(f"Keyword analysis: complexity={complexity} importance={importance} days={days} -> {priority}")
    return KeywordAnalysis(complexity, importance, priority)
