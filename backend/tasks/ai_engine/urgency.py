import math
import datetime
from typing import NamedTuple, Optional

SECONDS_PER_DAY = 86400

# Score and tier for a task with no deadline at all
NO_DEADLINE_SCORE = 50
NO_DEADLINE_URGENCY = "medium"


class DeadlineUrgency(NamedTuple):
    days_until_deadline: Optional[int]
    priority_score: int
    urgency_level: str


def days_until(deadline: datetime.datetime, now: datetime.datetime) -> int:
    """Whole days to the deadline, rounded up; negative once it has passed."""
    return math.ceil((deadline - now).total_seconds() / SECONDS_PER_DAY)


def classify_deadline(
    deadline: Optional[datetime.datetime],
    now: datetime.datetime
) -> DeadlineUrgency:
    """
    Maps time-to-deadline to a base priority score and urgency tier.

    The first matching row wins:
        no deadline  -> 50, medium
        overdue      -> 100, critical
        today        -> 95, critical
        tomorrow     -> 90, high
        2-3 days     -> 80, high
        4-7 days     -> 70, medium
        beyond       -> 50, low
    """
    if deadline is None:
        return DeadlineUrgency(None, NO_DEADLINE_SCORE, NO_DEADLINE_URGENCY)

    days = days_until(deadline, now)

    if days < 0:
        return DeadlineUrgency(days, 100, "critical")
    if days == 0:
        return DeadlineUrgency(days, 95, "critical")
    if days == 1:
        return DeadlineUrgency(days, 90, "high")
    if days <= 3:
        return DeadlineUrgency(days, 80, "high")
    if days <= 7:
        return DeadlineUrgency(days, 70, "medium")
    return DeadlineUrgency(days, 50, "low")
