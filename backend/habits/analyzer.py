# habits/analyzer.py

import datetime
import logging
from typing import Any, Dict, Iterable, Optional

from django.db import transaction
from django.utils import timezone

from tasks.models import Task
from .models import Activity, WorkHabit

logger = logging.getLogger(__name__)

BASE_PRODUCTIVITY_SCORE = 50
HIGH_PRIORITY_TIERS = (Task.Urgency.HIGH, Task.Urgency.CRITICAL)

# Overload thresholds
OVERLOAD_HOURS = 10
OVERLOAD_SWITCHES = 40
OVERLOAD_IGNORED = 5


def day_bounds(day: datetime.date, tz: datetime.tzinfo):
    """[start, end) of a calendar day in the given timezone."""
    start = datetime.datetime.combine(day, datetime.time.min, tzinfo=tz)
    return start, start + datetime.timedelta(days=1)


def compute_metrics(activities: Iterable[Activity], created: Iterable[Task], completed: Iterable[Task]) -> Dict[str, Any]:
    activities = list(activities)
    created = list(created)
    completed = list(completed)

    total = len(created)
    done = len(completed)
    completion_rate = (done / total) * 100 if total > 0 else 0

    context_switches = sum(1 for a in activities if a.activity_type == 'task_switched')
    working_hours = sum(a.duration_seconds or 0 for a in activities) / 3600

    high_created = sum(1 for t in created if t.urgency_level in HIGH_PRIORITY_TIERS)
    high_completed = sum(1 for t in completed if t.urgency_level in HIGH_PRIORITY_TIERS)

    return {
        "total_tasks": total,
        "completed_tasks": done,
        "completion_rate": completion_rate,
        "context_switches": context_switches,
        "avg_working_hours": working_hours,
        # no clamp: completing older high-priority work can push this below zero
        "ignored_priorities": high_created - high_completed,
    }


def is_empty_day(metrics: Dict[str, Any], activity_count: int) -> bool:
    return activity_count == 0 and metrics["total_tasks"] == 0 and metrics["completed_tasks"] == 0


def empty_day_insights() -> Dict[str, Any]:
    return {
        "summary": "No activity or tasks recorded for this day.",
        "patterns": [],
        "suggestions": [],
        "concerns": [],
    }


def productivity_score(completion_rate: float, context_switches: int, working_hours: float) -> int:
    score = BASE_PRODUCTIVITY_SCORE

    if completion_rate >= 80:
        score += 30
    elif completion_rate >= 60:
        score += 20
    elif completion_rate >= 40:
        score += 10

    if context_switches < 10:
        score += 10
    elif context_switches > 30:
        score -= 10

    if 6 <= working_hours <= 9:
        score += 10
    elif working_hours > 10:
        score -= 15

    return max(0, min(100, score))


def is_overloaded(working_hours: float, context_switches: int, ignored_priorities: int) -> bool:
    return (
        working_hours > OVERLOAD_HOURS
        or context_switches > OVERLOAD_SWITCHES
        or ignored_priorities > OVERLOAD_IGNORED
    )


def build_insights(completion_rate: float, context_switches: int, working_hours: float,
                   ignored_priorities: int) -> Dict[str, Any]:
    """
    Summary, patterns, concerns and suggestions for the day. The checks are
    independent of each other, so a day can carry both a low-completion
    concern and a healthy-rhythm pattern.
    """
    insights = {"summary": "", "patterns": [], "suggestions": [], "concerns": []}

    if completion_rate >= 80:
        insights["summary"] = "Excellent productivity today! You completed most of your tasks."
        insights["patterns"].append("High task completion rate")
    elif completion_rate >= 60:
        insights["summary"] = "Good productivity today with room for improvement."
        insights["patterns"].append("Moderate task completion rate")
    else:
        insights["summary"] = "Focus and prioritization could be improved."
        insights["patterns"].append("Low task completion rate")
        insights["concerns"].append("Many tasks remain incomplete")

    if context_switches > 30:
        insights["concerns"].append("Frequent context switching detected")
        insights["suggestions"].append("Try time-blocking to reduce context switches")

    if working_hours > 10:
        insights["concerns"].append("Long working hours detected")
        insights["suggestions"].append("Consider taking regular breaks to avoid burnout")

    if ignored_priorities > 3:
        insights["concerns"].append("High-priority tasks being ignored")
        insights["suggestions"].append("Focus on urgent and important tasks first")

    if 6 <= working_hours <= 8 and context_switches < 15:
        insights["patterns"].append("Healthy work patterns observed")
        insights["suggestions"].append("Keep maintaining your current work rhythm")

    return insights


def analyze_work_habits(
    user,
    analysis_date: Optional[datetime.date] = None,
    now: Optional[datetime.datetime] = None
) -> WorkHabit:
    """
    Aggregates one calendar day (in the user's timezone) into a WorkHabit
    row and upserts it on (user, analysis_date).
    """
    tz = user.tzinfo
    if analysis_date is None:
        analysis_date = user.local_date(now or timezone.now())
    start, end = day_bounds(analysis_date, tz)

    activities = Activity.objects.filter(user=user, timestamp__gte=start, timestamp__lt=end)
    created = Task.objects.filter(user=user, created_at__gte=start, created_at__lt=end)
    completed = Task.objects.filter(
        user=user,
        status=Task.Status.COMPLETED,
        completed_at__gte=start,
        completed_at__lt=end,
    )

    activities = list(activities)
    metrics = compute_metrics(activities, created, completed)
    overload = is_overloaded(
        metrics["avg_working_hours"], metrics["context_switches"], metrics["ignored_priorities"]
    )

    if is_empty_day(metrics, len(activities)):
        # nothing to reward: keep the base score
        score = BASE_PRODUCTIVITY_SCORE
        insights = empty_day_insights()
    else:
        score = productivity_score(
            metrics["completion_rate"], metrics["context_switches"], metrics["avg_working_hours"]
        )
        insights = build_insights(
            metrics["completion_rate"],
            metrics["context_switches"],
            metrics["avg_working_hours"],
            metrics["ignored_priorities"],
        )

    with transaction.atomic():
        habit, created_row = WorkHabit.objects.update_or_create(
            user=user,
            analysis_date=analysis_date,
            defaults={
                "total_tasks": metrics["total_tasks"],
                "completed_tasks": metrics["completed_tasks"],
                "productivity_score": score,
                "context_switches": metrics["context_switches"],
                "avg_working_hours": metrics["avg_working_hours"],
                "overload_indicator": overload,
                "ignored_priorities_count": metrics["ignored_priorities"],
                "insights": insights,
            },
        )

    logger.info(
        f"Work habits {'recorded' if created_row else 'updated'} for user {user.pk} "
        f"on {analysis_date}: score={score} overload={overload}"
    )
    return habit
