# habits/tasks.py

import logging
from datetime import timedelta
from typing import Any, Dict, Optional
from celery import shared_task
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.utils import timezone
from django.utils.dateparse import parse_date
from .analyzer import analyze_work_habits

logger = logging.getLogger(__name__)

User = get_user_model()

# Nightly runs look this far back to find the local day being closed
NIGHTLY_LOOKBACK = timedelta(hours=12)


@shared_task(
    bind=True,
    autoretry_for=(DatabaseError,),
    retry_backoff=True,
    retry_backoff_max=600,
    max_retries=3,
    time_limit=60,
    soft_time_limit=50
)
def run_work_habit_analysis(self, user_id: int, date: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Worker: analyze one user's day. `date` is an ISO date string
    (JSON-serializable); None means today in the user's timezone.
    """
    user = User.objects.filter(pk=user_id).first()
    if not user:
        logger.warning(f"User {user_id} not found. Exiting worker.")
        return None

    try:
        habit = analyze_work_habits(user, parse_date(date) if date else None)
    except Exception as exc:
        logger.exception(f"Work-habit analysis failed for user {user_id}: {exc}")
        raise

    return {
        "work_habit_id": habit.pk,
        "analysis_date": habit.analysis_date.isoformat(),
        "productivity_score": habit.productivity_score,
    }


@shared_task
def analyze_all_work_habits() -> int:
    """
    Beat job: queue the analysis of the day that just ended for every user
    who logged activity. The day is taken in each user's own timezone.
    """
    now = timezone.now()
    users = User.objects.filter(is_active=True, activities__isnull=False).distinct()
    count = 0
    for user in users:
        # beat fires late evening UTC; accounts ahead of UTC are already past midnight
        day = user.local_date(now - NIGHTLY_LOOKBACK)
        run_work_habit_analysis.delay(user.pk, day.isoformat())
        count += 1
    logger.info(f"Queued work-habit analysis for {count} users")
    return count
