# tasks/ai_engine/celery_tasks.py

import logging
from typing import Any, Dict, List, Optional
from celery import shared_task
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.utils import timezone
from .priority import PriorityAggregator
from ..models import Task

# Configure logging for background worker monitoring
logger = logging.getLogger(__name__)

User = get_user_model()


@shared_task(
    bind=True,
    autoretry_for=(DatabaseError,),
    retry_backoff=True,
    retry_backoff_max=600,  # Max backoff of 10 minutes
    max_retries=3,
    time_limit=60,
    soft_time_limit=50
)
def run_priority_scoring(
    self,
    user_id: int,
    task_id: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Worker: rescore one user's open tasks (or a single task) against the
    current clock. Input = (user_id, task_id) only.
    """
    logger.info(f"Priority scoring started for user {user_id} (task {task_id})")
    user = User.objects.filter(pk=user_id).first()
    if not user:
        logger.warning(f"User {user_id} not found. Exiting worker.")
        return []

    try:
        return PriorityAggregator().score_user_tasks(user, timezone.now(), task_id=task_id)
    except Exception as exc:
        logger.exception(f"Priority scoring failed for user {user_id}: {exc}")
        # Re-raise for Celery retry policy
        raise


@shared_task
def rescore_open_tasks() -> int:
    """
    Beat job: deadlines drift closer as time passes, so every user with
    open tasks gets a fresh scoring pass. Returns the number of users queued.
    """
    user_ids = (
        Task.objects.filter(status__in=Task.ACTIVE_STATUSES)
        # clear Meta.ordering so DISTINCT applies to user_id alone
        .order_by()
        .values_list('user_id', flat=True)
        .distinct()
    )
    count = 0
    for user_id in user_ids:
        run_priority_scoring.delay(user_id)
        count += 1
    logger.info(f"Queued priority rescoring for {count} users")
    return count
