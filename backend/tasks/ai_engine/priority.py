# tasks/ai_engine/priority.py

import datetime
import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from ..models import AIExplanation, Task, clamp_priority_score
from .urgency import classify_deadline

# Configure logging for pipeline auditing
logger = logging.getLogger(__name__)

EMAIL_HIGH_URGENCY_BONUS = 10
MEETING_BONUS = 15
IN_PROGRESS_BONUS = 5


class PriorityAggregator:
    """
    Final priority for a task: the deadline base score plus source and
    status bonuses. Each bonus is capped so the running total never
    passes 100.

    The email bonus reads the urgency the task was created with
    (source_urgency), not the urgency written by a previous pass, so
    rescoring an unchanged task reproduces the same result.
    """

    def _apply_bonus(self, score: int, bonus: int) -> int:
        return min(100, score + bonus)

    def _make_explanation(self, task: Task, days: Optional[int]) -> str:
        deadline_part = f"deadline in {days} days" if days is not None else "no deadline"
        return (
            f"Priority calculated based on: {deadline_part}, "
            f"source: {task.source_type or 'unknown'}, current status: {task.status}"
        )

    def score(self, task: Task, now: datetime.datetime) -> Dict[str, Any]:
        """Computes the score contract for one task without touching the database."""
        base = classify_deadline(task.deadline, now)
        score = base.priority_score
        bonuses: Dict[str, int] = {}

        source_urgency = task.source_urgency or task.urgency_level
        if task.source_type == "email" and source_urgency == Task.Urgency.HIGH:
            score = self._apply_bonus(score, EMAIL_HIGH_URGENCY_BONUS)
            bonuses["email_high_urgency"] = EMAIL_HIGH_URGENCY_BONUS

        if task.source_type == "meeting":
            score = self._apply_bonus(score, MEETING_BONUS)
            bonuses["meeting"] = MEETING_BONUS

        if task.status == Task.Status.IN_PROGRESS:
            score = self._apply_bonus(score, IN_PROGRESS_BONUS)
            bonuses["in_progress"] = IN_PROGRESS_BONUS

        score = clamp_priority_score(score)

        return {
            "task_id": task.pk,
            "priority_score": score,
            "urgency_level": base.urgency_level,
            "explanation": self._make_explanation(task, base.days_until_deadline),
            "factors": {
                "base_score": base.priority_score,
                "days_until_deadline": base.days_until_deadline,
                "source_type": task.source_type,
                "status": task.status,
                "bonuses": bonuses,
                "priority_score": score,
                "urgency_level": base.urgency_level,
            },
        }

    def score_user_tasks(
        self,
        user,
        now: datetime.datetime,
        task_id: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Scores the user's open tasks (or just one of them), writes the new
        score/urgency back and appends one explanation row per task.
        All writes of a pass commit together.
        """
        queryset = Task.objects.filter(user=user, status__in=Task.ACTIVE_STATUSES)
        if task_id is not None:
            queryset = queryset.filter(pk=task_id)

        tasks = list(queryset)
        if not tasks:
            logger.info(f"Priority scoring: no open tasks for user {user.pk}")
            return []

        results = [self.score(task, now) for task in tasks]

        with transaction.atomic():
            for task, result in zip(tasks, results):
                task.priority_score = result["priority_score"]
                task.urgency_level = result["urgency_level"]
                task.save(update_fields=["priority_score", "urgency_level", "updated_at"])

            AIExplanation.objects.bulk_create([
                AIExplanation(
                    user=user,
                    entity_type="task",
                    entity_id=str(result["task_id"]),
                    explanation=result["explanation"],
                    factors=result["factors"],
                )
                for result in results
            ])

        logger.info(f"Priority scoring persisted for {len(results)} tasks of user {user.pk}")
        return results
