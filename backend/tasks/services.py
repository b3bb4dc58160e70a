# tasks/services.py

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from .ai_engine.keywords import analyze_description
from .models import Task

logger = logging.getLogger(__name__)

SAMPLE_TASKS = [
    {
        "title": "Review project proposal",
        "description": "Review the Q1 project proposal and provide feedback",
        "status": Task.Status.PENDING,
        "priority_score": 85,
        "urgency_level": Task.Urgency.HIGH,
        "due_in_days": 2,
        "completion_percentage": 0,
        "source_type": "email",
    },
    {
        "title": "Prepare presentation slides",
        "description": "Create slides for the upcoming client meeting",
        "status": Task.Status.IN_PROGRESS,
        "priority_score": 90,
        "urgency_level": Task.Urgency.CRITICAL,
        "due_in_days": 1,
        "completion_percentage": 45,
        "source_type": "meeting",
    },
    {
        "title": "Update documentation",
        "description": "Update the API documentation with new endpoints",
        "status": Task.Status.PENDING,
        "priority_score": 60,
        "urgency_level": Task.Urgency.MEDIUM,
        "due_in_days": 7,
        "completion_percentage": 0,
        "source_type": "document",
    },
]

SAMPLE_WORK_HABIT = {
    "total_tasks": 12,
    "completed_tasks": 9,
    "productivity_score": 85,
    "context_switches": 15,
    "avg_working_hours": 7.5,
    "overload_indicator": False,
    "ignored_priorities_count": 2,
    "insights": {
        "summary": "Great productivity today! You completed most of your high-priority tasks.",
        "patterns": [],
        "suggestions": [
            "Consider taking breaks between tasks",
            "Focus time between 9-11 AM is optimal",
        ],
        "concerns": [],
    },
}


def generate_sample_data(user, workspace=None, now: Optional[datetime] = None) -> List[Task]:
    """
    Seeds a fresh account with three example tasks and today's work-habit
    row, so the dashboard has something to show before any activity exists.
    """
    # habits depends on tasks, not the other way round
    from habits.models import WorkHabit

    now = now or timezone.now()
    with transaction.atomic():
        tasks = [
            Task.objects.create(
                user=user,
                workspace=workspace,
                title=row["title"],
                description=row["description"],
                status=row["status"],
                priority_score=row["priority_score"],
                urgency_level=row["urgency_level"],
                deadline=now + timedelta(days=row["due_in_days"]),
                completion_percentage=row["completion_percentage"],
                is_ai_generated=True,
                source_type=row["source_type"],
            )
            for row in SAMPLE_TASKS
        ]
        WorkHabit.objects.update_or_create(
            user=user,
            analysis_date=user.local_date(now),
            defaults=dict(SAMPLE_WORK_HABIT),
        )

    logger.info(f"Sample data seeded for user {user.pk}")
    return tasks


def create_manual_task(user, title: str, description: str, deadline: datetime,
                       workspace=None, now: Optional[datetime] = None) -> Task:
    """
    Manual entry: the keyword analyzer sets both the score and the tier.
    """
    # calendar days are counted in the account's timezone
    now = (now or timezone.now()).astimezone(user.tzinfo)
    analysis = analyze_description(description, deadline, now)

    task = Task.objects.create(
        user=user,
        workspace=workspace,
        title=title.strip(),
        description=(description or "").strip(),
        status=Task.Status.PENDING,
        priority_score=analysis.priority_score,
        urgency_level=analysis.priority,
        deadline=deadline,
        is_ai_generated=True,
        source_type="manual_ai",
    )
    logger.info(
        f"Manual task {task.pk} created: complexity={analysis.complexity} "
        f"importance={analysis.importance} priority={analysis.priority}"
    )
    return task


def complete_task(task: Task, now: Optional[datetime] = None) -> Task:
    """
    Completion action. Completing an already completed task keeps the
    original completion time.
    """
    if task.status == Task.Status.COMPLETED:
        return task
    task.mark_completed(now or timezone.now())
    logger.info(f"Task {task.pk} completed")
    return task
