# tasks/tests/test_priority.py
"""
Priority Aggregator Integration Tests
=====================================

Scoring passes against the database: bonuses, clamping, explanation rows,
idempotence and the score clamp on every Task write.
"""

from __future__ import annotations

import datetime
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from tasks.ai_engine.celery_tasks import rescore_open_tasks, run_priority_scoring
from tasks.ai_engine.priority import PriorityAggregator
from tasks.models import AIExplanation, Task

User = get_user_model()

FIXED_NOW = datetime.datetime(2024, 1, 15, 12, 0, 0, tzinfo=datetime.timezone.utc)


# ===========================================================================
# HELPER FIXTURES
# ===========================================================================


def create_test_user(email: str = "scorer@example.com") -> User:
    return User.objects.create_user(email=email, password="testpass123")


def create_test_task(user: User, **overrides) -> Task:
    fields = {
        "title": "Test Task",
        "status": Task.Status.PENDING,
        "urgency_level": Task.Urgency.MEDIUM,
        "source_type": None,
        "deadline": None,
    }
    fields.update(overrides)
    return Task.objects.create(user=user, **fields)


# ===========================================================================
# SCORING RULES
# ===========================================================================


class TestPriorityAggregatorScoring(TestCase):

    def setUp(self) -> None:
        self.user = create_test_user()
        self.aggregator = PriorityAggregator()

    def _score(self, task: Task) -> Task:
        self.aggregator.score_user_tasks(self.user, FIXED_NOW, task_id=task.pk)
        task.refresh_from_db()
        return task

    def test_overdue_urgent_email_caps_at_hundred(self) -> None:
        task = create_test_task(
            self.user,
            deadline=FIXED_NOW - datetime.timedelta(days=1),
            source_type="email",
            urgency_level=Task.Urgency.HIGH,
        )

        task = self._score(task)

        self.assertEqual(task.priority_score, 100)
        self.assertEqual(task.urgency_level, "critical")

    def test_meeting_due_today_is_exactly_hundred(self) -> None:
        task = create_test_task(
            self.user,
            deadline=FIXED_NOW - datetime.timedelta(hours=2),
            source_type="meeting",
        )

        task = self._score(task)

        self.assertEqual(task.priority_score, 100)
        self.assertEqual(task.urgency_level, "critical")

    def test_in_progress_without_deadline_gets_status_bonus(self) -> None:
        task = create_test_task(self.user, status=Task.Status.IN_PROGRESS)

        task = self._score(task)

        self.assertEqual(task.priority_score, 55)
        self.assertEqual(task.urgency_level, "medium")

    def test_email_bonus_requires_high_source_urgency(self) -> None:
        task = create_test_task(
            self.user,
            deadline=FIXED_NOW + datetime.timedelta(days=10),
            source_type="email",
            urgency_level=Task.Urgency.MEDIUM,
        )

        task = self._score(task)

        self.assertEqual(task.priority_score, 50)
        self.assertEqual(task.urgency_level, "low")

    def test_bonuses_stack(self) -> None:
        task = create_test_task(
            self.user,
            deadline=FIXED_NOW + datetime.timedelta(days=5),
            source_type="meeting",
            status=Task.Status.IN_PROGRESS,
        )

        task = self._score(task)

        # 70 + 15 + 5
        self.assertEqual(task.priority_score, 90)
        self.assertEqual(task.urgency_level, "medium")

    def test_closed_tasks_are_not_scored(self) -> None:
        done = create_test_task(self.user, status=Task.Status.COMPLETED, priority_score=12)
        cancelled = create_test_task(self.user, status=Task.Status.CANCELLED, priority_score=7)

        results = self.aggregator.score_user_tasks(self.user, FIXED_NOW)

        self.assertEqual(results, [])
        done.refresh_from_db()
        cancelled.refresh_from_db()
        self.assertEqual(done.priority_score, 12)
        self.assertEqual(cancelled.priority_score, 7)
        self.assertFalse(AIExplanation.objects.exists())

    def test_other_users_tasks_untouched(self) -> None:
        other = create_test_user("other@example.com")
        foreign = create_test_task(other, priority_score=5)

        self.aggregator.score_user_tasks(self.user, FIXED_NOW)

        foreign.refresh_from_db()
        self.assertEqual(foreign.priority_score, 5)


# ===========================================================================
# EXPLANATIONS AND IDEMPOTENCE
# ===========================================================================


class TestPriorityAggregatorPersistence(TestCase):

    def setUp(self) -> None:
        self.user = create_test_user()
        self.aggregator = PriorityAggregator()

    def test_one_explanation_per_task_per_pass(self) -> None:
        create_test_task(self.user, title="A")
        create_test_task(self.user, title="B", deadline=FIXED_NOW + datetime.timedelta(days=2))

        self.aggregator.score_user_tasks(self.user, FIXED_NOW)

        self.assertEqual(AIExplanation.objects.filter(user=self.user, entity_type="task").count(), 2)

    def test_explanation_text_and_factors(self) -> None:
        task = create_test_task(
            self.user,
            deadline=FIXED_NOW + datetime.timedelta(days=2),
            source_type="meeting",
        )

        self.aggregator.score_user_tasks(self.user, FIXED_NOW)

        row = AIExplanation.objects.get(entity_id=str(task.pk))
        self.assertEqual(
            row.explanation,
            "Priority calculated based on: deadline in 2 days, source: meeting, current status: pending",
        )
        self.assertEqual(row.factors["base_score"], 80)
        self.assertEqual(row.factors["bonuses"], {"meeting": 15})
        self.assertEqual(row.factors["priority_score"], 95)
        self.assertEqual(row.factors["urgency_level"], "high")

    def test_explanation_without_deadline_or_source(self) -> None:
        task = create_test_task(self.user)

        self.aggregator.score_user_tasks(self.user, FIXED_NOW)

        row = AIExplanation.objects.get(entity_id=str(task.pk))
        self.assertEqual(
            row.explanation,
            "Priority calculated based on: no deadline, source: unknown, current status: pending",
        )

    def test_rescoring_is_idempotent(self) -> None:
        """An urgent email scored twice gets the email bonus both times."""
        task = create_test_task(
            self.user,
            deadline=FIXED_NOW + datetime.timedelta(days=10),
            source_type="email",
            urgency_level=Task.Urgency.HIGH,
        )

        first = self.aggregator.score_user_tasks(self.user, FIXED_NOW)
        task.refresh_from_db()
        after_first = (task.priority_score, task.urgency_level)

        second = self.aggregator.score_user_tasks(self.user, FIXED_NOW)
        task.refresh_from_db()

        self.assertEqual(after_first, (60, "low"))
        self.assertEqual((task.priority_score, task.urgency_level), after_first)
        self.assertEqual(first[0]["priority_score"], second[0]["priority_score"])

    def test_store_failure_rolls_back_the_pass(self) -> None:
        task = create_test_task(self.user, priority_score=11)

        with patch.object(AIExplanation.objects, "bulk_create", side_effect=DatabaseError("down")):
            with self.assertRaises(DatabaseError):
                self.aggregator.score_user_tasks(self.user, FIXED_NOW)

        task.refresh_from_db()
        self.assertEqual(task.priority_score, 11)


# ===========================================================================
# MODEL WRITE PATH
# ===========================================================================


class TestTaskScoreClamp(TestCase):

    def setUp(self) -> None:
        self.user = create_test_user()

    def test_score_above_hundred_is_clamped_on_save(self) -> None:
        task = create_test_task(self.user, priority_score=130)

        task.refresh_from_db()
        self.assertEqual(task.priority_score, 100)

    def test_negative_score_is_clamped_on_save(self) -> None:
        task = create_test_task(self.user, priority_score=-5)

        task.refresh_from_db()
        self.assertEqual(task.priority_score, 0)

    def test_source_urgency_is_frozen_at_creation(self) -> None:
        task = create_test_task(self.user, urgency_level=Task.Urgency.HIGH)

        task.urgency_level = Task.Urgency.LOW
        task.save()
        task.refresh_from_db()

        self.assertEqual(task.source_urgency, "high")

    def test_mark_completed_sets_all_completion_fields(self) -> None:
        task = create_test_task(self.user)

        task.mark_completed(FIXED_NOW)
        task.refresh_from_db()

        self.assertEqual(task.status, Task.Status.COMPLETED)
        self.assertEqual(task.completion_percentage, 100)
        self.assertEqual(task.completed_at, FIXED_NOW)


# ===========================================================================
# CELERY WORKER
# ===========================================================================


class TestPriorityScoringWorker(TestCase):

    def test_worker_scores_open_tasks(self) -> None:
        user = create_test_user()
        task = create_test_task(user, status=Task.Status.IN_PROGRESS)

        results = run_priority_scoring(user.pk)

        self.assertEqual(len(results), 1)
        task.refresh_from_db()
        self.assertEqual(task.priority_score, 55)

    def test_worker_exits_for_unknown_user(self) -> None:
        self.assertEqual(run_priority_scoring(999999), [])

    def test_rescore_queues_only_users_with_open_tasks(self) -> None:
        busy = create_test_user("busy@example.com")
        done = create_test_user("done@example.com")
        create_test_user("empty@example.com")
        create_test_task(busy, title="Open")
        create_test_task(busy, title="Also open", status=Task.Status.IN_PROGRESS)
        create_test_task(done, status=Task.Status.COMPLETED)
        create_test_task(done, status=Task.Status.CANCELLED)

        with patch("tasks.ai_engine.celery_tasks.run_priority_scoring") as worker:
            count = rescore_open_tasks()

        self.assertEqual(count, 1)
        worker.delay.assert_called_once_with(busy.pk)

    def test_rescore_with_no_open_tasks_queues_nothing(self) -> None:
        with patch("tasks.ai_engine.celery_tasks.run_priority_scoring") as worker:
            self.assertEqual(rescore_open_tasks(), 0)

        worker.delay.assert_not_called()
