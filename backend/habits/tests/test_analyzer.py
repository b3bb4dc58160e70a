# habits/tests/test_analyzer.py
"""
Work-Habit Analyzer Tests
=========================

Pure scoring helpers first, then full passes against the database with a
fixed analysis date so day boundaries never depend on the wall clock.
"""

from __future__ import annotations

import datetime
from unittest import TestCase as SimpleTestCase
from unittest.mock import patch
from zoneinfo import ZoneInfo

from django.contrib.auth import get_user_model
from django.test import TestCase

from habits.analyzer import (
    analyze_work_habits,
    build_insights,
    day_bounds,
    is_overloaded,
    productivity_score,
)
from habits.models import Activity, WorkHabit
from habits.tasks import analyze_all_work_habits, run_work_habit_analysis
from tasks.models import Task

User = get_user_model()

DAY = datetime.date(2024, 1, 15)
UTC = datetime.timezone.utc


def at(hour: int, day: datetime.date = DAY) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time(hour), tzinfo=UTC)


# ===========================================================================
# PURE RULES
# ===========================================================================


class TestProductivityScore(SimpleTestCase):

    def test_completion_bands(self) -> None:
        # switches 10..30 and 9 < hours <= 10 add nothing
        for rate, expected in ((100, 80), (80, 80), (79, 70), (60, 70), (40, 60), (39, 50), (0, 50)):
            with self.subTest(rate=rate):
                self.assertEqual(productivity_score(rate, 20, 9.5), expected)

    def test_context_switch_adjustments(self) -> None:
        self.assertEqual(productivity_score(0, 9, 9.5), 60)
        self.assertEqual(productivity_score(0, 10, 9.5), 50)
        self.assertEqual(productivity_score(0, 30, 9.5), 50)
        self.assertEqual(productivity_score(0, 31, 9.5), 40)

    def test_working_hour_adjustments(self) -> None:
        self.assertEqual(productivity_score(0, 20, 6), 60)
        self.assertEqual(productivity_score(0, 20, 9), 60)
        self.assertEqual(productivity_score(0, 20, 10), 50)
        self.assertEqual(productivity_score(0, 20, 10.5), 35)

    def test_best_day_caps_at_hundred(self) -> None:
        self.assertEqual(productivity_score(100, 0, 7), 100)

    def test_worst_day(self) -> None:
        self.assertEqual(productivity_score(0, 50, 14), 25)


class TestOverload(SimpleTestCase):

    def test_long_hours_alone_overload(self) -> None:
        self.assertTrue(is_overloaded(11, 0, 0))

    def test_normal_day_is_not_overloaded(self) -> None:
        self.assertFalse(is_overloaded(8, 5, 0))

    def test_thresholds_are_exclusive(self) -> None:
        self.assertFalse(is_overloaded(10, 40, 5))
        self.assertTrue(is_overloaded(0, 41, 0))
        self.assertTrue(is_overloaded(0, 0, 6))


class TestBuildInsights(SimpleTestCase):

    def test_excellent_day(self) -> None:
        insights = build_insights(90, 5, 7, 0)

        self.assertTrue(insights["summary"].startswith("Excellent productivity today"))
        self.assertIn("High task completion rate", insights["patterns"])
        self.assertIn("Healthy work patterns observed", insights["patterns"])
        self.assertEqual(insights["concerns"], [])

    def test_concerns_accumulate(self) -> None:
        insights = build_insights(10, 35, 11, 4)

        self.assertEqual(
            insights["concerns"],
            [
                "Many tasks remain incomplete",
                "Frequent context switching detected",
                "Long working hours detected",
                "High-priority tasks being ignored",
            ],
        )
        self.assertIn("Try time-blocking to reduce context switches", insights["suggestions"])

    def test_low_completion_and_healthy_rhythm_coexist(self) -> None:
        insights = build_insights(0, 5, 8, 0)

        self.assertIn("Low task completion rate", insights["patterns"])
        self.assertIn("Healthy work patterns observed", insights["patterns"])
        self.assertEqual(insights["concerns"], ["Many tasks remain incomplete"])


class TestDayBounds(SimpleTestCase):

    def test_bounds_follow_the_timezone(self) -> None:
        start, end = day_bounds(DAY, ZoneInfo("America/New_York"))

        self.assertEqual(start.astimezone(UTC), datetime.datetime(2024, 1, 15, 5, 0, tzinfo=UTC))
        self.assertEqual(end - start, datetime.timedelta(days=1))


# ===========================================================================
# FULL ANALYSIS
# ===========================================================================


class TestAnalyzeWorkHabits(TestCase):

    def setUp(self) -> None:
        self.user = User.objects.create_user(email="habits@example.com", password="testpass123")

    def log(self, activity_type: str, duration_seconds: int = 0, timestamp: datetime.datetime = None) -> Activity:
        return Activity.objects.create(
            user=self.user,
            activity_type=activity_type,
            duration_seconds=duration_seconds,
            timestamp=timestamp or at(10),
        )

    def test_empty_day_keeps_base_score(self) -> None:
        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(habit.total_tasks, 0)
        self.assertEqual(habit.completed_tasks, 0)
        self.assertEqual(habit.productivity_score, 50)
        self.assertFalse(habit.overload_indicator)
        self.assertEqual(habit.insights["patterns"], [])

    def test_steady_day_with_open_task(self) -> None:
        for _ in range(5):
            self.log("task_switched", duration_seconds=5760)
        Task.objects.create(user=self.user, title="Open", created_at=at(9))

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(habit.context_switches, 5)
        self.assertEqual(habit.avg_working_hours, 8)
        self.assertEqual(habit.ignored_priorities_count, 0)
        self.assertFalse(habit.overload_indicator)
        # 50 + 10 (few switches) + 10 (hours in range)
        self.assertEqual(habit.productivity_score, 70)
        self.assertIn("Healthy work patterns observed", habit.insights["patterns"])
        self.assertIn("Many tasks remain incomplete", habit.insights["concerns"])

    def test_eleven_hours_is_overload(self) -> None:
        self.log("coding", duration_seconds=11 * 3600)

        habit = analyze_work_habits(self.user, DAY)

        self.assertTrue(habit.overload_indicator)
        self.assertIn("Long working hours detected", habit.insights["concerns"])

    def test_frequent_switching(self) -> None:
        for _ in range(31):
            self.log("task_switched")

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(habit.context_switches, 31)
        self.assertIn("Frequent context switching detected", habit.insights["concerns"])
        self.assertFalse(habit.overload_indicator)

    def test_completion_rate_counts_only_todays_tasks(self) -> None:
        done = Task.objects.create(user=self.user, title="Done", created_at=at(8))
        done.mark_completed(at(15))
        Task.objects.create(user=self.user, title="Open", created_at=at(9))
        Task.objects.create(user=self.user, title="Yesterday", created_at=at(9, DAY - datetime.timedelta(days=1)))

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual((habit.total_tasks, habit.completed_tasks), (2, 1))

    def test_ignored_priorities_can_go_negative(self) -> None:
        """Known boundary: high-priority work from an earlier day completed today."""
        old = Task.objects.create(
            user=self.user,
            title="Carried over",
            urgency_level=Task.Urgency.HIGH,
            created_at=at(9, DAY - datetime.timedelta(days=2)),
        )
        old.mark_completed(at(11))

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(habit.ignored_priorities_count, -1)

    def test_activity_outside_the_day_is_ignored(self) -> None:
        self.log("task_switched", timestamp=at(23, DAY - datetime.timedelta(days=1)))

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(habit.context_switches, 0)

    def test_user_timezone_shifts_the_day(self) -> None:
        self.user.timezone = "America/New_York"
        self.user.save()
        # 03:00 UTC on the 15th is still the 14th in New York
        self.log("task_switched", timestamp=at(3))

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(habit.context_switches, 0)

    def test_reanalysis_overwrites_the_same_row(self) -> None:
        analyze_work_habits(self.user, DAY)
        self.log("coding", duration_seconds=11 * 3600)

        habit = analyze_work_habits(self.user, DAY)

        self.assertEqual(WorkHabit.objects.filter(user=self.user, analysis_date=DAY).count(), 1)
        self.assertTrue(habit.overload_indicator)
        self.assertEqual(WorkHabit.objects.get(user=self.user).avg_working_hours, 11)

    def test_default_date_is_today_in_user_timezone(self) -> None:
        habit = analyze_work_habits(self.user, now=at(12))

        self.assertEqual(habit.analysis_date, DAY)


class TestWorkHabitWorker(TestCase):

    def test_worker_analyzes_given_date(self) -> None:
        user = User.objects.create_user(email="worker@example.com", password="testpass123")

        result = run_work_habit_analysis(user.pk, DAY.isoformat())

        self.assertEqual(result["analysis_date"], "2024-01-15")
        self.assertEqual(result["productivity_score"], 50)

    def test_worker_exits_for_unknown_user(self) -> None:
        self.assertIsNone(run_work_habit_analysis(999999))


class TestNightlyFanOut(TestCase):
    """The beat job closes the day that just ended in each account's timezone."""

    def setUp(self) -> None:
        # beat fires at 23:55 UTC
        self.beat_time = datetime.datetime(2024, 3, 10, 23, 55, tzinfo=UTC)

    def test_only_users_with_activity_are_queued(self) -> None:
        active = User.objects.create_user(email="active@example.com", password="testpass123")
        User.objects.create_user(email="idle@example.com", password="testpass123")
        Activity.objects.create(user=active, activity_type="coding", timestamp=at(10))
        Activity.objects.create(user=active, activity_type="task_switched", timestamp=at(11))

        with patch("habits.tasks.timezone.now", return_value=self.beat_time), \
                patch("habits.tasks.run_work_habit_analysis") as worker:
            count = analyze_all_work_habits()

        self.assertEqual(count, 1)
        worker.delay.assert_called_once_with(active.pk, "2024-03-10")

    def test_account_ahead_of_utc_gets_the_day_that_ended(self) -> None:
        user = User.objects.create_user(
            email="kolkata@example.com", password="testpass123", timezone="Asia/Kolkata"
        )
        # 10:00 local on 2024-03-10
        Activity.objects.create(
            user=user,
            activity_type="coding",
            duration_seconds=3600,
            timestamp=datetime.datetime(2024, 3, 10, 4, 30, tzinfo=UTC),
        )

        with patch("habits.tasks.timezone.now", return_value=self.beat_time), \
                patch("habits.tasks.run_work_habit_analysis") as worker:
            analyze_all_work_habits()

        worker.delay.assert_called_once_with(user.pk, "2024-03-10")
        user_id, day = worker.delay.call_args.args
        result = run_work_habit_analysis(user_id, day)

        habit = WorkHabit.objects.get(pk=result["work_habit_id"])
        self.assertEqual(habit.analysis_date, datetime.date(2024, 3, 10))
        self.assertEqual(habit.avg_working_hours, 1)

    def test_account_behind_utc_gets_its_current_day(self) -> None:
        user = User.objects.create_user(
            email="ny@example.com", password="testpass123", timezone="America/New_York"
        )
        Activity.objects.create(user=user, activity_type="coding", timestamp=at(15))

        with patch("habits.tasks.timezone.now", return_value=self.beat_time), \
                patch("habits.tasks.run_work_habit_analysis") as worker:
            analyze_all_work_habits()

        worker.delay.assert_called_once_with(user.pk, "2024-03-10")
