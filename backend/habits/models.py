from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from workspaces.models import AvailableApp, Workspace


class Activity(models.Model):
    """
    One logged user action (email received, meeting scheduled, task switch, ...).
    Append-only; read by the work-habit analyzer and task inference.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='activities',
        verbose_name=_("user")
    )
    workspace = models.ForeignKey(
        Workspace, on_delete=models.SET_NULL, null=True, blank=True, related_name='activities'
    )
    app = models.ForeignKey(
        AvailableApp, on_delete=models.SET_NULL, null=True, blank=True, related_name='activities'
    )
    activity_type = models.CharField(max_length=50, verbose_name=_("activity type"))
    activity_data = models.JSONField(default=dict, blank=True, verbose_name=_("activity data"))
    duration_seconds = models.PositiveIntegerField(default=0, verbose_name=_("duration (seconds)"))
    timestamp = models.DateTimeField(default=timezone.now, verbose_name=_("timestamp"))

    class Meta:
        verbose_name = _("Activity")
        verbose_name_plural = _("Activities")
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', 'timestamp'], name='activity_user_ts_idx'),
        ]

    def __str__(self):
        return f"{self.activity_type} by {self.user.email} at {self.timestamp:%Y-%m-%d %H:%M}"


def empty_insights():
    return {"summary": "", "patterns": [], "suggestions": [], "concerns": []}


class WorkHabit(models.Model):
    """
    Daily work-habit summary. At most one row per (user, analysis_date);
    re-analysis overwrites it.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='work_habits',
        verbose_name=_("user")
    )
    analysis_date = models.DateField(verbose_name=_("analysis date"))
    total_tasks = models.PositiveIntegerField(default=0)
    completed_tasks = models.PositiveIntegerField(default=0)
    productivity_score = models.PositiveSmallIntegerField(default=50)
    context_switches = models.PositiveIntegerField(default=0)
    avg_working_hours = models.FloatField(default=0.0)
    overload_indicator = models.BooleanField(default=False)
    # Can go negative when high-priority work created on an earlier day
    # is completed today; stored as computed.
    ignored_priorities_count = models.IntegerField(default=0)
    insights = models.JSONField(default=empty_insights, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Work Habit")
        verbose_name_plural = _("Work Habits")
        ordering = ['-analysis_date']
        constraints = [
            models.UniqueConstraint(fields=['user', 'analysis_date'], name='unique_work_habit_per_day'),
        ]

    def __str__(self):
        return f"{self.user.email} on {self.analysis_date}: {self.productivity_score}"

    @property
    def suggestions(self):
        return list((self.insights or {}).get("suggestions") or [])
