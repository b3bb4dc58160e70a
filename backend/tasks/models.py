from django.db import models
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from workspaces.models import AvailableApp, Workspace

PRIORITY_SCORE_MIN = 0
PRIORITY_SCORE_MAX = 100


def clamp_priority_score(score) -> int:
    return int(max(PRIORITY_SCORE_MIN, min(PRIORITY_SCORE_MAX, round(score))))


class Task(models.Model):
    """
    A to-do item, entered by hand, inferred from activity, or seeded.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        IN_PROGRESS = 'in_progress', _('In progress')
        COMPLETED = 'completed', _('Completed')
        CANCELLED = 'cancelled', _('Cancelled')

    class Urgency(models.TextChoices):
        LOW = 'low', _('Low')
        MEDIUM = 'medium', _('Medium')
        HIGH = 'high', _('High')
        CRITICAL = 'critical', _('Critical')

    ACTIVE_STATUSES = (Status.PENDING, Status.IN_PROGRESS)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name=_("user")
    )
    workspace = models.ForeignKey(
        Workspace,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='tasks',
        verbose_name=_("workspace")
    )
    app = models.ForeignKey(
        AvailableApp,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='tasks',
        verbose_name=_("source app")
    )

    title = models.CharField(max_length=255, verbose_name=_("title"))
    description = models.TextField(blank=True, null=True, verbose_name=_("description"))
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        verbose_name=_("status")
    )
    priority_score = models.IntegerField(
        default=50,
        verbose_name=_("priority score"),
        help_text=_("Heuristic priority, clamped to 0-100 on save.")
    )
    urgency_level = models.CharField(
        max_length=10,
        choices=Urgency.choices,
        default=Urgency.MEDIUM,
        verbose_name=_("urgency level")
    )
    # Tier assigned by whoever created the task (inference, manual entry).
    # Rescoring overwrites urgency_level but never this.
    source_urgency = models.CharField(
        max_length=10,
        choices=Urgency.choices,
        blank=True,
        default='',
        verbose_name=_("source urgency")
    )
    deadline = models.DateTimeField(null=True, blank=True, verbose_name=_("deadline"))
    completion_percentage = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name=_("completion percentage")
    )
    estimated_duration = models.PositiveIntegerField(
        null=True, blank=True,
        verbose_name=_("estimated duration"),
        help_text=_("Estimated effort in minutes.")
    )

    is_ai_generated = models.BooleanField(default=False, verbose_name=_("is AI generated"))
    source_type = models.CharField(max_length=50, blank=True, null=True, verbose_name=_("source type"))
    source_reference = models.CharField(max_length=255, blank=True, null=True, verbose_name=_("source reference"))

    completed_at = models.DateTimeField(null=True, blank=True, verbose_name=_("completed at"))
    created_at = models.DateTimeField(default=timezone.now, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))
    
    class Meta:
        verbose_name = _("Task")
        verbose_name_plural = _("Tasks")
        ordering = ['-priority_score', 'deadline', '-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='task_user_status_idx'),
            models.Index(fields=['user', 'created_at'], name='task_user_created_idx'),
        ]

    def __str__(self):
        return f"Task for {self.user.email}: {self.title}"

    @property
    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES

    def save(self, *args, **kwargs):
        self.priority_score = clamp_priority_score(self.priority_score)
        if not self.source_urgency:
            self.source_urgency = self.urgency_level
        super().save(*args, **kwargs)

    def mark_completed(self, now=None):
        """Completion action: status, percentage and timestamp move together."""
        self.status = self.Status.COMPLETED
        self.completion_percentage = 100
        self.completed_at = now or timezone.now()
        self.save(update_fields=['status', 'completion_percentage', 'completed_at', 'updated_at'])


class AIExplanation(models.Model):
    """
    Audit row recording why a score was assigned. Written once per scoring
    pass, never read back by the scoring code.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ai_explanations'
    )
    entity_type = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=64)
    explanation = models.TextField()
    factors = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("AI Explanation")
        verbose_name_plural = _("AI Explanations")
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='explanation_entity_idx'),
        ]

    def __str__(self):
        return f"{self.entity_type}:{self.entity_id} - {self.explanation[:40]}"
