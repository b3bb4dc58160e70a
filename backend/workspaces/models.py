from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

class Workspace(models.Model):
    """
    A named area of the dashboard. Every user gets one default workspace
    on sign-up; tasks and activities may point at one.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='workspaces',
        verbose_name=_("user")
    )

    name = models.CharField(max_length=120, verbose_name=_("name"))
    color = models.CharField(max_length=20, default='#3B82F6', verbose_name=_("color"))
    is_default = models.BooleanField(default=False, verbose_name=_("is default"))
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))

    class Meta:
        verbose_name = _("Workspace")
        verbose_name_plural = _("Workspaces")
        ordering = ['-is_default', 'created_at']

    def __str__(self):
        return f"{self.user.email}'s workspace: {self.name}"


class AvailableApp(models.Model):
    """
    Catalog entry for an external tool the dashboard can embed.
    """
    name = models.CharField(max_length=120, unique=True, verbose_name=_("name"))
    icon = models.CharField(max_length=120, verbose_name=_("icon"))
    category = models.CharField(max_length=60, default='productivity', verbose_name=_("category"))
    is_default = models.BooleanField(default=False, verbose_name=_("is default"))
    redirect_url = models.URLField(max_length=500, blank=True, null=True, verbose_name=_("redirect url"))
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))

    class Meta:
        verbose_name = _("Available App")
        verbose_name_plural = _("Available Apps")
        ordering = ['category', 'name']

    def __str__(self):
        return self.name


class UserApp(models.Model):
    """
    A user's enrollment in a catalog app.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='user_apps'
    )
    app = models.ForeignKey(AvailableApp, on_delete=models.CASCADE, related_name='enrollments')
    workspace = models.ForeignKey(
        Workspace,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='user_apps'
    )
    is_active = models.BooleanField(default=True)
    display_order = models.PositiveSmallIntegerField(default=0)
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("User App")
        verbose_name_plural = _("User Apps")
        ordering = ['display_order']
        constraints = [
            models.UniqueConstraint(fields=['user', 'app'], name='unique_user_app'),
        ]

    def __str__(self):
        return f"{self.user.email} -> {self.app.name}"
