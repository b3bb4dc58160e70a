import logging
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Workspace

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_default_workspace(sender, instance, created, **kwargs):
    """Every new account starts with one default workspace."""
    if not created:
        return
    Workspace.objects.create(user=instance, name='My Workspace', is_default=True)
    logger.info(f"Default workspace created for user {instance.pk}")
