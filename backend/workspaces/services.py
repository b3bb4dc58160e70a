# workspaces/services.py

import logging
from datetime import datetime
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from tasks.services import generate_sample_data
from .models import UserApp, Workspace

logger = logging.getLogger(__name__)


def get_default_workspace(user) -> Optional[Workspace]:
    return Workspace.objects.filter(user=user, is_default=True).first()


def enroll_apps(user, app_ids: List[int], now: Optional[datetime] = None) -> List[UserApp]:
    """
    Enrolls the user in the given catalog apps, in display order, inside the
    default workspace. The first enrollment of an account also seeds the
    sample tasks and work-habit row so the dashboard is not empty.
    """
    now = now or timezone.now()
    workspace = get_default_workspace(user)

    with transaction.atomic():
        first_enrollment = not UserApp.objects.filter(user=user).exists()
        enrolled = []
        for index, app_id in enumerate(app_ids):
            user_app, _ = UserApp.objects.update_or_create(
                user=user,
                app_id=app_id,
                defaults={'workspace': workspace, 'is_active': True, 'display_order': index},
            )
            enrolled.append(user_app)

        if first_enrollment:
            generate_sample_data(user, workspace, now=now)

    logger.info(f"User {user.pk} enrolled in {len(enrolled)} apps (first enrollment: {first_enrollment})")
    return enrolled
