import datetime
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.db import models
from django.contrib.auth.models import AbstractBaseUser,PermissionsMixin
from django.utils.translation import gettext_lazy as _
from .managers import CustomUserManager

logger = logging.getLogger(__name__)

class CustomUser(AbstractBaseUser,PermissionsMixin):
    """
    Dashboard account. Email is the login field; the profile fields
    (full_name, avatar_url, preferences) back the profile panel.
    """
    email=models.EmailField(
        _('email address'),
        unique=True
    )

    full_name=models.CharField(_('full name'),max_length=150,blank=True)
    avatar_url=models.URLField(_('avatar url'),max_length=500,blank=True)

    # Free-form UI preferences (theme, notification toggles, ...)
    preferences=models.JSONField(_('preferences'),default=dict,blank=True)

    is_staff = models.BooleanField(
        _('staff status'),
        default=False,
        help_text=_('Designates whether the user can log into this admin site.'),
    )
    is_active = models.BooleanField(
        _('active'),
        default=True,
        help_text=_(
            'Designates whether this user should be treated as active. '
            'Unselect this instead of deleting accounts.'
        ),
    )
    date_joined = models.DateTimeField(_('date joined'), auto_now_add=True)

    # Day boundaries for work-habit analysis are drawn in this timezone
    timezone = models.CharField(
        _('Timezone'),
        max_length=60,
        default='UTC',
        help_text=_('User timezone for daily work-habit analysis.'),
    )
    
    # ------------------ Model Configuration ------------------
    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['full_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')

    def get_full_name(self):
        return self.full_name or self.email

    def get_short_name(self):
        """Returns the first word of the full name, falling back to the email."""
        return self.full_name.split(' ')[0] if self.full_name else self.email

    @property
    def tzinfo(self) -> datetime.tzinfo:
        """The account's timezone; unknown names fall back to UTC."""
        try:
            return ZoneInfo(self.timezone or 'UTC')
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r} for user {self.pk}; using UTC")
            return datetime.timezone.utc

    def local_date(self, now: datetime.datetime) -> datetime.date:
        """Calendar date of `now` as the user sees it."""
        return now.astimezone(self.tzinfo).date()

    def __str__(self):
        return self.email
