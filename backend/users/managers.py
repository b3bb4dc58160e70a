from zoneinfo import available_timezones

from django.contrib.auth.base_user import BaseUserManager


class CustomUserManager(BaseUserManager):
    """
    Manager for the email-keyed user model. Accounts are created with a
    valid IANA timezone so work-habit days are drawn correctly.
    """
    def create_user(self,email,password=None,**extra_fields):
        if not email:
            raise ValueError('The email must be set!')

        #lowercase the domain part so lookups stay consistent
        email=self.normalize_email(email)

        tz_name=extra_fields.get('timezone') or 'UTC'
        if tz_name not in available_timezones():
            raise ValueError(f'Unknown timezone: {tz_name}')
        extra_fields['timezone']=tz_name
        extra_fields['full_name']=(extra_fields.get('full_name') or '').strip()

        user=self.model(email=email,**extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self,email,password,**extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if not extra_fields['is_staff'] or not extra_fields['is_superuser']:
            raise ValueError('Superuser must have is_staff=True and is_superuser=True.')

        return self.create_user(email, password, **extra_fields)
