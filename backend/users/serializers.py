from zoneinfo import available_timezones

from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User=get_user_model()


def validate_timezone_name(value):
    if value not in available_timezones():
        raise serializers.ValidationError(f"Unknown timezone: {value}")
    return value


class UserRegistrationSerializer(serializers.ModelSerializer):
    """
    Sign-up payload. A default workspace is added for the new account by
    the workspaces post_save signal.
    """
    password=serializers.CharField(write_only=True,validators=[validate_password])
    password2=serializers.CharField(write_only=True)
    timezone=serializers.CharField(required=False,default='UTC',validators=[validate_timezone_name])

    class Meta:
        model=User
        fields=('id','email','password','password2','full_name','timezone')
        read_only_fields=('id',)

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('password2'):
            raise serializers.ValidationError({"password": "Password fields didn't match."})
        return attrs

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


class UserDetailsSerializer(serializers.ModelSerializer):
    """
    Authenticated user's profile. Email and join date are fixed; the
    timezone drives work-habit day boundaries.
    """
    timezone=serializers.CharField(required=False,validators=[validate_timezone_name])

    class Meta:
        model=User
        fields=('id','email','full_name','avatar_url','preferences','timezone','date_joined')
        read_only_fields=('id','email','date_joined')

    def validate_preferences(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Preferences must be an object.")
        return value


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Login with email instead of username; the display claims let the
    dashboard greet the user without an extra profile request.
    """
    username_field = 'email'

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['email'] = user.email
        token['full_name'] = user.get_full_name()
        token['timezone'] = user.timezone
        return token
