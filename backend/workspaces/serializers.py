# workspaces/serializers.py

from rest_framework import serializers
from .models import Workspace, AvailableApp, UserApp

class WorkspaceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Workspace
        fields = ('id', 'name', 'color', 'is_default', 'created_at')
        read_only_fields = ('id', 'is_default', 'created_at')

    def create(self, validated_data):
        validated_data['user'] = self.context['request'].user
        return super().create(validated_data)


class AvailableAppSerializer(serializers.ModelSerializer):
    class Meta:
        model = AvailableApp
        fields = ('id', 'name', 'icon', 'category', 'is_default', 'redirect_url')
        read_only_fields = fields


class UserAppSerializer(serializers.ModelSerializer):
    app = AvailableAppSerializer(read_only=True)

    class Meta:
        model = UserApp
        fields = ('id', 'app', 'workspace', 'is_active', 'display_order', 'enrolled_at')
        read_only_fields = fields


class EnrollmentSerializer(serializers.Serializer):
    """Payload for POST /workspaces/apps/enroll/."""
    app_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False
    )

    def validate_app_ids(self, value):
        found = set(AvailableApp.objects.filter(id__in=value).values_list('id', flat=True))
        missing = [app_id for app_id in value if app_id not in found]
        if missing:
            raise serializers.ValidationError(f"Unknown app ids: {missing}")
        # keep the caller's order, drop repeats
        return list(dict.fromkeys(value))
