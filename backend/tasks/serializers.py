# tasks/serializers.py

from django.utils import timezone
from rest_framework import serializers
from workspaces.models import AvailableApp
from .ai_engine.inference import parse_deadline
from .models import Task
from .services import create_manual_task
import logging

logger = logging.getLogger(__name__)

class TaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        # explicit whitelist: user-entered fields + system-read fields required by UI
        fields = [
            'id', 'title', 'description', 'workspace', 'app', 'status', 'deadline',
            'priority_score', 'urgency_level', 'completion_percentage', 'estimated_duration',
            'is_ai_generated', 'source_type', 'source_reference',
            'completed_at', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'app', 'priority_score', 'urgency_level', 'is_ai_generated', 'source_type',
            'source_reference', 'completed_at', 'created_at', 'updated_at'
        ]

    def validate_workspace(self, value):
        if value is not None and value.user_id != self.context['request'].user.pk:
            raise serializers.ValidationError("Unknown workspace.")
        return value

    def validate(self, attrs):
        # Manual entry needs a deadline: the keyword analyzer scores against it
        if self.instance is None and not attrs.get('deadline'):
            raise serializers.ValidationError({"deadline": "A deadline is required for new tasks."})
        return attrs

    def create(self, validated_data):
        """
        Manual entry goes through the keyword analyzer, which sets both
        priority_score and urgency_level.
        """
        user = self.context['request'].user
        return create_manual_task(
            user=user,
            title=validated_data['title'],
            description=validated_data.get('description') or '',
            deadline=validated_data['deadline'],
            workspace=validated_data.get('workspace'),
        )

    def update(self, instance, validated_data):
        # Marking a task completed through PATCH behaves like the completion action
        completing = (
            validated_data.get('status') == Task.Status.COMPLETED
            and instance.status != Task.Status.COMPLETED
        )
        if completing:
            validated_data['completion_percentage'] = 100
            validated_data['completed_at'] = timezone.now()
        return super().update(instance, validated_data)


class ScoreRequestSerializer(serializers.Serializer):
    task_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class ActivityInputSerializer(serializers.Serializer):
    activity_type = serializers.CharField(max_length=50)
    activity_data = serializers.DictField(required=False, default=dict)
    app_id = serializers.PrimaryKeyRelatedField(
        queryset=AvailableApp.objects.all(), required=False, allow_null=True
    )

    def validate_activity_data(self, value):
        try:
            parse_deadline(value.get('deadline'))
        except ValueError as e:
            raise serializers.ValidationError(str(e))
        return value

    def to_internal_value(self, data):
        attrs = super().to_internal_value(data)
        app = attrs.get('app_id')
        attrs['app_id'] = app.pk if app is not None else None
        return attrs


class InferenceRequestSerializer(serializers.Serializer):
    activities = ActivityInputSerializer(many=True)


class KeywordAnalysisRequestSerializer(serializers.Serializer):
    description = serializers.CharField(allow_blank=True, required=False, default='')
    deadline = serializers.DateTimeField(required=False, allow_null=True)
