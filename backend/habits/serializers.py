# habits/serializers.py

from rest_framework import serializers
from .models import Activity, WorkHabit


class ActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Activity
        fields = ('id', 'workspace', 'app', 'activity_type', 'activity_data', 'duration_seconds', 'timestamp')
        read_only_fields = ('id',)

    def validate_workspace(self, value):
        if value is not None and value.user_id != self.context['request'].user.pk:
            raise serializers.ValidationError("Unknown workspace.")
        return value

    def create(self, validated_data):
        validated_data['user'] = self.context['request'].user
        return super().create(validated_data)


class WorkHabitSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkHabit
        fields = (
            'id', 'analysis_date', 'total_tasks', 'completed_tasks', 'productivity_score',
            'context_switches', 'avg_working_hours', 'overload_indicator',
            'ignored_priorities_count', 'insights', 'created_at'
        )
        read_only_fields = fields


class AnalysisRequestSerializer(serializers.Serializer):
    date = serializers.DateField(required=False, allow_null=True)
