from rest_framework import serializers


class ChatRequestSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=2000, trim_whitespace=True)
    # Free-form page context sent by the widget; not used for routing
    context = serializers.CharField(required=False, allow_blank=True)
