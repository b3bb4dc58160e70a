# assistant/views.py

from django.utils import timezone
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .responder import respond
from .serializers import ChatRequestSerializer


class ChatView(APIView):
    """
    POST {"message": "..."}: stateless question answering over the
    user's tasks and work habits.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ChatRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        now = timezone.now()
        answer = respond(request.user, serializer.validated_data['message'], now=now)
        return Response({
            "success": True,
            "response": answer["response"],
            "intent": answer["intent"],
            "timestamp": now.isoformat(),
        })

chat_view=ChatView.as_view()
