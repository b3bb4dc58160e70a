# tasks/views.py

import logging
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .ai_engine.inference import infer_tasks
from .ai_engine.keywords import analyze_description
from .ai_engine.priority import PriorityAggregator
from .models import Task
from .serializers import (
    InferenceRequestSerializer,
    KeywordAnalysisRequestSerializer,
    ScoreRequestSerializer,
    TaskSerializer,
)
from .services import complete_task

logger = logging.getLogger(__name__)


class TaskListCreateView(generics.ListCreateAPIView):
    """
    GET: List the authenticated user's tasks, highest priority first.
         ?status=pending,in_progress filters by status.
    POST: Manual task entry (keyword-scored).
    """
    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        # ensure user only sees own tasks
        queryset = Task.objects.filter(user=self.request.user)
        statuses = self.request.query_params.get('status')
        if statuses:
            queryset = queryset.filter(status__in=statuses.split(','))
        return queryset

list_create_view=TaskListCreateView.as_view()

class TaskRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET, PUT, PATCH, DELETE for a specific task instance.
    """
    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]
    
    # Ensures the user can only access tasks they own.
    def get_queryset(self):
        return Task.objects.filter(user=self.request.user)
    
retreive_update_destroy_view=TaskRetrieveUpdateDestroyView.as_view()


class TaskCompleteView(APIView):
    """
    POST: completion action (status=completed, 100%, completed_at=now).
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        task = get_object_or_404(Task, pk=pk, user=request.user)
        task = complete_task(task)
        return Response({"success": True, "task": TaskSerializer(task).data})

complete_view=TaskCompleteView.as_view()

    
class PrioritizedTaskListView(generics.ListAPIView):
    """
    Returns open tasks ordered by priority_score descending.
    """
    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return Task.objects.filter(
            user=self.request.user,
            status__in=Task.ACTIVE_STATUSES
        ).order_by('-priority_score', 'deadline')
    
tasks_list_view=PrioritizedTaskListView.as_view()


class PriorityScoringView(APIView):
    """
    POST {"task_id": optional}: rescore open tasks and record explanations.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ScoreRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        scored = PriorityAggregator().score_user_tasks(
            request.user,
            timezone.now(),
            task_id=serializer.validated_data.get('task_id'),
        )
        return Response({
            "success": True,
            "scored_tasks": [
                {
                    "task_id": result["task_id"],
                    "priority_score": result["priority_score"],
                    "urgency_level": result["urgency_level"],
                    "explanation": result["explanation"],
                }
                for result in scored
            ],
        })

score_view=PriorityScoringView.as_view()


class TaskInferenceView(APIView):
    """
    POST {"activities": [...]}: turn logged activity into draft tasks.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = InferenceRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = infer_tasks(request.user, serializer.validated_data['activities'])

        body = {
            "success": True,
            "tasks": TaskSerializer(created, many=True).data,
            "count": len(created),
        }
        if not created:
            body["message"] = "No tasks inferred from activities"
        return Response(body, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)

infer_view=TaskInferenceView.as_view()


class KeywordAnalysisView(APIView):
    """
    POST {"description", "deadline"}: live preview of the keyword analyzer
    for the task entry form. Nothing is stored.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = KeywordAnalysisRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        analysis = analyze_description(
            serializer.validated_data.get('description'),
            serializer.validated_data.get('deadline'),
            timezone.now().astimezone(request.user.tzinfo),
        )
        return Response({
            "success": True,
            "complexity": analysis.complexity,
            "importance": analysis.importance,
            "priority": analysis.priority,
        })

analyze_view=KeywordAnalysisView.as_view()
