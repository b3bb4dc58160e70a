# habits/views.py

from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .analyzer import analyze_work_habits
from .models import Activity, WorkHabit
from .serializers import ActivitySerializer, AnalysisRequestSerializer, WorkHabitSerializer


class ActivityListCreateView(generics.ListCreateAPIView):
    """
    GET: The user's activity log, newest first. ?type= filters by activity_type.
    POST: Log one activity.
    """
    serializer_class = ActivitySerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = Activity.objects.filter(user=self.request.user)
        activity_type = self.request.query_params.get('type')
        if activity_type:
            queryset = queryset.filter(activity_type=activity_type)
        return queryset

activity_list_create_view=ActivityListCreateView.as_view()


class WorkHabitAnalysisView(APIView):
    """
    POST {"date": optional YYYY-MM-DD}: analyze a day and upsert its summary.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = AnalysisRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        habit = analyze_work_habits(request.user, serializer.validated_data.get('date'))
        return Response({"success": True, "analysis": WorkHabitSerializer(habit).data})

analyze_view=WorkHabitAnalysisView.as_view()


class LatestWorkHabitView(APIView):
    """GET: the most recent work-habit summary, or null before any analysis."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        habit = WorkHabit.objects.filter(user=request.user).order_by('-analysis_date').first()
        return Response({
            "success": True,
            "work_habit": WorkHabitSerializer(habit).data if habit else None,
        })

latest_view=LatestWorkHabitView.as_view()
