# workspaces/views.py

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import AvailableApp, Workspace
from .serializers import (
    AvailableAppSerializer,
    EnrollmentSerializer,
    UserAppSerializer,
    WorkspaceSerializer,
)
from .services import enroll_apps

class WorkspaceListCreateView(generics.ListCreateAPIView):
    """
    GET: List the authenticated user's workspaces.
    POST: Create a new workspace.
    """
    serializer_class = WorkspaceSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return Workspace.objects.filter(user=self.request.user)

list_create_view=WorkspaceListCreateView.as_view()


class WorkspaceRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET, PUT, PATCH, DELETE for one of the user's workspaces.
    The default workspace cannot be deleted.
    """
    serializer_class = WorkspaceSerializer
    permission_classes = [permissions.IsAuthenticated]

    # Scoping the queryset to the owner turns foreign ids into 404s
    def get_queryset(self):
        return Workspace.objects.filter(user=self.request.user)

    def destroy(self, request, *args, **kwargs):
        workspace = self.get_object()
        if workspace.is_default:
            return Response(
                {"success": False, "error": "The default workspace cannot be deleted."},
                status=status.HTTP_400_BAD_REQUEST
            )
        return super().destroy(request, *args, **kwargs)

retreive_update_destroy_view=WorkspaceRetrieveUpdateDestroyView.as_view()


class AvailableAppListView(generics.ListAPIView):
    """GET: The app catalog."""
    serializer_class = AvailableAppSerializer
    permission_classes = [permissions.IsAuthenticated]
    queryset = AvailableApp.objects.all()

app_list_view=AvailableAppListView.as_view()


class EnrollAppsView(APIView):
    """
    POST {"app_ids": [...]}: enroll in catalog apps.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = EnrollmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        enrolled = enroll_apps(request.user, serializer.validated_data['app_ids'])

        return Response(
            {"success": True, "apps": UserAppSerializer(enrolled, many=True).data},
            status=status.HTTP_201_CREATED
        )

enroll_view=EnrollAppsView.as_view()
