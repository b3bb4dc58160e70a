# workspaces/urls.py

from django.urls import path
from .views import app_list_view, enroll_view, list_create_view, retreive_update_destroy_view

urlpatterns = [
    path('', list_create_view, name='workspace-list-create'), 
    path('<int:pk>/', retreive_update_destroy_view, name='workspace-detail'), 
    path('apps/', app_list_view, name='app-list'),
    path('apps/enroll/', enroll_view, name='app-enroll'),
]
