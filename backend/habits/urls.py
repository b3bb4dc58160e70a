from django.urls import path
from .views import activity_list_create_view, analyze_view, latest_view

urlpatterns=[
    path('activities/',activity_list_create_view,name="activity-list-create"),
    path('analyze/',analyze_view,name="habit-analyze"),
    path('latest/',latest_view,name="habit-latest"),
]
