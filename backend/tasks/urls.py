from django.urls import path
from .views import (
    analyze_view,
    complete_view,
    infer_view,
    list_create_view,
    retreive_update_destroy_view,
    score_view,
    tasks_list_view,
)

urlpatterns=[
    # GET and POST (List tasks and manual entry)
    path('',list_create_view,name="task-list-create"),

    path('prioritized-list/',tasks_list_view,name="prioritized-list"),
    path('score/',score_view,name="task-score"),
    path('infer/',infer_view,name="task-infer"),
    path('analyze/',analyze_view,name="task-analyze"),
    
    # GET, PUT, PATCH, DELETE (Detail and Manipulation)
    path('<int:pk>/',retreive_update_destroy_view,name="task-detail"),
    path('<int:pk>/complete/',complete_view,name="task-complete"),
]
