"""
URL configuration for the scheduling app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('', views.api_info, name='api-info'),
    path('tasks/schedule/', views.schedule_tasks, name='schedule-tasks'),
    path('tasks/focus/', views.focus_tasks, name='focus-tasks'),
    path('tasks/score/', views.score_tasks, name='score-tasks'),
]
