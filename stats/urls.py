from django.urls import path
from . import views

urlpatterns = [
    path('stats/', views.enrollment_stats, name='enrollment-stats'),
    path('health/', views.health, name='health'),
]
