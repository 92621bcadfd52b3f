"""
URL configuration for the Contoso University API.

Every resource is served under /api/; the schema and its browsable docs
come from drf-spectacular.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from .views import home

urlpatterns = [
    path('', home, name='home'),
    path('admin/', admin.site.urls),
    path('api/', home, name='api-root'),
    path('api/', include('stats.urls')),
    path('api/', include('departments.urls')),
    path('api/', include('courses.urls')),
    path('api/', include('students.urls')),
    path('api/', include('instructors.urls')),
    path('api/', include('enrollment.urls')),

    # API Schema & Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
