from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import EnrollmentViewSet

router = SimpleRouter()
router.register(r'enrollments', EnrollmentViewSet, basename='enrollment')

urlpatterns = [
    path('', include(router.urls)),
]
