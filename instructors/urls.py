from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import InstructorViewSet

router = SimpleRouter()
router.register(r'instructors', InstructorViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
