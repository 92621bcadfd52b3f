from rest_framework import viewsets

from .models import Enrollment
from .serializers import EnrollmentSerializer


class EnrollmentViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = EnrollmentSerializer

    def get_queryset(self):
        queryset = Enrollment.objects.select_related('course', 'student').order_by('id')

        course_id = self.request.query_params.get('course')
        if course_id and course_id.isdigit():
            queryset = queryset.filter(course_id=int(course_id))

        student_id = self.request.query_params.get('student')
        if student_id and student_id.isdigit():
            queryset = queryset.filter(student_id=int(student_id))

        return queryset
