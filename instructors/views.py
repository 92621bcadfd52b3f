import logging

from django.db.models import ProtectedError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from courses.models import Course
from courses.serializers import CourseSerializer
from enrollment.models import Enrollment
from enrollment.serializers import EnrollmentSerializer
from .models import Instructor
from .serializers import InstructorSerializer

logger = logging.getLogger(__name__)


def _positive_int(value):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


class InstructorViewSet(viewsets.ModelViewSet):
    queryset = Instructor.objects.select_related('office_assignment').prefetch_related('courses')
    serializer_class = InstructorSerializer
    lookup_value_regex = r'\d+'

    def destroy(self, request, *args, **kwargs):
        instructor = self.get_object()

        # An instructor administering a department must be reassigned first
        department = instructor.administered_departments.first()
        if department is not None:
            return Response({
                'error': f"Cannot delete instructor. They are assigned as administrator of {department.name} department."
            }, status=status.HTTP_400_BAD_REQUEST)

        try:
            instructor.delete()
        except ProtectedError:
            logger.warning(f"Instructor {instructor.pk} became a department administrator while being deleted")
            return Response({
                'error': 'Cannot delete instructor. They are assigned as administrator of a department.'
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({'message': 'Instructor deleted successfully'})

    @action(detail=False, methods=['get'], url_path='view')
    def index_view(self, request):
        """
        Three-panel index data: every instructor, the courses taught by the
        selected instructor and the enrollments of the selected course.
        """
        instructor_id = _positive_int(request.query_params.get('instructorID'))
        course_id = _positive_int(request.query_params.get('courseID'))

        instructors = Instructor.objects.select_related('office_assignment').prefetch_related('courses')

        courses = []
        if instructor_id:
            courses = (
                Course.objects
                .filter(instructors__id=instructor_id)
                .select_related('department')
                .prefetch_related('instructors')
            )

        enrollments = []
        if course_id:
            enrollments = (
                Enrollment.objects
                .filter(course_id=course_id)
                .select_related('student', 'course')
            )

        return Response({
            'instructors': InstructorSerializer(instructors, many=True).data,
            'courses': CourseSerializer(courses, many=True).data,
            'enrollments': EnrollmentSerializer(enrollments, many=True).data,
        })

