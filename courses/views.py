import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from instructors.models import Instructor
from .models import Course
from .serializers import CourseSerializer, InstructorAssignmentSerializer

logger = logging.getLogger(__name__)


class CourseViewSet(viewsets.ModelViewSet):
    queryset = Course.objects.select_related('department').prefetch_related('instructors')
    serializer_class = CourseSerializer
    lookup_value_regex = r'\d+'

    def destroy(self, request, *args, **kwargs):
        course = self.get_object()
        course_id = course.id
        # Enrollments and instructor assignments go with the course
        course.delete()
        logger.info(f"Deleted course {course_id}")
        return Response({'message': 'Course deleted successfully'})

    @action(detail=True, methods=['post', 'delete'], url_path='instructors')
    def instructors(self, request, pk=None):
        """Assign (POST) or remove (DELETE) one instructor on this course."""
        course = self.get_object()

        serializer = InstructorAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instructor_id = serializer.validated_data['instructorId']

        try:
            instructor = Instructor.objects.get(pk=instructor_id)
        except Instructor.DoesNotExist:
            return Response(
                {'error': f"Instructor with ID {instructor_id} not found"},
                status=status.HTTP_404_NOT_FOUND
            )

        if request.method == 'POST':
            course.instructors.add(instructor)
        else:
            course.instructors.remove(instructor)

        course = self.get_queryset().get(pk=course.pk)
        return Response(CourseSerializer(course).data)
