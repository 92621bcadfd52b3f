from rest_framework import serializers

from courses.models import Course
from students.models import Student
from .models import Enrollment


class EnrolledCourseSerializer(serializers.ModelSerializer):
    CourseID = serializers.IntegerField(source='id', read_only=True)
    Title = serializers.CharField(source='title', read_only=True)
    Credits = serializers.IntegerField(source='credits', read_only=True)

    class Meta:
        model = Course
        fields = ['CourseID', 'Title', 'Credits']


class EnrolledStudentSerializer(serializers.ModelSerializer):
    ID = serializers.IntegerField(source='id', read_only=True)
    LastName = serializers.CharField(source='last_name', read_only=True)
    FirstMidName = serializers.CharField(source='first_mid_name', read_only=True)
    FullName = serializers.CharField(source='full_name', read_only=True)

    class Meta:
        model = Student
        fields = ['ID', 'LastName', 'FirstMidName', 'FullName']


class EnrollmentSerializer(serializers.ModelSerializer):
    EnrollmentID = serializers.IntegerField(source='id', read_only=True)
    CourseID = serializers.IntegerField(source='course_id', read_only=True)
    StudentID = serializers.IntegerField(source='student_id', read_only=True)
    Grade = serializers.IntegerField(source='grade', read_only=True)
    GradeLetter = serializers.CharField(source='get_grade_display', read_only=True)
    course = EnrolledCourseSerializer(read_only=True)
    student = EnrolledStudentSerializer(read_only=True)

    class Meta:
        model = Enrollment
        fields = ['EnrollmentID', 'CourseID', 'StudentID', 'Grade', 'GradeLetter', 'course', 'student']
