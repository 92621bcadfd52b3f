from django.core.validators import RegexValidator
from rest_framework import serializers

from departments.models import Department
from departments.serializers import DepartmentSummarySerializer
from instructors.serializers import InstructorSummarySerializer
from .models import Course

course_title_validator = RegexValidator(
    regex=r"^[a-zA-Z0-9\s\-'\.,:&()]+$",
    message='Title contains invalid characters'
)


class CourseSerializer(serializers.ModelSerializer):
    CourseID = serializers.IntegerField(source='id', min_value=1, max_value=99999)
    Title = serializers.CharField(
        source='title', min_length=1, max_length=100, trim_whitespace=True,
        validators=[course_title_validator]
    )
    Credits = serializers.IntegerField(source='credits', min_value=0, max_value=5)
    DepartmentID = serializers.PrimaryKeyRelatedField(
        source='department', queryset=Department.objects.all()
    )
    department = DepartmentSummarySerializer(read_only=True)
    instructors = InstructorSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Course
        fields = ['CourseID', 'Title', 'Credits', 'DepartmentID', 'department', 'instructors']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # CourseID is the identity; it is only accepted when the course is created
        if isinstance(self.instance, Course):
            self.fields['CourseID'].read_only = True

    def validate_CourseID(self, value):
        if Course.objects.filter(pk=value).exists():
            raise serializers.ValidationError(f"Course with ID {value} already exists")
        return value


class InstructorAssignmentSerializer(serializers.Serializer):
    instructorId = serializers.IntegerField(min_value=1)
