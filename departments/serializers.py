import datetime
from decimal import Decimal

from django.core.validators import RegexValidator
from rest_framework import serializers

from courses.models import Course
from instructors.models import Instructor
from instructors.serializers import InstructorSummarySerializer
from .models import Department

department_name_validator = RegexValidator(
    regex=r'^[a-zA-Z\s\-&]+$',
    message='Name contains invalid characters'
)


def validate_start_date(value):
    if value < datetime.date(1900, 1, 1) or value > datetime.date.today():
        raise serializers.ValidationError('StartDate must be between 1900 and today')


class DepartmentCourseSerializer(serializers.ModelSerializer):
    CourseID = serializers.IntegerField(source='id', read_only=True)
    Title = serializers.CharField(source='title', read_only=True)
    Credits = serializers.IntegerField(source='credits', read_only=True)
    DepartmentID = serializers.IntegerField(source='department_id', read_only=True)

    class Meta:
        model = Course
        fields = ['CourseID', 'Title', 'Credits', 'DepartmentID']


class DepartmentSummarySerializer(serializers.ModelSerializer):
    DepartmentID = serializers.IntegerField(source='id', read_only=True)
    Name = serializers.CharField(source='name', read_only=True)

    class Meta:
        model = Department
        fields = ['DepartmentID', 'Name']


class DepartmentSerializer(serializers.ModelSerializer):
    DepartmentID = serializers.IntegerField(source='id', read_only=True)
    Name = serializers.CharField(
        source='name', min_length=1, max_length=50, trim_whitespace=True,
        validators=[department_name_validator]
    )
    Budget = serializers.DecimalField(
        source='budget', max_digits=12, decimal_places=2,
        min_value=Decimal('0'), max_value=Decimal('999999999')
    )
    StartDate = serializers.DateField(source='start_date', validators=[validate_start_date])
    InstructorID = serializers.PrimaryKeyRelatedField(
        source='administrator', queryset=Instructor.objects.all(),
        allow_null=True, required=False
    )
    version = serializers.IntegerField(read_only=True)
    administrator = InstructorSummarySerializer(read_only=True)
    courses = DepartmentCourseSerializer(many=True, read_only=True)

    class Meta:
        model = Department
        fields = [
            'DepartmentID', 'Name', 'Budget', 'StartDate', 'InstructorID',
            'version', 'administrator', 'courses'
        ]


class DepartmentUpdateSerializer(DepartmentSerializer):
    """Same fields as DepartmentSerializer, but the observed version is mandatory."""
    version = serializers.IntegerField(min_value=1)

    class Meta(DepartmentSerializer.Meta):
        pass

    def validate(self, attrs):
        # partial=True skips required fields, the version must never be skipped
        if 'version' not in attrs:
            raise serializers.ValidationError({
                'version': ['Version is required for optimistic concurrency']
            })
        return attrs
