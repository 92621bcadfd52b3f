import re

from django.core.validators import RegexValidator
from django.db import transaction
from rest_framework import serializers

from courses.models import Course
from .models import Instructor, OfficeAssignment
from .services import sync_office_assignment, sync_course_assignments

person_name_validator = RegexValidator(
    regex=re.compile(r"^[a-zA-Z\s\-'\.]+$"),
    message='contains invalid characters'
)


class InstructorSummarySerializer(serializers.ModelSerializer):
    """Flat instructor shape used inside department and course payloads."""
    ID = serializers.IntegerField(source='id', read_only=True)
    LastName = serializers.CharField(source='last_name', read_only=True)
    FirstMidName = serializers.CharField(source='first_mid_name', read_only=True)
    HireDate = serializers.DateField(source='hire_date', read_only=True)
    FullName = serializers.CharField(source='full_name', read_only=True)

    class Meta:
        model = Instructor
        fields = ['ID', 'LastName', 'FirstMidName', 'HireDate', 'FullName']


class OfficeAssignmentSerializer(serializers.ModelSerializer):
    InstructorID = serializers.IntegerField(source='instructor_id', read_only=True)
    Location = serializers.CharField(source='location', read_only=True)

    class Meta:
        model = OfficeAssignment
        fields = ['InstructorID', 'Location']


class AssignedCourseSerializer(serializers.ModelSerializer):
    CourseID = serializers.IntegerField(source='id', read_only=True)
    Title = serializers.CharField(source='title', read_only=True)
    Credits = serializers.IntegerField(source='credits', read_only=True)
    DepartmentID = serializers.IntegerField(source='department_id', read_only=True)

    class Meta:
        model = Course
        fields = ['CourseID', 'Title', 'Credits', 'DepartmentID']


class InstructorSerializer(serializers.ModelSerializer):
    ID = serializers.IntegerField(source='id', read_only=True)
    LastName = serializers.CharField(
        source='last_name', max_length=50, trim_whitespace=True,
        validators=[person_name_validator]
    )
    FirstMidName = serializers.CharField(
        source='first_mid_name', max_length=50, trim_whitespace=True,
        validators=[person_name_validator]
    )
    HireDate = serializers.DateField(source='hire_date')
    FullName = serializers.CharField(source='full_name', read_only=True)
    officeAssignment = serializers.SerializerMethodField()
    courses = AssignedCourseSerializer(many=True, read_only=True)

    # Write-only helpers synced after the instructor row is saved
    OfficeLocation = serializers.CharField(
        max_length=50, required=False, allow_blank=True, allow_null=True, write_only=True
    )
    CourseIDs = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, write_only=True
    )

    class Meta:
        model = Instructor
        fields = [
            'ID', 'LastName', 'FirstMidName', 'HireDate', 'FullName',
            'officeAssignment', 'courses', 'OfficeLocation', 'CourseIDs'
        ]

    def get_officeAssignment(self, obj):
        office = getattr(obj, 'office_assignment', None)
        if office is None:
            return None
        return OfficeAssignmentSerializer(office).data

    def _sync_relations(self, instructor, office_location, course_ids):
        if office_location is not serializers.empty:
            sync_office_assignment(instructor, office_location)
        if course_ids is not serializers.empty:
            sync_course_assignments(instructor, course_ids)

    def create(self, validated_data):
        office_location = validated_data.pop('OfficeLocation', serializers.empty)
        course_ids = validated_data.pop('CourseIDs', serializers.empty)
        with transaction.atomic():
            instructor = Instructor.objects.create(**validated_data)
            self._sync_relations(instructor, office_location, course_ids)
        return Instructor.objects.get(pk=instructor.pk)

    def update(self, instance, validated_data):
        office_location = validated_data.pop('OfficeLocation', serializers.empty)
        course_ids = validated_data.pop('CourseIDs', serializers.empty)
        with transaction.atomic():
            for attr, value in validated_data.items():
                setattr(instance, attr, value)
            instance.save()
            self._sync_relations(instance, office_location, course_ids)
        return Instructor.objects.get(pk=instance.pk)
