import datetime
import re

from django.core.validators import RegexValidator
from rest_framework import serializers

from .models import Student

person_name_validator = RegexValidator(
    regex=r"^[a-zA-Z\s\-'\.]+$",
    message='contains invalid characters'
)

SORT_FIELDS = {
    'name': 'last_name',
    'LastName': 'last_name',
    'date': 'enrollment_date',
    'EnrollmentDate': 'enrollment_date',
}


def validate_enrollment_date(value):
    today = datetime.date.today()
    try:
        latest = today.replace(year=today.year + 10)
    except ValueError:
        # 29 February
        latest = today.replace(year=today.year + 10, day=28)
    if value < datetime.date(1900, 1, 1) or value > latest:
        raise serializers.ValidationError('EnrollmentDate must be between 1900 and 10 years in the future')


class StudentSerializer(serializers.ModelSerializer):
    ID = serializers.IntegerField(source='id', read_only=True)
    LastName = serializers.CharField(
        source='last_name', min_length=1, max_length=50, trim_whitespace=True,
        validators=[person_name_validator]
    )
    FirstMidName = serializers.CharField(
        source='first_mid_name', min_length=1, max_length=50, trim_whitespace=True,
        validators=[person_name_validator]
    )
    EnrollmentDate = serializers.DateField(source='enrollment_date', validators=[validate_enrollment_date])
    FullName = serializers.CharField(source='full_name', read_only=True)

    class Meta:
        model = Student
        fields = ['ID', 'LastName', 'FirstMidName', 'EnrollmentDate', 'FullName']


class StudentDetailSerializer(StudentSerializer):
    enrollments = serializers.SerializerMethodField()

    class Meta(StudentSerializer.Meta):
        fields = StudentSerializer.Meta.fields + ['enrollments']

    def get_enrollments(self, obj):
        from enrollment.serializers import EnrollmentSerializer
        enrollments = obj.enrollments.select_related('course')
        return EnrollmentSerializer(enrollments, many=True).data


def sanitize_search(value):
    """Strip quote/comment/script fragments and cap the length."""
    if not value:
        return ''
    cleaned = re.sub(r"[;'\"`\\]", '', value)
    cleaned = cleaned.replace('--', '').replace('/*', '').replace('*/', '')
    cleaned = re.sub(r'</?script>', '', cleaned, flags=re.IGNORECASE)
    return cleaned[:100].strip()


class StudentListQuerySerializer(serializers.Serializer):
    """Query string for the paged student listing."""
    page = serializers.IntegerField(min_value=1, max_value=10000, default=1)
    pageSize = serializers.IntegerField(min_value=1, max_value=100, default=10)
    sortBy = serializers.CharField(required=False, allow_blank=True, default='')
    sortOrder = serializers.CharField(required=False, allow_blank=True, default='asc')
    search = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=True)

    def validate_sortBy(self, value):
        # Unknown sort keys fall back to last name
        return SORT_FIELDS.get(value, 'last_name')

    def validate_sortOrder(self, value):
        return 'desc' if value == 'desc' else 'asc'

    def validate_search(self, value):
        return sanitize_search(value)
