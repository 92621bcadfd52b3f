from django.contrib import admin
from .models import Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ['student', 'course', 'grade']
    list_filter = ['grade', 'course__department']
    search_fields = ['student__last_name', 'student__first_mid_name', 'course__title']
    raw_id_fields = ['student', 'course']
