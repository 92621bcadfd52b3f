from django.contrib import admin
from .models import Instructor, OfficeAssignment


class OfficeAssignmentInline(admin.StackedInline):
    model = OfficeAssignment
    can_delete = True


@admin.register(Instructor)
class InstructorAdmin(admin.ModelAdmin):
    list_display = ['last_name', 'first_mid_name', 'hire_date']
    search_fields = ['last_name', 'first_mid_name']
    inlines = [OfficeAssignmentInline]
