from django.contrib import admin
from .models import Course


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'credits', 'department']
    list_filter = ['department']
    search_fields = ['id', 'title']
    filter_horizontal = ['instructors']
