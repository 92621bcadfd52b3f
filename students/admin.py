from django.contrib import admin
from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['last_name', 'first_mid_name', 'enrollment_date']
    search_fields = ['last_name', 'first_mid_name']
    list_filter = ['enrollment_date']
