from django import forms
from django.contrib import admin, messages
from django.http import HttpResponseRedirect

from .exceptions import DepartmentMutationError
from .models import Department, DepartmentAuditLog
from .services import DepartmentService


class DepartmentAdminForm(forms.ModelForm):
    # Version the editor loaded; posted back unchanged so a stale form is caught
    expected_version = forms.IntegerField(widget=forms.HiddenInput, min_value=1, required=False)

    class Meta:
        model = Department
        fields = ['name', 'budget', 'start_date', 'administrator']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields['expected_version'].initial = self.instance.version
            self.fields['expected_version'].required = True

    def clean(self):
        cleaned_data = super().clean()
        expected_version = cleaned_data.get('expected_version')
        if self.instance.pk and expected_version is not None:
            current = (
                Department.objects.filter(pk=self.instance.pk)
                .values_list('version', flat=True).first()
            )
            if current is not None and current != expected_version:
                raise forms.ValidationError(
                    f"Department has been modified by another user. Expected version {expected_version}, "
                    f"but current version is {current}. Reload the page to edit the current values."
                )
        return cleaned_data


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    form = DepartmentAdminForm
    list_display = ['name', 'budget', 'start_date', 'administrator', 'version']
    search_fields = ['name']
    raw_id_fields = ['administrator']
    readonly_fields = ['version']

    def save_model(self, request, obj, form, change):
        if not change:
            obj.version = 1
            return super().save_model(request, obj, form, change)

        # Same version check as the API; the form's version was read when the page loaded
        outcome = DepartmentService().update_department(obj.pk, form.cleaned_data['expected_version'], {
            'name': obj.name,
            'budget': obj.budget,
            'start_date': obj.start_date,
            'administrator': obj.administrator,
        })
        request.department_outcome = outcome
        if outcome.ok:
            obj.version = outcome.department.version
        else:
            messages.error(request, self._failure_message(obj.pk, outcome))

    def log_change(self, request, obj, message):
        if self._failed(request):
            return None
        return super().log_change(request, obj, message)

    def response_change(self, request, obj):
        # A write lost between clean() and save_model(): back to the form, no success message
        if self._failed(request):
            return HttpResponseRedirect(request.path)
        return super().response_change(request, obj)

    def delete_model(self, request, obj):
        outcome = DepartmentService().delete_department(obj.pk)
        request.department_outcome = outcome
        if not outcome.ok:
            messages.error(request, self._failure_message(obj.pk, outcome))

    def delete_queryset(self, request, queryset):
        service = DepartmentService()
        for department_id in list(queryset.values_list('pk', flat=True)):
            outcome = service.delete_department(department_id)
            if not outcome.ok:
                messages.error(request, self._failure_message(department_id, outcome))

    def response_delete(self, request, obj_display, obj_id):
        if self._failed(request):
            return HttpResponseRedirect(request.path.rsplit('delete/', 1)[0])
        return super().response_delete(request, obj_display, obj_id)

    def _failed(self, request):
        outcome = getattr(request, 'department_outcome', None)
        return outcome is not None and not outcome.ok

    def _failure_message(self, department_id, outcome):
        try:
            outcome.unwrap()
        except DepartmentMutationError as e:
            return f"Department {department_id}: {e.message}"
        return f"Department {department_id} was not changed"


@admin.register(DepartmentAuditLog)
class DepartmentAuditLogAdmin(admin.ModelAdmin):
    list_display = ['department_id', 'action', 'version', 'changed_at']
    list_filter = ['action', 'changed_at']
    search_fields = ['department_id']
    readonly_fields = ['department_id', 'action', 'version', 'snapshot', 'changed_at']
