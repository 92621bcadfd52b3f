from django.db import models


class Department(models.Model):
    name = models.CharField(max_length=50, blank=True, null=True)
    budget = models.DecimalField(max_digits=12, decimal_places=2)
    start_date = models.DateField()
    administrator = models.ForeignKey(
        'instructors.Instructor',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='administered_departments'
    )

    # Optimistic lock. Starts at 1 and is only ever bumped by the conditional
    # update in DepartmentStore.compare_and_set.
    version = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} (v{self.version})"


class DepartmentAuditLog(models.Model):
    """
    Append-only trail of committed department mutations.
    Written by the record_department_change task after the mutation commits.
    """
    class Action(models.TextChoices):
        UPDATED = 'UPDATED', 'Updated'
        DELETED = 'DELETED', 'Deleted'

    department_id = models.BigIntegerField(db_index=True)
    action = models.CharField(max_length=10, choices=Action.choices)
    version = models.PositiveIntegerField()
    snapshot = models.JSONField(default=dict)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-changed_at', '-id']
        indexes = [
            models.Index(fields=['department_id', '-changed_at'], name='dept_audit_dept_changed_idx'),
        ]

    def __str__(self):
        return f"{self.action} department {self.department_id} at v{self.version}"
