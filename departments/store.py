"""
Storage access for departments and the courses that depend on them.

Every query goes through the database alias the store was built with, so a
caller decides which connection a mutation runs on instead of relying on a
module-level handle. Connections themselves are checked out and released by
Django per request/transaction.
"""
from django.db import DEFAULT_DB_ALIAS, transaction

from courses.models import Course
from .models import Department


class DepartmentStore:

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def atomic(self):
        return transaction.atomic(using=self.using)

    def departments(self):
        return Department.objects.using(self.using)

    def all(self):
        return self.departments().select_related('administrator').prefetch_related('courses')

    def get(self, department_id):
        """Point read. Returns None when the row does not exist."""
        return self.all().filter(pk=department_id).first()

    def insert(self, fields):
        return self.departments().create(version=1, **fields)

    def compare_and_set(self, department_id, expected_version, fields):
        """
        UPDATE ... SET <fields>, version = expected + 1
        WHERE id = <department_id> AND version = <expected_version>

        Returns the number of rows written: 1 when the caller's version was
        still current, 0 otherwise (stale version or missing row).
        """
        return (
            self.departments()
            .filter(pk=department_id, version=expected_version)
            .update(version=expected_version + 1, **fields)
        )

    def lock(self, department_id):
        """
        Row-lock the department until the surrounding transaction ends.
        Course inserts referencing it wait on this lock (FK key-share lock).
        """
        return self.departments().select_for_update().filter(pk=department_id).first()

    def count_dependents(self, department_id):
        return Course.objects.using(self.using).filter(department_id=department_id).count()

    def delete(self, department):
        department.delete(using=self.using)
