import logging

from django.db import transaction

from .guards import ConcurrencyGuard, DeletionGuard
from .models import DepartmentAuditLog
from .store import DepartmentStore
from .tasks import department_snapshot, record_department_change

logger = logging.getLogger(__name__)


class DepartmentService:
    """
    Public entry point for department reads and mutations.

    update_department / delete_department return the guard's outcome as-is.
    Conflict and Blocked are never retried here: both need a new decision
    from the caller (a fresh version, or removing the courses first).
    """

    def __init__(self, store=None):
        self.store = store or DepartmentStore()
        self.concurrency_guard = ConcurrencyGuard(self.store)
        self.deletion_guard = DeletionGuard(self.store)

    def list_departments(self):
        return self.store.all()

    def get_department(self, department_id):
        return self.store.get(department_id)

    def create_department(self, fields):
        department = self.store.insert(fields)
        logger.info(f"Created department {department.pk} ({department.name})")
        return self.store.get(department.pk)

    def update_department(self, department_id, expected_version, fields):
        outcome = self.concurrency_guard.update(department_id, expected_version, fields)
        if outcome.ok:
            self._record(department_id, DepartmentAuditLog.Action.UPDATED, outcome.department)
        return outcome

    def delete_department(self, department_id):
        outcome = self.deletion_guard.delete(department_id)
        if outcome.ok:
            self._record(department_id, DepartmentAuditLog.Action.DELETED, outcome.department)
        return outcome

    def _record(self, department_id, action, department):
        snapshot = department_snapshot(department)
        version = department.version
        # Only audit what actually committed. A broker outage is logged, the mutation already stands.
        transaction.on_commit(
            lambda: record_department_change.delay(department_id, action.value, version, snapshot),
            using=self.store.using,
            robust=True
        )
