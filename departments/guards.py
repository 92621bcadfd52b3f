import logging

from django.db import IntegrityError
from django.db.models import ProtectedError

from .outcomes import Updated, Deleted, NotFound, Conflict, Blocked

logger = logging.getLogger(__name__)


class ConcurrencyGuard:
    """
    Optimistic concurrency for department updates.

    No row is held between read and write: the version check and the write are
    one conditional UPDATE, so of several callers submitting the same version
    exactly one matches and every other one sees Conflict.
    """

    def __init__(self, store):
        self.store = store

    def update(self, department_id, expected_version, fields):
        with self.store.atomic():
            if self.store.compare_and_set(department_id, expected_version, fields):
                # Our UPDATE still holds the row, so this read is exactly what we wrote
                department = self.store.get(department_id)
                logger.info(
                    f"Updated department {department_id} from version {expected_version} to {department.version}"
                )
                return Updated(department)

        # Nothing written: either the row is gone or someone else got there first
        current = self.store.get(department_id)
        if current is None:
            return NotFound(department_id)

        logger.warning(
            f"Version conflict on department {department_id}: "
            f"submitted {expected_version}, current {current.version}"
        )
        return Conflict(expected_version, current)


class DeletionGuard:
    """
    Refuses to delete a department that still has courses.

    The dependency count and the delete run in one transaction with the
    department row locked, and the Course foreign key is PROTECT, so a course
    inserted concurrently either waits for us or makes the delete fail; both
    paths end in Blocked, never in a cascade.
    """

    def __init__(self, store):
        self.store = store

    def delete(self, department_id):
        try:
            with self.store.atomic():
                department = self.store.lock(department_id)
                if department is None:
                    return NotFound(department_id)

                dependents = self.store.count_dependents(department_id)
                if dependents:
                    logger.warning(
                        f"Refused to delete department {department_id}: {dependents} course(s) still reference it"
                    )
                    return Blocked(department_id, dependents)

                self.store.delete(department)
        except ProtectedError as e:
            logger.warning(f"Delete of department {department_id} hit protected courses")
            return Blocked(department_id, len(e.protected_objects))
        except IntegrityError as e:
            logger.warning(f"Delete of department {department_id} violated a foreign key: {e}")
            return Blocked(department_id, self.store.count_dependents(department_id))

        logger.info(f"Deleted department {department_id} at version {department.version}")
        return Deleted(department_id, department)
