from celery import shared_task
import logging

logger = logging.getLogger(__name__)


def department_snapshot(department):
    """JSON-safe copy of the fields a mutation can touch."""
    return {
        'Name': department.name,
        'Budget': str(department.budget),
        'StartDate': department.start_date.isoformat(),
        'InstructorID': department.administrator_id,
        'version': department.version,
    }


@shared_task
def record_department_change(department_id, action, version, snapshot):
    """
    Append a committed department mutation to the audit trail.

    Args:
        department_id (int): The department that changed.
        action (str): 'UPDATED' or 'DELETED'.
        version (int): Version of the row after the change (or at deletion).
        snapshot (dict): Field values produced by department_snapshot().
    """
    from .models import DepartmentAuditLog

    try:
        entry = DepartmentAuditLog.objects.create(
            department_id=department_id,
            action=action,
            version=version,
            snapshot=snapshot,
        )
    except Exception as e:
        logger.error(f"Error recording {action} of department {department_id}: {str(e)}")
        raise

    logger.info(f"Audit: {action} department {department_id} at version {version}")
    return entry.id
