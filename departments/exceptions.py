from rest_framework import status

from .serializers import DepartmentSerializer


class DepartmentMutationError(Exception):
    """Base for failures a department mutation reports back to its caller."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Department mutation failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def payload(self):
        return {'message': self.message}


class NotFoundError(DepartmentMutationError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, department_id):
        self.department_id = department_id
        super().__init__(f"Department with ID {department_id} not found")


class ConcurrencyConflictError(DepartmentMutationError):
    """
    The submitted version is stale. Carries the authoritative current row so
    the caller can show "yours vs. current" and either resubmit with the new
    version or abandon the edit.
    """
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, expected_version, current):
        self.expected_version = expected_version
        self.current = current
        super().__init__(
            f"Department has been modified by another user. Expected version {expected_version}, "
            f"but current version is {current.version}."
        )

    def payload(self):
        return {
            'message': self.message,
            'currentData': DepartmentSerializer(self.current).data,
        }


class DependencyExistsError(DepartmentMutationError):
    default_message = 'cannot delete department with existing courses'

    def __init__(self, department_id, dependent_count):
        self.department_id = department_id
        self.dependent_count = dependent_count
        super().__init__()
