"""
Tagged results of department mutations.

Guards return one of these instead of raising, the service passes them through
untouched, and the HTTP layer calls unwrap() to get either the entity or the
matching DepartmentMutationError.
"""
from .exceptions import NotFoundError, ConcurrencyConflictError, DependencyExistsError


class Outcome:
    ok = False

    def unwrap(self):
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        fields = ', '.join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


class Updated(Outcome):
    ok = True

    def __init__(self, department):
        self.department = department

    def unwrap(self):
        return self.department


class Deleted(Outcome):
    ok = True

    def __init__(self, department_id, department):
        # department keeps its field values but its pk is cleared by delete()
        self.department_id = department_id
        self.department = department

    def unwrap(self):
        return {'message': 'Department deleted successfully'}


class NotFound(Outcome):

    def __init__(self, department_id):
        self.department_id = department_id

    def unwrap(self):
        raise NotFoundError(self.department_id)


class Conflict(Outcome):

    def __init__(self, expected_version, current):
        self.expected_version = expected_version
        self.current = current

    def unwrap(self):
        raise ConcurrencyConflictError(self.expected_version, self.current)


class Blocked(Outcome):

    def __init__(self, department_id, dependent_count):
        self.department_id = department_id
        self.dependent_count = dependent_count

    def unwrap(self):
        raise DependencyExistsError(self.department_id, self.dependent_count)
