import logging

from courses.models import Course
from .models import OfficeAssignment

logger = logging.getLogger(__name__)


def sync_office_assignment(instructor, location):
    """
    Blank location removes the office, anything else creates or moves it.
    """
    location = (location or '').strip()
    if not location:
        OfficeAssignment.objects.filter(instructor=instructor).delete()
        return None

    office, _ = OfficeAssignment.objects.update_or_create(
        instructor=instructor,
        defaults={'location': location}
    )
    return office


def sync_course_assignments(instructor, course_ids):
    """
    Bring the instructor's course set in line with `course_ids`.
    Only the difference is written: new ids are added, deselected ids removed.
    """
    current = set(instructor.courses.values_list('id', flat=True))
    selected = set(course_ids)

    to_add = selected - current
    to_remove = current - selected

    if to_add:
        courses = list(Course.objects.filter(id__in=to_add))
        missing = to_add - {course.id for course in courses}
        if missing:
            logger.warning(f"Ignoring unknown course ids {sorted(missing)} for instructor {instructor.id}")
        instructor.courses.add(*courses)
    if to_remove:
        instructor.courses.remove(*to_remove)

    return sorted(to_add), sorted(to_remove)
