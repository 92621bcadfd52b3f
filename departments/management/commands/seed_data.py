import datetime

from django.core.management.base import BaseCommand
from django.db import transaction

from courses.models import Course
from departments.models import Department
from enrollment.models import Enrollment
from instructors.models import Instructor, OfficeAssignment
from students.models import Student

STUDENTS = [
    ('Alexander', 'Carson', '2016-09-01'),
    ('Alonso', 'Meredith', '2018-09-01'),
    ('Anand', 'Arturo', '2019-09-01'),
    ('Barzdukas', 'Gytis', '2018-09-01'),
    ('Li', 'Yan', '2018-09-01'),
    ('Justice', 'Peggy', '2017-09-01'),
    ('Norman', 'Laura', '2019-09-01'),
    ('Olivetto', 'Nino', '2011-09-01'),
]

INSTRUCTORS = [
    ('Abercrombie', 'Kim', '1995-03-11'),
    ('Fakhouri', 'Fadi', '2002-07-06'),
    ('Harui', 'Roger', '1998-07-01'),
    ('Kapoor', 'Candace', '2001-01-15'),
    ('Zheng', 'Roger', '2004-02-12'),
]

OFFICES = [
    ('Fakhouri', 'Smith 17'),
    ('Harui', 'Gowan 27'),
    ('Kapoor', 'Thompson 304'),
]

# name, budget, administrator
DEPARTMENTS = [
    ('English', 350000, 'Abercrombie'),
    ('Mathematics', 100000, 'Fakhouri'),
    ('Engineering', 350000, 'Harui'),
    ('Economics', 100000, 'Kapoor'),
]

# id, title, credits, department, instructors
COURSES = [
    (1050, 'Chemistry', 3, 'Engineering', ['Kapoor', 'Harui']),
    (4022, 'Microeconomics', 3, 'Economics', ['Zheng']),
    (4041, 'Macroeconomics', 3, 'Economics', ['Zheng']),
    (1045, 'Calculus', 4, 'Mathematics', ['Fakhouri']),
    (3141, 'Trigonometry', 4, 'Mathematics', ['Harui']),
    (2021, 'Composition', 3, 'English', ['Abercrombie']),
    (2042, 'Literature', 4, 'English', ['Abercrombie']),
]

G = Enrollment.Grade
ENROLLMENTS = [
    ('Alexander', 1050, G.A),
    ('Alexander', 4022, G.C),
    ('Alexander', 4041, G.B),
    ('Alonso', 1045, G.B),
    ('Alonso', 3141, G.B),
    ('Alonso', 2021, G.B),
    ('Anand', 1050, None),
    ('Anand', 4022, G.B),
    ('Barzdukas', 1050, G.B),
    ('Li', 2021, G.B),
    ('Justice', 2042, G.B),
]


def _date(value):
    return datetime.date.fromisoformat(value)


class Command(BaseCommand):
    help = 'Seeds the database with the Contoso University sample data'

    def add_arguments(self, parser):
        parser.add_argument('--flush', action='store_true', help='Delete existing data before seeding')

    def handle(self, *args, **options):
        with transaction.atomic():
            if options['flush']:
                self.flush()
            elif Department.objects.exists():
                self.stdout.write(self.style.WARNING('Data already present, use --flush to reseed.'))
                return
            self.seed()

        self.stdout.write(
            self.style.SUCCESS(
                f'Seeding completed successfully!\n'
                f'  - {len(STUDENTS)} Students\n'
                f'  - {len(INSTRUCTORS)} Instructors\n'
                f'  - {len(OFFICES)} Office Assignments\n'
                f'  - {len(DEPARTMENTS)} Departments\n'
                f'  - {len(COURSES)} Courses\n'
                f'  - {len(ENROLLMENTS)} Enrollments'
            )
        )

    def flush(self):
        # Children first: courses PROTECT their department
        Enrollment.objects.all().delete()
        Course.objects.all().delete()
        Department.objects.all().delete()
        OfficeAssignment.objects.all().delete()
        Instructor.objects.all().delete()
        Student.objects.all().delete()

    def seed(self):
        students = {
            last: Student.objects.create(last_name=last, first_mid_name=first, enrollment_date=_date(day))
            for last, first, day in STUDENTS
        }
        instructors = {
            last: Instructor.objects.create(last_name=last, first_mid_name=first, hire_date=_date(day))
            for last, first, day in INSTRUCTORS
        }
        for last, location in OFFICES:
            OfficeAssignment.objects.create(instructor=instructors[last], location=location)

        departments = {
            name: Department.objects.create(
                name=name,
                budget=budget,
                start_date=_date('2007-09-01'),
                administrator=instructors[admin],
                version=1,
            )
            for name, budget, admin in DEPARTMENTS
        }

        for course_id, title, credits, department, course_instructors in COURSES:
            course = Course.objects.create(
                id=course_id, title=title, credits=credits, department=departments[department]
            )
            course.instructors.set([instructors[last] for last in course_instructors])

        Enrollment.objects.bulk_create([
            Enrollment(student=students[last], course_id=course_id, grade=grade)
            for last, course_id, grade in ENROLLMENTS
        ])
