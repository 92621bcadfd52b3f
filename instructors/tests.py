import datetime

from django.test import TestCase

from courses.models import Course
from departments.models import Department
from enrollment.models import Enrollment
from students.models import Student
from .models import Instructor, OfficeAssignment
from .services import sync_office_assignment, sync_course_assignments


class InstructorServiceTests(TestCase):
    """Test cases for office and course assignment sync"""

    def setUp(self):
        self.instructor = Instructor.objects.create(
            last_name='Harui', first_mid_name='Roger', hire_date=datetime.date(1998, 7, 1)
        )
        department = Department.objects.create(name='Engineering', budget=1, start_date=datetime.date(2007, 9, 1))
        self.chemistry = Course.objects.create(id=1050, title='Chemistry', credits=3, department=department)
        self.trig = Course.objects.create(id=3141, title='Trigonometry', credits=4, department=department)
        self.calculus = Course.objects.create(id=1045, title='Calculus', credits=4, department=department)

    def test_office_assignment_created_moved_and_removed(self):
        sync_office_assignment(self.instructor, 'Gowan 27')
        self.assertEqual(OfficeAssignment.objects.get(instructor=self.instructor).location, 'Gowan 27')

        sync_office_assignment(self.instructor, '  Smith 17 ')
        self.assertEqual(OfficeAssignment.objects.get(instructor=self.instructor).location, 'Smith 17')

        sync_office_assignment(self.instructor, '')
        self.assertFalse(OfficeAssignment.objects.filter(instructor=self.instructor).exists())

    def test_course_sync_writes_only_the_difference(self):
        self.instructor.courses.add(self.chemistry, self.trig)

        added, removed = sync_course_assignments(self.instructor, [3141, 1045, 9999])

        self.assertEqual(added, [1045, 9999])
        self.assertEqual(removed, [1050])
        self.assertEqual(
            sorted(self.instructor.courses.values_list('id', flat=True)), [1045, 3141]
        )


class InstructorAPITests(TestCase):

    def setUp(self):
        self.department = Department.objects.create(
            name='Economics', budget=1, start_date=datetime.date(2007, 9, 1)
        )
        self.course = Course.objects.create(id=4022, title='Microeconomics', credits=3, department=self.department)

    def test_create_with_office_and_courses(self):
        response = self.client.post('/api/instructors/', {
            'LastName': 'Zheng',
            'FirstMidName': 'Roger',
            'HireDate': '2004-02-12',
            'OfficeLocation': 'Thompson 304',
            'CourseIDs': [4022],
        }, content_type='application/json')

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['officeAssignment']['Location'], 'Thompson 304')
        self.assertEqual([c['CourseID'] for c in body['courses']], [4022])
        self.assertNotIn('OfficeLocation', body)

    def test_update_clears_office(self):
        instructor = Instructor.objects.create(
            last_name='Kapoor', first_mid_name='Candace', hire_date=datetime.date(2001, 1, 15)
        )
        OfficeAssignment.objects.create(instructor=instructor, location='Thompson 304')

        response = self.client.patch(
            f'/api/instructors/{instructor.id}/', {'OfficeLocation': ''}, content_type='application/json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['officeAssignment'])

    def test_delete_blocked_while_administrator(self):
        """Test that an instructor administering a department cannot be deleted"""
        instructor = Instructor.objects.create(
            last_name='Kapoor', first_mid_name='Candace', hire_date=datetime.date(2001, 1, 15)
        )
        self.department.administrator = instructor
        self.department.save()

        response = self.client.delete(f'/api/instructors/{instructor.id}/')

        self.assertEqual(response.status_code, 400)
        self.assertIn('administrator of Economics department', response.json()['error'])
        self.assertTrue(Instructor.objects.filter(pk=instructor.pk).exists())

    def test_delete_instructor(self):
        instructor = Instructor.objects.create(
            last_name='Zheng', first_mid_name='Roger', hire_date=datetime.date(2004, 2, 12)
        )
        OfficeAssignment.objects.create(instructor=instructor, location='Smith 17')
        self.course.instructors.add(instructor)

        response = self.client.delete(f'/api/instructors/{instructor.id}/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Instructor deleted successfully'})
        self.assertFalse(OfficeAssignment.objects.exists())
        self.assertTrue(Course.objects.filter(pk=4022).exists())

    def test_index_view(self):
        """Test the instructor / course / enrollment index panels"""
        instructor = Instructor.objects.create(
            last_name='Zheng', first_mid_name='Roger', hire_date=datetime.date(2004, 2, 12)
        )
        self.course.instructors.add(instructor)
        student = Student.objects.create(
            last_name='Anand', first_mid_name='Arturo', enrollment_date=datetime.date(2019, 9, 1)
        )
        Enrollment.objects.create(course=self.course, student=student, grade=Enrollment.Grade.B)

        response = self.client.get('/api/instructors/view/')
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(body['instructors']), 1)
        self.assertEqual(body['courses'], [])
        self.assertEqual(body['enrollments'], [])

        response = self.client.get('/api/instructors/view/', {
            'instructorID': instructor.id, 'courseID': 4022
        })
        body = response.json()
        self.assertEqual([c['CourseID'] for c in body['courses']], [4022])
        self.assertEqual(body['enrollments'][0]['student']['LastName'], 'Anand')

    def test_index_view_ignores_bad_ids(self):
        response = self.client.get('/api/instructors/view/', {'instructorID': 'abc', 'courseID': '-3'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['courses'], [])
        self.assertEqual(response.json()['enrollments'], [])
