import datetime

from django.db import IntegrityError
from django.test import TestCase

from courses.models import Course
from departments.models import Department
from students.models import Student
from .models import Enrollment


class EnrollmentTests(TestCase):
    """Test cases for enrollments"""

    def setUp(self):
        """Set up test data"""
        department = Department.objects.create(name='Economics', budget=1, start_date=datetime.date(2007, 9, 1))
        self.micro = Course.objects.create(id=4022, title='Microeconomics', credits=3, department=department)
        self.macro = Course.objects.create(id=4041, title='Macroeconomics', credits=3, department=department)
        self.alexander = Student.objects.create(
            last_name='Alexander', first_mid_name='Carson', enrollment_date=datetime.date(2016, 9, 1)
        )
        self.anand = Student.objects.create(
            last_name='Anand', first_mid_name='Arturo', enrollment_date=datetime.date(2019, 9, 1)
        )
        Enrollment.objects.create(course=self.micro, student=self.alexander, grade=Enrollment.Grade.C)
        Enrollment.objects.create(course=self.macro, student=self.alexander, grade=Enrollment.Grade.B)
        Enrollment.objects.create(course=self.micro, student=self.anand)

    def test_list_enrollments(self):
        response = self.client.get('/api/enrollments/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 3)
        first = response.json()[0]
        self.assertEqual(first['CourseID'], 4022)
        self.assertEqual(first['Grade'], 2)
        self.assertEqual(first['GradeLetter'], 'C')

    def test_filter_by_course_and_student(self):
        response = self.client.get('/api/enrollments/', {'course': 4022})
        self.assertEqual(len(response.json()), 2)

        response = self.client.get('/api/enrollments/', {'student': self.alexander.id})
        self.assertEqual({e['CourseID'] for e in response.json()}, {4022, 4041})

    def test_ungraded_enrollment(self):
        response = self.client.get('/api/enrollments/', {'student': self.anand.id})

        enrollment = response.json()[0]
        self.assertIsNone(enrollment['Grade'])
        self.assertIsNone(enrollment['GradeLetter'])

    def test_enrollments_are_read_only(self):
        response = self.client.post('/api/enrollments/', {}, content_type='application/json')
        self.assertEqual(response.status_code, 405)

    def test_student_enrolls_once_per_course(self):
        with self.assertRaises(IntegrityError):
            Enrollment.objects.create(course=self.micro, student=self.alexander)

    def test_deleting_student_removes_enrollments(self):
        self.alexander.delete()
        self.assertEqual(Enrollment.objects.count(), 1)
