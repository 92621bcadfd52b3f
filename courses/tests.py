import datetime

from django.test import TestCase

from departments.models import Department
from enrollment.models import Enrollment
from instructors.models import Instructor
from students.models import Student
from .models import Course


class CourseAPITests(TestCase):
    """Test cases for the courses API"""

    def setUp(self):
        """Set up test data"""
        self.department = Department.objects.create(
            name='Mathematics', budget=100000, start_date=datetime.date(2007, 9, 1)
        )
        self.course = Course.objects.create(id=1045, title='Calculus', credits=4, department=self.department)
        self.instructor = Instructor.objects.create(
            last_name='Fakhouri', first_mid_name='Fadi', hire_date=datetime.date(2002, 7, 6)
        )

    def test_create_course(self):
        """Test that a course is created with the caller's CourseID"""
        response = self.client.post('/api/courses/', {
            'CourseID': 3141,
            'Title': 'Trigonometry',
            'Credits': 4,
            'DepartmentID': self.department.id,
        }, content_type='application/json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['CourseID'], 3141)
        self.assertEqual(response.json()['department']['Name'], 'Mathematics')
        self.assertTrue(Course.objects.filter(pk=3141, department=self.department).exists())

    def test_duplicate_course_id_rejected(self):
        """Test that reusing a CourseID is a validation error"""
        response = self.client.post('/api/courses/', {
            'CourseID': 1045,
            'Title': 'Calculus II',
            'Credits': 4,
            'DepartmentID': self.department.id,
        }, content_type='application/json')

        self.assertEqual(response.status_code, 400)
        self.assertIn('Course with ID 1045 already exists', response.json()['CourseID'])

    def test_invalid_course_rejected(self):
        """Test range checks on CourseID, Credits and DepartmentID"""
        cases = [
            {'CourseID': 0},
            {'CourseID': 100000},
            {'Credits': 6},
            {'Title': ''},
            {'DepartmentID': 9999},
        ]
        for overrides in cases:
            body = {'CourseID': 2000, 'Title': 'Algebra', 'Credits': 3, 'DepartmentID': self.department.id}
            body.update(overrides)
            with self.subTest(overrides=overrides):
                response = self.client.post('/api/courses/', body, content_type='application/json')
                self.assertEqual(response.status_code, 400)

    def test_update_keeps_course_id(self):
        """Test that PUT cannot renumber a course"""
        response = self.client.put('/api/courses/1045/', {
            'CourseID': 9999,
            'Title': 'Calculus I',
            'Credits': 3,
            'DepartmentID': self.department.id,
        }, content_type='application/json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['CourseID'], 1045)
        self.assertEqual(response.json()['Title'], 'Calculus I')
        self.assertFalse(Course.objects.filter(pk=9999).exists())

    def test_delete_course_cascades_enrollments(self):
        """Test that deleting a course removes its enrollments"""
        student = Student.objects.create(
            last_name='Alonso', first_mid_name='Meredith', enrollment_date=datetime.date(2018, 9, 1)
        )
        Enrollment.objects.create(course=self.course, student=student)

        response = self.client.delete('/api/courses/1045/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Course deleted successfully'})
        self.assertFalse(Enrollment.objects.exists())
        self.assertTrue(Student.objects.filter(pk=student.pk).exists())

    def test_missing_course(self):
        self.assertEqual(self.client.get('/api/courses/4242/').status_code, 404)

    def test_assign_and_remove_instructor(self):
        """Test assigning and removing an instructor on a course"""
        url = '/api/courses/1045/instructors/'

        response = self.client.post(url, {'instructorId': self.instructor.id}, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([i['ID'] for i in response.json()['instructors']], [self.instructor.id])

        response = self.client.delete(url, {'instructorId': self.instructor.id}, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['instructors'], [])

    def test_assign_unknown_instructor(self):
        response = self.client.post(
            '/api/courses/1045/instructors/', {'instructorId': 999}, content_type='application/json'
        )

        self.assertEqual(response.status_code, 404)
        self.assertIn('Instructor with ID 999 not found', response.json()['error'])
