import datetime

from django.test import TestCase

from courses.models import Course
from departments.models import Department
from enrollment.models import Enrollment
from .models import Student
from .serializers import sanitize_search


class StudentListTests(TestCase):
    """Test cases for the paged student listing"""

    def setUp(self):
        """Set up test data"""
        for last, first, day in [
            ('Alexander', 'Carson', '2016-09-01'),
            ('Alonso', 'Meredith', '2018-09-01'),
            ('Anand', 'Arturo', '2019-09-01'),
            ('Barzdukas', 'Gytis', '2018-09-01'),
            ('Li', 'Yan', '2018-09-01'),
            ('Justice', 'Peggy', '2017-09-01'),
            ('Norman', 'Laura', '2019-09-01'),
            ('Olivetto', 'Nino', '2011-09-01'),
        ]:
            Student.objects.create(
                last_name=last, first_mid_name=first, enrollment_date=datetime.date.fromisoformat(day)
            )

    def test_default_page(self):
        """Test defaults: first page of 10 sorted by last name"""
        response = self.client.get('/api/students/')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['total'], 8)
        self.assertEqual(body['page'], 1)
        self.assertEqual(body['pageSize'], 10)
        self.assertEqual(body['data'][0]['LastName'], 'Alexander')
        self.assertEqual(body['data'][-1]['LastName'], 'Olivetto')

    def test_paging(self):
        response = self.client.get('/api/students/', {'page': 2, 'pageSize': 3})

        body = response.json()
        self.assertEqual(body['total'], 8)
        self.assertEqual([s['LastName'] for s in body['data']], ['Barzdukas', 'Justice', 'Li'])

    def test_page_past_end_is_empty(self):
        response = self.client.get('/api/students/', {'page': 50})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data'], [])
        self.assertEqual(response.json()['total'], 8)

    def test_sort_by_date_desc(self):
        response = self.client.get('/api/students/', {'sortBy': 'date', 'sortOrder': 'desc', 'pageSize': 2})

        dates = [s['EnrollmentDate'] for s in response.json()['data']]
        self.assertEqual(dates, ['2019-09-01', '2019-09-01'])

    def test_search(self):
        """Test that search matches last or first name, case-insensitively"""
        response = self.client.get('/api/students/', {'search': 'AL'})

        names = {s['LastName'] for s in response.json()['data']}
        self.assertEqual(names, {'Alexander', 'Alonso'})

        response = self.client.get('/api/students/', {'search': 'yan'})
        self.assertEqual([s['LastName'] for s in response.json()['data']], ['Li'])

    def test_invalid_paging_rejected(self):
        for params in [{'page': 0}, {'pageSize': 101}, {'page': 'x'}]:
            with self.subTest(params=params):
                self.assertEqual(self.client.get('/api/students/', params).status_code, 400)

    def test_sanitize_search(self):
        self.assertEqual(sanitize_search("Li'; DROP TABLE--"), 'Li DROP TABLE')
        self.assertEqual(sanitize_search('<script>Anand</script>'), 'Anand')
        self.assertEqual(len(sanitize_search('a' * 500)), 100)
        self.assertEqual(sanitize_search(None), '')


class StudentCRUDTests(TestCase):

    def test_create_update_delete(self):
        response = self.client.post('/api/students/', {
            'LastName': 'Norman',
            'FirstMidName': 'Laura',
            'EnrollmentDate': '2019-09-01',
        }, content_type='application/json')
        self.assertEqual(response.status_code, 201)
        student_id = response.json()['ID']
        self.assertEqual(response.json()['FullName'], 'Norman, Laura')

        response = self.client.patch(
            f'/api/students/{student_id}/', {'FirstMidName': 'Laurel'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['FirstMidName'], 'Laurel')

        response = self.client.delete(f'/api/students/{student_id}/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': 'Student deleted successfully'})
        self.assertFalse(Student.objects.filter(pk=student_id).exists())

    def test_invalid_student_rejected(self):
        for body in [
            {'LastName': 'N0rman', 'FirstMidName': 'Laura', 'EnrollmentDate': '2019-09-01'},
            {'LastName': 'Norman', 'FirstMidName': '', 'EnrollmentDate': '2019-09-01'},
            {'LastName': 'Norman', 'FirstMidName': 'Laura', 'EnrollmentDate': '1850-01-01'},
        ]:
            with self.subTest(body=body):
                response = self.client.post('/api/students/', body, content_type='application/json')
                self.assertEqual(response.status_code, 400)

    def test_detail_includes_enrollments(self):
        department = Department.objects.create(name='Economics', budget=1, start_date=datetime.date(2007, 9, 1))
        course = Course.objects.create(id=4022, title='Microeconomics', credits=3, department=department)
        student = Student.objects.create(
            last_name='Alexander', first_mid_name='Carson', enrollment_date=datetime.date(2016, 9, 1)
        )
        Enrollment.objects.create(student=student, course=course, grade=Enrollment.Grade.C)

        response = self.client.get(f'/api/students/{student.id}/')

        self.assertEqual(response.status_code, 200)
        enrollment = response.json()['enrollments'][0]
        self.assertEqual(enrollment['course']['Title'], 'Microeconomics')
        self.assertEqual(enrollment['GradeLetter'], 'C')
