import datetime
from unittest import mock

from django.test import TestCase

from students.models import Student
from .utils import check_database_health, check_celery_health, get_enrollment_date_stats

QUEUE_UP = {'connected': True, 'queueDepth': 0}


class UtilityFunctionsTests(TestCase):
    """Test cases for utility functions"""

    def test_database_health_check(self):
        """Test database health check function"""
        result = check_database_health()
        self.assertTrue(result['connected'])
        self.assertIsNotNone(result['responseTimeMs'])

    @mock.patch('stats.utils.redis.from_url')
    def test_celery_health_check(self, from_url):
        from_url.return_value.llen.return_value = 3

        self.assertEqual(check_celery_health(), {'connected': True, 'queueDepth': 3})

        from_url.return_value.ping.side_effect = ConnectionError('refused')
        result = check_celery_health()
        self.assertFalse(result['connected'])
        self.assertIsNone(result['queueDepth'])

    def test_enrollment_date_stats(self):
        """Test that students are counted per enrollment date, oldest first"""
        for last, day in [('Alonso', '2018-09-01'), ('Li', '2018-09-01'), ('Olivetto', '2011-09-01')]:
            Student.objects.create(
                last_name=last, first_mid_name='X', enrollment_date=datetime.date.fromisoformat(day)
            )

        self.assertEqual(get_enrollment_date_stats(), [
            {'EnrollmentDate': '2011-09-01', 'StudentCount': 1},
            {'EnrollmentDate': '2018-09-01', 'StudentCount': 2},
        ])


class StatsViewTests(TestCase):

    def test_stats_endpoint(self):
        Student.objects.create(last_name='Li', first_mid_name='Yan', enrollment_date=datetime.date(2018, 9, 1))

        response = self.client.get('/api/stats/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [{'EnrollmentDate': '2018-09-01', 'StudentCount': 1}])

    @mock.patch('stats.views.check_celery_health', return_value=QUEUE_UP)
    def test_health_ok(self, _):
        response = self.client.get('/api/health/')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['status'], 'healthy')
        self.assertTrue(body['database']['connected'])
        self.assertEqual(body['taskQueue'], QUEUE_UP)

    @mock.patch('stats.views.check_celery_health', return_value=QUEUE_UP)
    @mock.patch('stats.views.check_database_health', return_value={
        'connected': False, 'vendor': 'sqlite', 'responseTimeMs': None, 'error': 'down'
    })
    def test_health_database_down(self, *_):
        response = self.client.get('/api/health/')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'unhealthy')

    def test_api_index(self):
        response = self.client.get('/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['endpoints']['departments'], '/api/departments/')

    def test_api_root_lists_every_resource(self):
        """Test that /api/ lists all collections and each listed one is reachable"""
        response = self.client.get('/api/')

        self.assertEqual(response.status_code, 200)
        endpoints = response.json()['endpoints']
        for name in ['departments', 'courses', 'students', 'instructors', 'enrollments']:
            with self.subTest(name=name):
                self.assertEqual(self.client.get(endpoints[name]).status_code, 200)
