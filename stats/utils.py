import logging

import redis
from django.conf import settings
from django.db import connection
from django.db.models import Count
from django.utils import timezone

logger = logging.getLogger(__name__)


def check_database_health():
    """
    Check database connectivity and response time.
    Returns: dict with 'connected' (bool), 'vendor' and 'responseTimeMs' (float)
    """
    try:
        start_time = timezone.now()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        end_time = timezone.now()
        response_time = (end_time - start_time).total_seconds() * 1000
        return {
            'connected': True,
            'vendor': connection.vendor,
            'responseTimeMs': round(response_time, 2),
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            'connected': False,
            'vendor': connection.vendor,
            'responseTimeMs': None,
            'error': str(e),
        }


def check_celery_health():
    """
    Check the Redis broker behind Celery and its default queue depth.
    Returns: dict with 'connected' (bool) and 'queueDepth' (int)
    """
    try:
        r = redis.from_url(settings.CELERY_BROKER_URL, socket_connect_timeout=1)
        r.ping()
        # Default queue is 'celery'
        queue_depth = r.llen('celery')
        return {
            'connected': True,
            'queueDepth': queue_depth,
        }
    except Exception as e:
        logger.warning(f"Task queue health check failed: {e}")
        return {
            'connected': False,
            'queueDepth': None,
            'error': str(e),
        }


def get_enrollment_date_stats():
    """
    Number of students per enrollment date, oldest date first.
    Returns: list of dicts with 'EnrollmentDate' (ISO date) and 'StudentCount'
    """
    from students.models import Student

    groups = (
        Student.objects
        .values('enrollment_date')
        .annotate(student_count=Count('id'))
        .order_by('enrollment_date')
    )

    return [
        {
            'EnrollmentDate': item['enrollment_date'].isoformat(),
            'StudentCount': item['student_count'],
        }
        for item in groups
    ]
