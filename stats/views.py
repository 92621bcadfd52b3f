from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .utils import check_database_health, check_celery_health, get_enrollment_date_stats


@api_view(['GET'])
def enrollment_stats(request):
    """Student enrollment counts grouped by enrollment date."""
    return Response(get_enrollment_date_stats())


@api_view(['GET'])
def health(request):
    """
    Liveness of the API and its database. The task queue is reported but does
    not make the service unhealthy: mutations never wait on it.
    """
    database = check_database_health()
    task_queue = check_celery_health()

    body = {
        'status': 'healthy' if database['connected'] else 'unhealthy',
        'timestamp': timezone.now().isoformat(),
        'database': database,
        'taskQueue': task_queue,
    }
    if not database['connected']:
        return Response(body, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(body)
