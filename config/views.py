from rest_framework.decorators import api_view
from rest_framework.response import Response


@api_view(['GET'])
def home(request):
    """API index."""
    return Response({
        'message': 'Contoso University API',
        'version': '1.0.0',
        'endpoints': {
            'health': '/api/health/',
            'stats': '/api/stats/',
            'departments': '/api/departments/',
            'courses': '/api/courses/',
            'students': '/api/students/',
            'instructors': '/api/instructors/',
            'enrollments': '/api/enrollments/',
            'docs': '/api/docs/',
        },
    })
