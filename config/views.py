from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

# Service error kind -> HTTP status
ERROR_KIND_STATUS = {
    'invalid-argument': status.HTTP_400_BAD_REQUEST,
    'permission-denied': status.HTTP_403_FORBIDDEN,
    'not-found': status.HTTP_404_NOT_FOUND,
    'already-exists': status.HTTP_409_CONFLICT,
    'failed-precondition': status.HTTP_412_PRECONDITION_FAILED,
    'internal': status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def service_error_response(exc, details=None):
    """
    Build the JSON error envelope for a domain exception.

    The exception's ``kind`` picks the status code. Internal errors keep
    their message generic; the cause is logged where it was raised.
    """
    kind = getattr(exc, 'kind', 'internal')
    error = {
        'kind': kind,
        'message': str(exc) or 'An unexpected error occurred',
    }
    if details:
        error['details'] = details
    return Response(
        {'error': error},
        status=ERROR_KIND_STATUS.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def health_check(request):
    """Liveness probe."""
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
