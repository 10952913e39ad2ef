# ==================== UTILS/EXCEPTIONS.PY ====================
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler
from rest_framework import status


class BookingError(APIException):
    """Base for booking engine failures; `kind` is the machine-readable category"""
    kind = 'error'


class BookingValidationError(BookingError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid booking request.'
    default_code = 'validation'
    kind = 'validation'


class ResourceNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'not_found'
    kind = 'not_found'


class BookingForbidden(BookingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You are not allowed to change this booking.'
    default_code = 'forbidden'
    kind = 'forbidden'


class BookingConflict(BookingError):
    """Retryable: re-read current state and try again"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Booking conflicts with existing bookings.'
    default_code = 'conflict'
    kind = 'conflict'


class InvalidTransition(BookingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'This status change is not allowed.'
    default_code = 'invalid_transition'
    kind = 'invalid_transition'


STATUS_KINDS = {
    status.HTTP_401_UNAUTHORIZED: 'unauthenticated',
    status.HTTP_403_FORBIDDEN: 'forbidden',
    status.HTTP_404_NOT_FOUND: 'not_found',
}


def api_exception_handler(exc, context):
    """Render every API failure as {"error": ..., "code": <kind>}"""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, BookingError):
        response.data = {'error': str(exc.detail), 'code': exc.kind}
    elif isinstance(exc, ValidationError):
        response.data = {'error': 'Invalid input.', 'code': 'validation', 'details': response.data}
    else:
        kind = STATUS_KINDS.get(response.status_code) or getattr(exc, 'default_code', 'error')
        detail = response.data.get('detail', '') if isinstance(response.data, dict) else response.data
        response.data = {'error': str(detail), 'code': kind}
    return response
