"""
Domain exceptions and the custom exception handler for Django REST Framework.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError as DRFValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AuthenticationError(NotAuthenticated):
    """No session or an invalid one."""
    default_detail = 'Authentication credentials were not provided.'
    default_code = 'not_authenticated'


class AuthorizationError(PermissionDenied):
    """Authenticated, but not allowed to act on the resource."""
    default_detail = 'You are not allowed to perform this action.'
    default_code = 'forbidden'


class NotFoundError(NotFound):
    default_detail = 'The requested resource was not found.'
    default_code = 'not_found'


class ValidationError(DRFValidationError):
    """Malformed input or an invalid state transition."""
    default_code = 'validation_error'


class ConflictError(APIException):
    """
    The request clashes with current state: a duplicate join request,
    a trip that is not open, an existing participant.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request conflicts with the current state.'
    default_code = 'conflict'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent JSON error responses.

    Response format:
    {
        "success": false,
        "error": {
            "code": "error_code",
            "message": "Human-readable message",
            "details": { ... }  // optional, for field-level validation errors
        }
    }
    """
    # Convert Django ValidationError to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.message_dict if hasattr(exc, 'message_dict') else exc.messages)

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is None:
        # Unhandled exception
        logger.exception(
            'Unhandled exception in %s',
            context.get('view', 'unknown view'),
            exc_info=exc,
        )
        return Response(
            {
                'success': False,
                'error': {
                    'code': 'internal_error',
                    'message': 'An unexpected error occurred. Please try again later.',
                },
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response.data = {
        'success': False,
        'error': _format_error(exc, response),
    }
    return response


def _format_error(exc, response):
    """Format the error payload based on exception type."""
    if isinstance(exc, DRFValidationError):
        details = response.data
        # A bare message (state transition, blank field) reads better flat
        if isinstance(details, list) and len(details) == 1:
            return {
                'code': 'validation_error',
                'message': str(details[0]),
            }
        return {
            'code': 'validation_error',
            'message': 'Invalid input.',
            'details': details,
        }

    if isinstance(exc, Http404):
        return {
            'code': 'not_found',
            'message': 'The requested resource was not found.',
        }

    if isinstance(exc, APIException):
        return {
            'code': getattr(exc.detail, 'code', None) or exc.default_code,
            'message': str(exc.detail),
        }

    return {
        'code': 'error',
        'message': 'An error occurred.',
    }
