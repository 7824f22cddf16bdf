"""
Typed API errors and the unified exception handler.

Services raise the classes below; views never build error responses by
hand.  ``api_exception_handler`` is installed as DRF's
``EXCEPTION_HANDLER`` and turns every failure into the common envelope::

    {"success": false, "message": "...", "error": {"code": "...", "message": "..."}}
"""
from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Something went wrong'


class ValidationError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'validation_error'


class AuthenticationError(exceptions.APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication failed.'
    default_code = 'authentication_failed'


class AuthorizationError(exceptions.APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'permission_denied'


class NotFoundError(exceptions.APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class DeliveryError(exceptions.APIException):
    """An outbound provider (SMS, email) could not deliver a message."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Message delivery failed.'
    default_code = 'delivery_failed'


def _first_message(detail) -> str:
    """Flatten DRF error detail (str, list or dict) into one readable line."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for key, value in detail.items():
            msg = _first_message(value)
            return msg if key == 'non_field_errors' else f'{key}: {msg}'
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def _code_for(exc: exceptions.APIException) -> str:
    codes = exc.get_codes()
    if isinstance(codes, str):
        return codes
    return getattr(exc, 'default_code', 'error')


def api_exception_handler(exc, context):
    # rest_framework.views loads the authentication classes, which import this module
    from rest_framework.views import exception_handler as drf_exception_handler

    if isinstance(exc, Http404):
        exc = NotFoundError(str(exc) or None)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = AuthorizationError(str(exc) or None)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request') if context else None
        logger.exception('Unhandled error on %s', getattr(request, 'path', '?'), exc_info=exc)
        return Response(
            {'success': False, 'message': GENERIC_ERROR_MESSAGE,
             'error': {'code': 'server_error', 'message': GENERIC_ERROR_MESSAGE}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message = _first_message(resp.data)
    error = {'code': _code_for(exc), 'message': message}
    if isinstance(resp.data, dict) and set(resp.data) - {'detail'}:
        error['details'] = resp.data
    resp.data = {'success': False, 'message': message, 'error': error}
    return resp
