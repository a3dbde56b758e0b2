"""
API error envelope.

Every error leaves the API as ``{"ok": false, "error": {"code", "message"}}``
so the registration desk front end can show ``message`` directly.  Field
validation errors keep their per-field dict as ``message``.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def _error(code, message, status, headers=None):
    return Response({'ok': False, 'error': {'code': code, 'message': message}}, status=status, headers=headers)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        # raised by model or password validation below the serializers
        exc = exceptions.ValidationError(exc.message_dict if hasattr(exc, 'error_dict') else exc.messages)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('unhandled error in %s', view.__class__.__name__ if view else 'API view')
        return _error('server_error', 'Internal server error', 500)

    if isinstance(resp.data, dict) and set(resp.data) == {'detail'}:
        message = resp.data['detail']
    else:
        message = resp.data
    code = getattr(exc, 'default_code', None) or 'api_error'
    if resp.status_code >= 500:
        logger.error('API error %s: %s', resp.status_code, message)
    # keep WWW-Authenticate and Retry-After
    headers = {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
    return _error(code, message, resp.status_code, headers)
