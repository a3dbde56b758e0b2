"""
Photo storage for registrations.

Photos go through Django's default storage so the backend can be swapped
(local filesystem in development, an object store in deployment) without
touching the callers.  Only the stored name is kept on the
:class:`~registry.models.Registration`; URLs are derived on demand.
"""
from __future__ import annotations

import logging
import os
import secrets
import time

from django.conf import settings
from django.core.files.storage import default_storage
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _photo_name(filename: str) -> str:
    ext = os.path.splitext(filename or '')[1].lower() or '.jpg'
    return f"{settings.PHOTO_UPLOAD_DIR}/{int(time.time() * 1000)}-{secrets.token_hex(5)}{ext}"


def validate_photo(upload) -> None:
    content_type = getattr(upload, 'content_type', '') or ''
    if not any(content_type.startswith(t.strip()) for t in settings.ALLOWED_UPLOAD_TYPES if t.strip()):
        raise ValidationError({'image': f'unsupported file type: {content_type or "unknown"}'})
    if upload.size > settings.UPLOAD_MAX_MB * 1024 * 1024:
        raise ValidationError({'image': f'file larger than {settings.UPLOAD_MAX_MB} MB'})


def upload_photo(upload) -> tuple[str, str]:
    """Store an uploaded photo and return ``(name, public_url)``."""
    validate_photo(upload)
    name = default_storage.save(_photo_name(upload.name), upload)
    logger.info('stored photo %s (%d bytes)', name, upload.size)
    return name, default_storage.url(name)


def delete_photo(name: str | None) -> bool:
    if not name:
        return False
    if not default_storage.exists(name):
        logger.warning('photo %s already gone', name)
        return False
    default_storage.delete(name)
    logger.info('deleted photo %s', name)
    return True


def photo_url(name: str | None, request=None) -> str | None:
    if not name:
        return None
    url = default_storage.url(name)
    if request is not None:
        return request.build_absolute_uri(url)
    return url
