"""
Token authentication with an expiry.

DRF tokens never expire on their own.  Registry tokens older than
``AUTH_TOKEN_TTL_HOURS`` are rejected and deleted, so a desk laptop left
signed in does not keep access forever; signing in again issues a fresh
token.  Kept apart from the views so REST framework can import it while
loading its settings.
"""
from __future__ import annotations

import datetime
import logging

from django.conf import settings
from django.utils import timezone
from rest_framework import authentication, exceptions

logger = logging.getLogger(__name__)


def token_expired(token) -> bool:
    ttl = getattr(settings, 'AUTH_TOKEN_TTL_HOURS', 0)
    if not ttl:
        return False
    return token.created < timezone.now() - datetime.timedelta(hours=ttl)


class TokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Token <key>``; expired keys are removed on sight."""

    keyword = 'Token'

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        if token_expired(token):
            logger.info('expired token for %s removed', user.username)
            token.delete()
            raise exceptions.AuthenticationFailed('Token has expired.')
        return user, token
