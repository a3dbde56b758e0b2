"""
Authentication views.

Sign-in hands out both a DRF token and a simplejwt pair.  Sign-up only
ever creates plain ``user`` accounts; the ``admin`` role that unlocks the
registry has to be granted by an existing administrator.  Kept apart from
``registry.authentication`` so that REST framework can import the
authentication class without importing views.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from registry.serializers.auth import LoginSerializer, SignUpSerializer
from registry.services.audit import log_action

from .authentication import token_expired
from .models import User

logger = logging.getLogger(__name__)


def _user_payload(user: User) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'name': user.get_full_name() or user.username,
        'role': user.role,
    }


def _session_payload(user: User) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    if token_expired(token_obj):
        token_obj.delete()
        token_obj = Token.objects.create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'isAdmin': user.is_admin,
        'user': _user_payload(user),
    }


# ---------------------------------------------------------------------
# Username/password sign-in
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Sign in with username (or e-mail) and password.

    Any ``role`` sent by the client is ignored.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    password = s.validated_data['password']

    if '@' in username:
        match = User.objects.filter(email__iexact=username).first()
        if match:
            username = match.username

    user = authenticate(request, username=username, password=password)
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'ok': False, 'error': {'code': 'invalid_credentials', 'message': 'Invalid username or password'}},
                        status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return Response(_session_payload(user), status=200)

# DRF ScopedRateThrottle reads throttle_scope from the wrapped view class
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def signup_view(request):
    s = SignUpSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = User.objects.create_user(
        username=s.validated_data['username'],
        email=s.validated_data.get('email') or '',
        password=s.validated_data['password'],
        role=User.ROLE_USER,
    )
    log_action(user=user, action='signup', object_type='user', object_id=user.id)
    return Response(_session_payload(user), status=201)

signup_view.cls.throttle_scope = 'login'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def session_view(request):
    """Current user and whether it may use the admin portal."""
    return Response({'ok': True, 'isAdmin': request.user.is_admin, 'user': _user_payload(request.user)})


# ---------------------------------------------------------------------
# JWT refresh & sign-out
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if isinstance(resp, Response):
        data = dict(resp.data)
        if 'access' in data and 'jwt_access' not in data:
            data['jwt_access'] = data.pop('access')
        return Response(data, status=resp.status_code)
    return resp


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Delete the DRF token and blacklist refresh tokens (all or a given one)."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            count = 1
        except TokenError as e:
            logger.info('logout with unusable refresh token: %s', e)
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id,
               detail={'blacklisted': count})
    return Response({'ok': True, 'blacklisted': count})
