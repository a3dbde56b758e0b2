from datetime import timedelta

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse
from django.utils import timezone
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from registry.models import AuditEvent, User

pytestmark = pytest.mark.django_db


def test_login_returns_token_and_jwt(admin_user):
    client = APIClient()
    resp = client.post(reverse('login_view'), {'username': 'admin1', 'password': 'P@ssw0rd1'}, format='json')
    assert resp.status_code == 200, resp.data
    assert resp.data['ok'] is True
    assert resp.data['isAdmin'] is True
    assert resp.data['user']['role'] == 'admin'
    assert resp.data['jwt_access'] and resp.data['jwt_refresh']
    assert Token.objects.get(user=admin_user).key == resp.data['token']

    client.credentials(HTTP_AUTHORIZATION=f"Token {resp.data['token']}")
    assert client.get(reverse('registrations')).status_code == 200

    jwt_client = APIClient()
    jwt_client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.data['jwt_access']}")
    assert jwt_client.get(reverse('admin_dashboard')).status_code == 200


def test_login_with_email(admin_user):
    resp = APIClient().post(reverse('login_view'), {'username': 'ADMIN@example.com', 'password': 'P@ssw0rd1'},
                            format='json')
    assert resp.status_code == 200
    assert resp.data['user']['username'] == 'admin1'


def test_login_ignores_requested_role(plain_user):
    resp = APIClient().post(reverse('login_view'), {'username': 'user1', 'password': 'P@ssw0rd1', 'role': 'admin'},
                            format='json')
    assert resp.status_code == 200
    assert resp.data['isAdmin'] is False

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Token {resp.data['token']}")
    assert client.get(reverse('registrations')).status_code == 403


def test_login_failure(plain_user):
    resp = APIClient().post(reverse('login_view'), {'username': 'user1', 'password': 'wrong'}, format='json')
    assert resp.status_code == 400
    assert resp.data['error']['code'] == 'invalid_credentials'
    assert AuditEvent.objects.filter(action='login', detail__result='fail').count() == 1


def test_signup_creates_plain_user():
    resp = APIClient().post(reverse('signup_view'),
                            {'username': 'sevadar', 'email': 'seva@example.com', 'password': 'Kx9!mulberry', 'role': 'admin'},
                            format='json')
    assert resp.status_code == 201, resp.data
    user = User.objects.get(username='sevadar')
    assert user.role == User.ROLE_USER
    assert not user.is_admin
    assert resp.data['isAdmin'] is False


def test_signup_rejects_weak_password_and_duplicates(plain_user):
    client = APIClient()
    resp = client.post(reverse('signup_view'), {'username': 'newbie', 'password': '123'}, format='json')
    assert resp.status_code == 400
    assert 'password' in resp.data['error']['message']

    resp = client.post(reverse('signup_view'), {'username': 'USER1', 'password': 'Kx9!mulberry'}, format='json')
    assert resp.status_code == 400
    assert 'username' in resp.data['error']['message']


def test_session(plain_user):
    client = APIClient()
    assert client.get(reverse('session_view')).status_code in (401, 403)
    client.force_authenticate(user=plain_user)
    resp = client.get(reverse('session_view'))
    assert resp.status_code == 200
    assert resp.data['user']['username'] == 'user1'
    assert resp.data['isAdmin'] is False


def test_refresh_and_logout(admin_user):
    client = APIClient()
    login = client.post(reverse('login_view'), {'username': 'admin1', 'password': 'P@ssw0rd1'}, format='json').data

    resp = client.post(reverse('jwt_refresh_view'), {'refresh': login['jwt_refresh']}, format='json')
    assert resp.status_code == 200
    assert 'jwt_access' in resp.data

    client.credentials(HTTP_AUTHORIZATION=f"Token {login['token']}")
    resp = client.post(reverse('logout_view'), {}, format='json')
    assert resp.status_code == 200
    assert resp.data['blacklisted'] >= 1
    assert not Token.objects.filter(user=admin_user).exists()

    assert client.get(reverse('registrations')).status_code == 401
    resp = APIClient().post(reverse('jwt_refresh_view'), {'refresh': login['jwt_refresh']}, format='json')
    assert resp.status_code == 401


def test_expired_token_is_rejected_and_reissued(admin_user, settings):
    settings.AUTH_TOKEN_TTL_HOURS = 1
    client = APIClient()
    first = client.post(reverse('login_view'), {'username': 'admin1', 'password': 'P@ssw0rd1'}, format='json').data
    Token.objects.filter(key=first['token']).update(created=timezone.now() - timedelta(hours=2))

    client.credentials(HTTP_AUTHORIZATION=f"Token {first['token']}")
    resp = client.get(reverse('registrations'))
    assert resp.status_code == 401
    assert not Token.objects.filter(key=first['token']).exists()

    second = APIClient().post(reverse('login_view'), {'username': 'admin1', 'password': 'P@ssw0rd1'},
                              format='json').data
    assert second['token'] != first['token']
    client.credentials(HTTP_AUTHORIZATION=f"Token {second['token']}")
    assert client.get(reverse('registrations')).status_code == 200


def test_ensure_admin_creates_and_promotes(plain_user):
    call_command('ensure_admin', 'desk', '--password', 'Kx9!mulberry', '--email', 'desk@example.com')
    desk = User.objects.get(username='desk')
    assert desk.is_admin and desk.is_staff
    assert desk.check_password('Kx9!mulberry')

    call_command('ensure_admin', 'user1', '--password', '')
    plain_user.refresh_from_db()
    assert plain_user.is_admin
    assert plain_user.check_password('P@ssw0rd1')

    with pytest.raises(CommandError):
        call_command('ensure_admin', 'nobody', '--password', '')
