import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from registry.models import User, Registration


@pytest.fixture(autouse=True)
def _isolated(settings, tmp_path):
    # throttling state lives in the cache; photos go to a throwaway MEDIA_ROOT
    cache.clear()
    settings.MEDIA_ROOT = tmp_path / 'media'
    yield
    cache.clear()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin1', password='P@ssw0rd1', role='admin', email='admin@example.com')


@pytest.fixture
def plain_user(db):
    return User.objects.create_user(username='user1', password='P@ssw0rd1')


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def make_registration(db):
    def _make(**overrides):
        data = {
            'name': 'Ram',
            'surname': 'Singh',
            'mobile_number': '9876543210',
            'emergency_contact_number': '9123456789',
            'aadhaar_number': '123456789012',
            'age': 65,
        }
        data.update(overrides)
        return Registration.objects.create(**data)
    return _make
