import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from api.models import Account

PASSWORD = 'P@ssw0rd1'


@pytest.fixture(autouse=True)
def _clear_cache():
    # OTP entries and throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_account(db):
    counter = {'n': 0}

    def _make(role=Account.ROLE_PET_PARENT, email=None, password=PASSWORD, **extra):
        counter['n'] += 1
        email = email or f'user{counter["n"]}@example.com'
        extra.setdefault('name', f'User {counter["n"]}')
        extra.setdefault('phone', f'98765{counter["n"]:05d}')
        return Account.objects.create_user(
            username=Account.generate_username(), email=email, password=password, role=role, **extra,
        )

    return _make


@pytest.fixture
def auth_client():
    def _client(account):
        c = APIClient()
        c.force_authenticate(user=account)
        return c

    return _client


@pytest.fixture
def parent(make_account):
    return make_account(Account.ROLE_PET_PARENT)


@pytest.fixture
def admin(make_account):
    return make_account(Account.ROLE_ADMIN, email='admin@example.com')


@pytest.fixture
def admin_client(auth_client, admin):
    return auth_client(admin)
