from unittest import mock

import pytest
from django.conf import settings
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.users.models import User
from apps.users.tokens import RoleRefreshToken


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def fake_redis():
    """rate limit 용 redis_client 대신 사용하는 mock"""
    fake = mock.MagicMock()
    fake.ttl.return_value = -2
    with mock.patch("apps.users.views.redis_client", fake):
        yield fake


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def create_user(db):
    def _create_user(email="student@example.com", password="Str0ng!pass", role=User.Role.STUDENT, **extra):
        extra.setdefault("name", "Test User")
        extra.setdefault("phone", "9999999999")
        return User.objects.create_user(email=email, password=password, role=role, **extra)

    return _create_user


@pytest.fixture
def student(create_user):
    return create_user()


@pytest.fixture
def admin_user(create_user):
    return create_user(email="admin@example.com", role=User.Role.ADMIN, is_staff=True)


def login(client, user):
    """쿠키에 토큰을 심어서 로그인 상태로 만든다"""
    refresh = RoleRefreshToken.for_user(user)
    client.cookies[settings.ACCESS_TOKEN_COOKIE] = str(refresh.access_token)
    client.cookies[settings.REFRESH_TOKEN_COOKIE] = str(refresh)
    return client


@pytest.fixture
def student_client(api_client, student):
    return login(api_client, student)


@pytest.fixture
def admin_client(api_client, admin_user):
    return login(api_client, admin_user)


@pytest.fixture
def login_as():
    return login
