from datetime import timedelta
from unittest import mock

import pytest
from django.conf import settings
from django.core import mail
from django.db import IntegrityError
from django.utils import timezone

from apps.users.models import User
from apps.users.utils import hash_token

SIGNUP_URL = "/api/auth/signup"


@pytest.fixture
def signup_payload():
    return {"name": "Asha", "email": "Asha@Example.com", "phone": "9876543210", "password": "Str0ng!pass"}


@pytest.mark.django_db
def test_signup_creates_user_with_urn_and_sends_email(api_client, signup_payload):
    response = api_client.post(SIGNUP_URL, signup_payload, format="json")

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "asha@example.com"
    assert body["user"]["urn"].startswith("STD/")
    assert "password" not in body["user"]

    user = User.objects.get(email="asha@example.com")
    assert user.email_verification_token_hash
    assert len(mail.outbox) == 1
    assert user.urn in mail.outbox[0].body


@pytest.mark.django_db
def test_signup_duplicate_email_conflicts(api_client, signup_payload, create_user):
    create_user(email="asha@example.com")

    response = api_client.post(SIGNUP_URL, signup_payload, format="json")

    assert response.status_code == 409


@pytest.mark.django_db
def test_signup_requires_fields(api_client):
    response = api_client.post(SIGNUP_URL, {"email": "x@example.com"}, format="json")

    assert response.status_code == 400
    assert {"name", "phone", "password"} <= set(response.json())


@pytest.mark.django_db
def test_signup_rejects_admin_role(api_client, signup_payload):
    response = api_client.post(SIGNUP_URL, {**signup_payload, "role": "admin"}, format="json")

    assert response.status_code == 400


@pytest.mark.django_db
def test_signup_retries_on_urn_collision(api_client, signup_payload):
    from apps.users.serializers import SignupSerializer

    original_save = SignupSerializer.save
    calls = {"count": 0}

    def flaky_save(self, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            raise IntegrityError("UNIQUE constraint failed: user.urn")
        return original_save(self, **kwargs)

    with mock.patch.object(SignupSerializer, "save", flaky_save):
        response = api_client.post(SIGNUP_URL, signup_payload, format="json")

    assert response.status_code == 201
    assert calls["count"] == 2


@pytest.mark.django_db
def test_signup_concurrent_email_conflict_is_not_retried(api_client, signup_payload):
    error = IntegrityError(
        'duplicate key value violates unique constraint "user_email_key"\n'
        "DETAIL:  Key (email)=(turner@example.com) already exists."
    )

    with mock.patch("apps.users.serializers.SignupSerializer.save", side_effect=error) as save:
        response = api_client.post(SIGNUP_URL, signup_payload, format="json")

    assert response.status_code == 409
    assert save.call_count == 1


@pytest.mark.django_db
def test_signin_sets_cookies_with_role_claim(api_client, create_user):
    create_user(email="asha@example.com", password="Str0ng!pass")

    response = api_client.post("/api/auth/signin", {"email": "asha@example.com", "password": "Str0ng!pass"}, format="json")

    assert response.status_code == 200
    assert response.cookies[settings.ACCESS_TOKEN_COOKIE]["httponly"]
    assert response.cookies[settings.REFRESH_TOKEN_COOKIE].value

    me = api_client.get("/api/student/me")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "asha@example.com"


@pytest.mark.django_db
def test_signin_invalid_credentials(api_client, create_user):
    create_user(email="asha@example.com", password="Str0ng!pass")

    response = api_client.post("/api/auth/signin", {"email": "asha@example.com", "password": "wrong"}, format="json")

    assert response.status_code == 401


@pytest.mark.django_db
def test_token_refresh_rotates_and_blacklists(student_client):
    old_refresh = student_client.cookies[settings.REFRESH_TOKEN_COOKIE].value

    response = student_client.post("/api/auth/token-refresh")
    assert response.status_code == 200
    assert response.cookies[settings.REFRESH_TOKEN_COOKIE].value != old_refresh

    student_client.cookies[settings.REFRESH_TOKEN_COOKIE] = old_refresh
    assert student_client.post("/api/auth/token-refresh").status_code == 401


@pytest.mark.django_db
def test_logout_clears_cookies(student_client):
    response = student_client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.cookies[settings.ACCESS_TOKEN_COOKIE].value == ""
    assert response.cookies[settings.REFRESH_TOKEN_COOKIE].value == ""


@pytest.mark.django_db
def test_verify_email_with_token(api_client, student):
    student.email_verification_token_hash = hash_token("raw-token")
    student.email_verification_expires = timezone.now() + timedelta(hours=1)
    student.save()

    response = api_client.post("/api/auth/verify", {"token": "raw-token"}, format="json")

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.email_verified
    assert student.email_verification_token_hash == ""
    assert student.email_verification_expires is None


@pytest.mark.django_db
def test_verify_email_link_redirects(api_client, student):
    student.email_verification_token_hash = hash_token("raw-token")
    student.email_verification_expires = timezone.now() + timedelta(hours=1)
    student.save()

    response = api_client.get("/api/auth/verify", {"token": "raw-token"})

    assert response.status_code == 302
    assert response["Location"] == settings.AFTER_VERIFY_URL


@pytest.mark.django_db
def test_verify_email_expired_token(api_client, student):
    student.email_verification_token_hash = hash_token("raw-token")
    student.email_verification_expires = timezone.now() - timedelta(minutes=1)
    student.save()

    response = api_client.post("/api/auth/verify", {"token": "raw-token"}, format="json")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid or expired verification token"}


@pytest.mark.django_db
def test_resend_unknown_user(api_client, fake_redis):
    response = api_client.post("/api/auth/resend-verification", {"email": "nobody@example.com"}, format="json")

    assert response.status_code == 404


@pytest.mark.django_db
def test_resend_already_verified(api_client, fake_redis, create_user):
    create_user(email="done@example.com", email_verified=True)

    response = api_client.post("/api/auth/resend-verification", {"email": "done@example.com"}, format="json")

    assert response.status_code == 200
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_resend_blocked_while_token_fresh(api_client, fake_redis, student):
    student.email_verification_token_hash = hash_token("raw-token")
    student.email_verification_expires = timezone.now() + timedelta(hours=23)
    student.save()

    response = api_client.post("/api/auth/resend-verification", {"email": student.email}, format="json")

    assert response.status_code == 429


@pytest.mark.django_db
def test_resend_blocked_by_rate_limit(api_client, fake_redis, student):
    fake_redis.ttl.return_value = 12

    response = api_client.post("/api/auth/resend-verification", {"email": student.email}, format="json")

    assert response.status_code == 429
    assert "12" in response.json()["error"]


@pytest.mark.django_db
def test_resend_issues_new_token(api_client, fake_redis, student):
    student.email_verification_token_hash = hash_token("old")
    student.email_verification_expires = timezone.now() + timedelta(minutes=5)
    student.save()

    response = api_client.post("/api/auth/resend-verification", {"email": student.email}, format="json")

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.email_verification_token_hash != hash_token("old")
    assert len(mail.outbox) == 1
    fake_redis.setex.assert_called_once()


@pytest.mark.django_db
def test_student_area_requires_token(api_client):
    response = api_client.get("/api/student/me")

    assert response.status_code == 401


@pytest.mark.django_db
def test_student_area_rejects_instructor(api_client, create_user, login_as):
    instructor = create_user(email="mentor@example.com", role=User.Role.INSTRUCTOR)
    login_as(api_client, instructor)

    response = api_client.get("/api/student/me")

    assert response.status_code == 403


@pytest.mark.django_db
def test_admin_may_enter_student_area(admin_client):
    assert admin_client.get("/api/student/me").status_code == 200


@pytest.mark.django_db
def test_profile_update(student_client, student):
    response = student_client.post(
        "/api/student/profile", {"city": "Pune", "skills": "python, django"}, format="json"
    )

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.city == "Pune"
    assert student.skills == ["python", "django"]


@pytest.mark.django_db
def test_admin_user_list_and_count(admin_client, student):
    users = admin_client.get("/api/admin/users")
    count = admin_client.get("/api/admin/users/count")

    assert users.status_code == 200
    assert {u["email"] for u in users.json()["users"]} == {"admin@example.com", "student@example.com"}
    assert count.json() == {"count": 2}


@pytest.mark.django_db
def test_instructor_area(api_client, create_user, login_as, student):
    instructor = create_user(email="mentor@example.com", role=User.Role.INSTRUCTOR)
    login_as(api_client, instructor)
    assert api_client.get("/api/instructor/me").json()["user"]["role"] == "instructor"

    login_as(api_client, student)
    assert api_client.get("/api/instructor/me").status_code == 403
