import hashlib
import logging
import secrets
import string
import time
from datetime import timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.db import DatabaseError
from django.utils import timezone

from apps.common.exceptions import PersistenceError

logger = logging.getLogger(__name__)

URN_ALPHABET = string.ascii_uppercase + string.digits
URN_ATTEMPTS = 6
EMAIL_VERIFICATION_TTL = timedelta(hours=24)
# 기존 토큰의 남은 시간이 이보다 길면 재발송하지 않음
RESEND_BLOCK_WINDOW = timedelta(minutes=10)


def urn_prefix(role):
    return "STD" if role == "student" else "INS"


def build_registration_number(role, year=None):
    """STD/2025/AB12C 형태의 등록번호 후보 생성"""
    year = year or timezone.now().year
    random_part = "".join(secrets.choice(URN_ALPHABET) for _ in range(5))
    return f"{urn_prefix(role)}/{year}/{random_part}"


def generate_registration_number(role, attempts=URN_ATTEMPTS):
    """사용 중이지 않은 등록번호(URN)를 생성.

    attempts 번 안에 빈 번호를 찾지 못하면 마지막 후보 뒤에 현재 타임스탬프(ms)의 끝 4자리를 붙인다.

    Args:
        role (str): 사용자 역할. student 이면 STD, 그 외는 INS 접두사.
        attempts (int): 중복 확인 시도 횟수.

    Returns:
        str: 등록번호.

    Raises:
        PersistenceError: 중복 확인 조회가 실패한 경우.
    """
    from apps.users.models import User

    candidate = None
    try:
        for _ in range(attempts):
            candidate = build_registration_number(role)
            if not User.objects.filter(urn=candidate).exists():
                return candidate
    except DatabaseError as e:
        logger.error("URN lookup failed", exc_info=e)
        raise PersistenceError() from e

    candidate = candidate or build_registration_number(role)
    return f"{candidate}{str(int(time.time() * 1000))[-4:]}"


def hash_token(raw_token):
    return hashlib.sha256(raw_token.encode()).hexdigest()


def issue_email_verification(user):
    """새 인증 토큰을 발급해 해시와 만료시각을 저장하고 원본 토큰을 반환"""
    raw_token = secrets.token_hex(24)
    user.email_verification_token_hash = hash_token(raw_token)
    user.email_verification_expires = timezone.now() + EMAIL_VERIFICATION_TTL
    user.save(update_fields=["email_verification_token_hash", "email_verification_expires", "updated_at"])
    return raw_token


def has_fresh_verification_token(user):
    """현재 토큰이 RESEND_BLOCK_WINDOW 보다 오래 유효하면 True"""
    expires = user.email_verification_expires
    return bool(user.email_verification_token_hash and expires and expires > timezone.now() + RESEND_BLOCK_WINDOW)


def verification_link(raw_token):
    return f"{settings.SITE_URL}/api/auth/verify?token={raw_token}"


def send_verification_email(user, raw_token, include_urn=False):
    """인증 링크(회원가입 시에는 등록번호 포함) 메일 발송"""
    lines = [f"Hi {user.name or 'there'},", ""]
    if include_urn:
        lines += [f"Welcome to {settings.SITE_NAME}! Your registration number (URN) is {user.urn}.", ""]
    lines += [
        "Please verify your email address by opening the link below. The link is valid for 24 hours.",
        verification_link(raw_token),
    ]

    send_mail(
        subject=f"{settings.SITE_NAME} - verify your email",
        message="\n".join(lines),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )
    logger.info("Verification email sent to user %s", user.pk)
