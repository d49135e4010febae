from datetime import timedelta

from .base import *

DEBUG = True

REFRESH_TOKEN_COOKIE_SECURE = False

ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")  # 허용할 host

SIMPLE_JWT = {
    **SIMPLE_JWT,
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=300),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

# 개발 환경에서는 메일을 콘솔로 출력
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
