from .base import *

DEBUG = False

REFRESH_TOKEN_COOKIE_SECURE = False

ALLOWED_HOSTS = ["*"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

RAZORPAY_KEY_ID = "rzp_test_key"
RAZORPAY_KEY_SECRET = "rzp_test_secret"
RAZORPAY_API_BASE = "https://api.razorpay.test/v1"

AWS_STORAGE_BUCKET_NAME = "test-bucket"
AWS_S3_PUBLIC_URL = "https://cdn.example.test"
