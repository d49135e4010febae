from django.conf import settings
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken


class RoleRefreshToken(RefreshToken):
    """role, email 클레임을 담는 refresh token (access token 에도 복사됨)"""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token["role"] = user.role
        token["email"] = user.email
        return token


def set_auth_cookies(response, refresh):
    """access/refresh 토큰을 httponly 쿠키로 설정"""
    response.set_cookie(
        settings.ACCESS_TOKEN_COOKIE,
        value=str(refresh.access_token),
        httponly=True,  # JavaScript에서 쿠키 접근을 막음
        secure=settings.REFRESH_TOKEN_COOKIE_SECURE,  # HTTPS 환경에서만 쿠키를 전송(dev[F], prod[T]로 관리)
        samesite="Lax",  # CSRF 공격 방지
        max_age=int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
    )
    response.set_cookie(
        settings.REFRESH_TOKEN_COOKIE,
        value=str(refresh),
        httponly=True,
        secure=settings.REFRESH_TOKEN_COOKIE_SECURE,
        samesite="Lax",
        max_age=int(api_settings.REFRESH_TOKEN_LIFETIME.total_seconds()),
    )
    return response


def clear_auth_cookies(response):
    response.delete_cookie(settings.ACCESS_TOKEN_COOKIE)
    response.delete_cookie(settings.REFRESH_TOKEN_COOKIE)
    return response
