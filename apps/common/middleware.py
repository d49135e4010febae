import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


class RoleGateMiddleware:
    """역할별 API 영역을 토큰의 role 클레임으로 보호하는 미들웨어.

    토큰이 없거나 유효하지 않으면 401, 역할이 맞지 않으면 403을 돌려준다.
    admin 역할은 모든 영역을 통과한다.
    """

    PROTECTED_AREAS = (
        ("/api/student/", "student"),
        ("/api/instructor/", "instructor"),
        ("/api/admin/", "admin"),
    )

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        required_role = self.required_role(request.path)
        if required_role is None:
            return self.get_response(request)

        payload = self.token_payload(request)
        if payload is None:
            return JsonResponse({"error": "Authentication required"}, status=401)

        role = payload.get("role")
        if role != "admin" and role != required_role:
            logger.info("Role %s denied for %s", role, request.path)
            return JsonResponse({"error": "Forbidden"}, status=403)

        return self.get_response(request)

    def required_role(self, path):
        for prefix, role in self.PROTECTED_AREAS:
            if path.startswith(prefix):
                return role
        return None

    @staticmethod
    def token_payload(request):
        raw_token = request.COOKIES.get(settings.ACCESS_TOKEN_COOKIE)
        if not raw_token:
            header = request.META.get("HTTP_AUTHORIZATION", "")
            if header.startswith("Bearer "):
                raw_token = header[len("Bearer ") :].strip()
        if not raw_token:
            return None

        try:
            return AccessToken(raw_token).payload
        except TokenError:
            return None
