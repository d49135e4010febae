import logging
import smtplib

from django.conf import settings
from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from django.shortcuts import redirect
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common.exceptions import ConflictError, InvalidInputError, NotFoundError
from apps.common.permissions import IsAdminRole, IsInstructor, IsStudent
from apps.common.utils import redis_client

from .models import User
from .serializers import (
    EmailSerializer,
    LoginSerializer,
    ProfileSerializer,
    SignupSerializer,
    UserSerializer,
    VerifyTokenSerializer,
)
from .tokens import RoleRefreshToken, clear_auth_cookies, set_auth_cookies
from .utils import (
    generate_registration_number,
    has_fresh_verification_token,
    hash_token,
    issue_email_verification,
    send_verification_email,
)

logger = logging.getLogger(__name__)

SIGNUP_URN_RETRIES = 4
SIGNUP_URN_ATTEMPTS = 8
RESEND_LIMIT_SECONDS = 30


class RedisKeys:
    """
    Redis 관련 이메일 상수 클래스

    VERIFICATION_RESEND_LIMIT: 인증 메일 재발송 요청을 이미 보낸 이메일 검증 cache
    """

    VERIFICATION_RESEND_LIMIT = "verification_resend_limit_{email}"

    @staticmethod
    def get_verification_resend_limit_key(email):
        return RedisKeys.VERIFICATION_RESEND_LIMIT.format(email=email)


# sqlite: "UNIQUE constraint failed: user.urn", postgres: "user_urn_key" ... "Key (urn)=(...)"
URN_VIOLATION_MARKERS = ("user.urn", "user_urn", "(urn)")


def _is_urn_violation(error):
    message = str(error).lower()
    return any(marker in message for marker in URN_VIOLATION_MARKERS)


# ------------------------------------------------------------------------------
# 회원가입 / 로그인
# ------------------------------------------------------------------------------


class SignUpView(APIView):
    """
    회원가입 API

    1. 이메일 중복이면 409
    2. 등록번호(URN) 생성 후 저장, URN 유니크 제약에 걸리면 새 번호로 최대 4번 재시도
    3. 등록번호와 인증 링크를 메일로 발송 (실패해도 가입은 유지)
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="회원가입",
        description="회원정보를 입력받아 새 사용자를 생성하고 등록번호(URN)를 발급합니다",
        request=SignupSerializer,
        responses={201: UserSerializer, 400: OpenApiResponse(description="필수값 누락"), 409: OpenApiResponse(description="이메일 중복")},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        email = serializer.validated_data["email"]
        role = serializer.validated_data.get("role", User.Role.STUDENT)
        if User.objects.filter(email=email).exists():
            raise ConflictError("User already exists")

        user = None
        urn = generate_registration_number(role)
        for attempt in range(1, SIGNUP_URN_RETRIES + 1):
            try:
                with transaction.atomic():
                    user = serializer.save(urn=urn)
                break
            except IntegrityError as e:
                if not _is_urn_violation(e):
                    # 동시 가입으로 이메일 유니크 제약에 걸린 경우
                    raise ConflictError("User already exists") from e
                logger.warning("URN collision on signup (%s), attempt %s", urn, attempt)
                urn = generate_registration_number(role, attempts=SIGNUP_URN_ATTEMPTS)

        if user is None:
            logger.error("Could not allocate a unique URN for %s", email)
            return Response(
                {"error": "Could not create user. Please try again."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        raw_token = issue_email_verification(user)
        try:
            send_verification_email(user, raw_token, include_urn=True)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Signup email failed for user %s", user.pk, exc_info=e)

        return Response({"ok": True, "user": UserSerializer(user).data}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    로그인 API

    access/refresh 토큰을 httponly 쿠키로 내려준다
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="로그인",
        description="이메일과 비밀번호를 받아 로그인합니다",
        request=LoginSerializer,
        responses={200: UserSerializer, 401: OpenApiResponse(description="잘못된 이메일 또는 비밀번호")},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        email = serializer.validated_data["email"].strip().lower()
        user = authenticate(request, email=email, password=serializer.validated_data["password"])
        if not user:
            return Response({"error": "Invalid email or password"}, status=status.HTTP_401_UNAUTHORIZED)

        refresh = RoleRefreshToken.for_user(user)
        response = Response({"ok": True, "user": UserSerializer(user).data}, status=status.HTTP_200_OK)
        return set_auth_cookies(response, refresh)


class TokenRefreshView(APIView):
    """
    refresh 토큰을 받으면 기존의 refresh token은 blacklist 처리하고
    access와 refresh token을 새로 발급해주는 API
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(summary="토큰 재발급", description="refresh_token 쿠키로 토큰을 재발급합니다", request=None, tags=["Auth"])
    def post(self, request):
        refresh_token = request.COOKIES.get(settings.REFRESH_TOKEN_COOKIE)
        if not refresh_token:
            return Response({"error": "Refresh token not provided"}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            # 기존 리프레쉬 토큰 검증
            old_refresh = RefreshToken(refresh_token)
            user = User.objects.get(id=old_refresh.payload.get("user_id"), is_active=True)
            # 기존 refresh token 블랙리스트 처리
            old_refresh.blacklist()
        except (TokenError, User.DoesNotExist):
            return Response({"error": "Invalid refresh token"}, status=status.HTTP_401_UNAUTHORIZED)

        new_refresh = RoleRefreshToken.for_user(user)
        response = Response({"ok": True}, status=status.HTTP_200_OK)
        return set_auth_cookies(response, new_refresh)


class LogoutView(APIView):
    """
    로그아웃 API
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="로그아웃", description="refresh token을 blacklist에 등록 후 쿠키를 삭제합니다", request=None, tags=["Auth"]
    )
    def post(self, request):
        refresh_token = request.COOKIES.get(settings.REFRESH_TOKEN_COOKIE)
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError:
                # 이미 만료/폐기된 토큰이면 쿠키만 지운다
                logger.info("Logout with an invalid refresh token")

        response = Response({"ok": True}, status=status.HTTP_200_OK)
        return clear_auth_cookies(response)


# ------------------------------------------------------------------------------
# 이메일 인증
# ------------------------------------------------------------------------------


def _verify_email_token(raw_token):
    """토큰 해시로 사용자를 찾아 인증 완료 처리"""
    if not raw_token:
        raise InvalidInputError("Verification token is required")

    user = User.objects.filter(
        email_verification_token_hash=hash_token(raw_token),
        email_verification_expires__gt=timezone.now(),
    ).first()
    if user is None:
        raise InvalidInputError("Invalid or expired verification token")

    user.email_verified = True
    user.email_verification_token_hash = ""
    user.email_verification_expires = None
    user.save(
        update_fields=["email_verified", "email_verification_token_hash", "email_verification_expires", "updated_at"]
    )
    logger.info("Email verified for user %s", user.pk)
    return user


class VerifyEmailView(APIView):
    """
    이메일 인증 확인 API

    GET 은 메일의 링크를 눌렀을 때 인증 후 사이트로 redirect,
    POST 는 프론트에서 토큰을 직접 보낼 때 사용
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="이메일 인증 (링크)",
        parameters=[OpenApiParameter("token", str, OpenApiParameter.QUERY)],
        responses={302: OpenApiResponse(description="인증 후 redirect"), 400: OpenApiResponse(description="잘못된 토큰")},
        tags=["Auth"],
    )
    def get(self, request):
        _verify_email_token(request.query_params.get("token"))
        return redirect(settings.AFTER_VERIFY_URL)

    @extend_schema(summary="이메일 인증", request=VerifyTokenSerializer, tags=["Auth"])
    def post(self, request):
        user = _verify_email_token(request.data.get("token"))
        return Response({"ok": True, "email": user.email}, status=status.HTTP_200_OK)


class ResendVerificationView(APIView):
    """
    인증 메일 재발송 API

    1. 이미 인증된 사용자면 200
    2. 30초 이내 재요청이면 429 (Redis rate limit)
    3. 기존 토큰이 10분 이상 남아 있으면 429
    4. 새 토큰 발급 후 메일 발송
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="인증 메일 재발송",
        request=EmailSerializer,
        responses={
            200: OpenApiResponse(description="발송 완료 또는 이미 인증됨"),
            404: OpenApiResponse(description="존재하지 않는 사용자"),
            429: OpenApiResponse(description="재발송 제한"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        serializer = EmailSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        email = serializer.validated_data["email"].strip().lower()
        user = User.objects.filter(email=email).first()
        if user is None:
            raise NotFoundError("User not found")

        if user.email_verified:
            return Response({"ok": True, "message": "Email already verified"}, status=status.HTTP_200_OK)

        # ttl(Time to Live) = 남은 제한 시간(초)
        remaining_time = redis_client.ttl(RedisKeys.get_verification_resend_limit_key(email))
        if remaining_time and remaining_time > 0:
            return Response(
                {"error": f"Please wait {remaining_time} seconds before requesting another email."},
                status=status.HTTP_429_TOO_MANY_REQUESTS,
            )

        if has_fresh_verification_token(user):
            return Response(
                {"error": "A verification email was sent recently. Please check your inbox."},
                status=status.HTTP_429_TOO_MANY_REQUESTS,
            )

        raw_token = issue_email_verification(user)
        try:
            send_verification_email(user, raw_token)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Verification email failed for user %s", user.pk, exc_info=e)
            return Response(
                {"error": "Could not send verification email"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        # 메일 폭탄 방지 (30초 동안 재요청 불가)
        redis_client.setex(RedisKeys.get_verification_resend_limit_key(email), RESEND_LIMIT_SECONDS, "1")

        return Response({"ok": True, "message": "Verification email sent"}, status=status.HTTP_200_OK)


# ------------------------------------------------------------------------------
# 내 정보 / 프로필
# ------------------------------------------------------------------------------


class MyInfoView(APIView):
    permission_classes = [IsStudent]

    @extend_schema(summary="내 정보 조회", responses=UserSerializer, tags=["Student"])
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data}, status=status.HTTP_200_OK)


class InstructorInfoView(APIView):
    """강사 대시보드용 내 정보 (담당 과정 관리는 아직 없음)"""

    permission_classes = [IsInstructor]

    @extend_schema(summary="강사 내 정보 조회", responses=UserSerializer, tags=["Instructor"])
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data}, status=status.HTTP_200_OK)


class ProfileView(APIView):
    """
    프로필 조회/수정 API

    관리자는 ?email= 로 다른 사용자의 프로필을 조회할 수 있다
    """

    permission_classes = [IsStudent]

    @extend_schema(
        summary="프로필 조회",
        parameters=[OpenApiParameter("email", str, OpenApiParameter.QUERY, required=False)],
        responses=ProfileSerializer,
        tags=["Student"],
    )
    def get(self, request):
        user = request.user
        email = request.query_params.get("email")
        if email and user.role == User.Role.ADMIN:
            user = User.objects.filter(email=email.strip().lower()).first()
            if user is None:
                raise NotFoundError("User not found")

        return Response({"profile": ProfileSerializer(user).data}, status=status.HTTP_200_OK)

    @extend_schema(summary="프로필 수정", request=ProfileSerializer, responses=ProfileSerializer, tags=["Student"])
    def post(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        serializer.save()
        return Response({"ok": True, "profile": serializer.data}, status=status.HTTP_200_OK)


# ------------------------------------------------------------------------------
# 관리자
# ------------------------------------------------------------------------------


class AdminUserListView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(
        summary="사용자 목록",
        parameters=[OpenApiParameter("role", str, OpenApiParameter.QUERY, required=False)],
        responses=UserSerializer(many=True),
        tags=["Admin"],
    )
    def get(self, request):
        users = User.objects.order_by("-created_at", "-id")
        role = request.query_params.get("role")
        if role:
            users = users.filter(role=role)
        return Response({"users": UserSerializer(users, many=True).data}, status=status.HTTP_200_OK)


class AdminUserCountView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(summary="사용자 수", tags=["Admin"])
    def get(self, request):
        return Response({"count": User.objects.count()}, status=status.HTTP_200_OK)
