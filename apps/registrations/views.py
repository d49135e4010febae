import logging

from django.db import IntegrityError, transaction
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import ConflictError
from apps.common.permissions import IsAdminRole, IsStudent

from .models import Enrollment
from .serializers import EnrollmentSerializer

logger = logging.getLogger(__name__)

DUPLICATE_ENROLLMENT_MESSAGE = "Already enrolled for this course with this email."


class EnrollmentView(APIView):
    """수강 신청 API.

    POST 는 결제 페이지(체크아웃)에서 누구나 호출할 수 있고, GET 은 관리자 전용이다.
    """

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAdminRole()]

    @extend_schema(
        summary="수강 신청 목록",
        description="전체 수강 신청을 최신순으로 조회합니다 (관리자).",
        responses={200: EnrollmentSerializer(many=True)},
        tags=["Enrollment"],
    )
    def get(self, request):
        enrollments = Enrollment.objects.order_by("-created_at", "-id")
        return Response({"data": EnrollmentSerializer(enrollments, many=True).data}, status=status.HTTP_200_OK)

    @extend_schema(
        summary="수강 신청",
        description="이메일/과정 종류/과정 slug 로 수강 신청을 생성합니다. 같은 조합은 한 번만 신청할 수 있습니다.",
        request=EnrollmentSerializer,
        responses={
            201: EnrollmentSerializer,
            400: OpenApiResponse(description="필수값 누락"),
            409: OpenApiResponse(description="중복 신청"),
        },
        examples=[
            OpenApiExample(
                "신청 예시",
                value={
                    "userEmail": "a@b.com",
                    "courseType": "skillpath",
                    "courseSlug": "frontend-101",
                    "amount": 4999,
                    "currency": "INR",
                },
                request_only=True,
            )
        ],
        tags=["Enrollment"],
    )
    def post(self, request):
        """수강 신청을 생성.

        먼저 같은 조합이 있는지 확인하고, 동시에 들어온 요청은 DB 유니크 제약(uniq_user_course)으로 막는다.

        Args:
            request (Request): 요청 객체.

        Returns:
            Response: 생성된 수강 신청 또는 오류 메시지를 포함한 응답.
        """
        missing = [key for key in ("userEmail", "courseType", "courseSlug") if not request.data.get(key)]
        if missing:
            return Response(
                {"error": "userEmail, courseType, and courseSlug are required"}, status=status.HTTP_400_BAD_REQUEST
            )

        serializer = EnrollmentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        if Enrollment.objects.filter(
            user_email=data["user_email"], course_type=data["course_type"], course_slug=data["course_slug"]
        ).exists():
            raise ConflictError(DUPLICATE_ENROLLMENT_MESSAGE)

        try:
            with transaction.atomic():
                enrollment = serializer.save()
        except IntegrityError as e:
            raise ConflictError(DUPLICATE_ENROLLMENT_MESSAGE) from e

        logger.info("Enrollment %s created for %s/%s", enrollment.pk, enrollment.course_type, enrollment.course_slug)
        return Response({"data": EnrollmentSerializer(enrollment).data}, status=status.HTTP_201_CREATED)


# -----------------------------------------------------------------------------------------------------------------------
# -----------------------------------------------------------------------------------------------------------------------


class MyEnrollmentListView(APIView):
    """내 수강 신청 조회 API."""

    permission_classes = [IsStudent]

    @extend_schema(
        summary="내 수강 신청 목록",
        description="로그인한 사용자의 이메일로 신청된 수강 신청을 조회합니다.",
        responses={200: EnrollmentSerializer(many=True)},
        tags=["Student"],
    )
    def get(self, request):
        enrollments = Enrollment.objects.filter(user_email=request.user.email.lower()).order_by("-created_at", "-id")
        return Response({"data": EnrollmentSerializer(enrollments, many=True).data}, status=status.HTTP_200_OK)
