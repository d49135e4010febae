import logging

from botocore.exceptions import BotoCoreError, ClientError
from django.db import DatabaseError, connection
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import IsAdminRole
from apps.common.utils import upload_file_to_storage

logger = logging.getLogger(__name__)


class PingView(APIView):
    """헬스 체크"""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="헬스 체크",
        description="DB 연결을 확인합니다.",
        responses={200: OpenApiResponse(description="pong"), 503: OpenApiResponse(description="DB 연결 실패")},
        tags=["Common"],
    )
    def get(self, request):
        try:
            connection.ensure_connection()
        except DatabaseError as e:
            logger.error("Database ping failed", exc_info=e)
            return Response({"ok": False, "error": "Database unavailable"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response({"ok": True, "message": "pong"}, status=status.HTTP_200_OK)


class FileUploadView(APIView):
    """관리자용 파일 업로드 (커버 이미지 등)"""

    permission_classes = [IsAdminRole]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        summary="파일 업로드",
        description="multipart 의 file 필드를 Object Storage 에 저장하고 key/url 을 반환합니다.",
        responses={
            201: OpenApiResponse(description="업로드 성공"),
            400: OpenApiResponse(description="파일 누락"),
            502: OpenApiResponse(description="스토리지 오류"),
        },
        tags=["Common"],
    )
    def post(self, request):
        uploaded_file = request.FILES.get("file")
        if not uploaded_file:
            return Response({"error": "No file uploaded"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            key, url = upload_file_to_storage(uploaded_file)
        except (BotoCoreError, ClientError) as e:
            logger.error("Storage upload failed", exc_info=e)
            return Response({"error": "File upload failed"}, status=status.HTTP_502_BAD_GATEWAY)

        return Response({"key": key, "url": url}, status=status.HTTP_201_CREATED)
