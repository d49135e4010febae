import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidInputError(APIException):
    """요청 값이 없거나 형식이 잘못된 경우"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid_input"


class InvalidStateError(APIException):
    """대상은 존재하지만 현재 상태로는 작업을 진행할 수 없는 경우"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid state."
    default_code = "invalid_state"


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(APIException):
    """유니크 제약 위반 (중복 수강신청, 중복 이메일 등)"""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Duplicate value."
    default_code = "conflict"


class PersistenceError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
    default_code = "persistence_error"


class GatewayError(APIException):
    """결제 게이트웨이가 요청을 거절했을 때.

    Attributes:
        description (str): 게이트웨이가 돌려준 사람이 읽을 수 있는 오류 설명.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Razorpay order creation failed"
    default_code = "gateway_error"

    def __init__(self, description=None, detail=None):
        super().__init__(detail)
        self.description = description


def custom_exception_handler(exc, context):
    """모든 API 오류를 {"error": ...} 형태로 맞춰서 응답.

    DRF가 처리하지 못한 예외(DB 오류 포함)는 로그를 남기고 일반적인 500 응답으로 바꾼다.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        if isinstance(exc, DatabaseError):
            logger.error("Database error in %s", type(view).__name__, exc_info=exc)
        else:
            logger.error("Unhandled error in %s", type(view).__name__, exc_info=exc)
        return Response({"error": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, GatewayError):
        response.data = {"error": str(exc.detail), "details": exc.description}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}

    return response
