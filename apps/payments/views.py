import logging

from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import InvalidInputError
from apps.common.permissions import IsAdminRole

from .models import Payment
from .serializers import CreateOrderSerializer, PaymentSerializer, VerifyPaymentSerializer
from .services import create_order, verify_payment

logger = logging.getLogger(__name__)


class CreateOrderView(APIView):
    """
    결제 주문 생성 API

    같은 수강 신청으로 다시 호출하면 기존 주문을 그대로 돌려준다
    """

    permission_classes = (AllowAny,)

    @extend_schema(
        summary="결제 주문 생성",
        description="수강 신청 금액으로 Razorpay 주문을 만들고 체크아웃에 필요한 값을 반환합니다.",
        request=CreateOrderSerializer,
        responses={
            200: OpenApiResponse(description="주문 생성 (또는 기존 주문 재사용)"),
            400: OpenApiResponse(description="수강 신청 없음 / 금액 오류 / 게이트웨이 오류"),
        },
        examples=[
            OpenApiExample(
                "성공 예시",
                value={
                    "orderId": "order_X",
                    "amount": 499900,
                    "currency": "INR",
                    "key": "rzp_test_xxx",
                    "paymentId": "1",
                },
                response_only=True,
            )
        ],
        tags=["Payment"],
    )
    def post(self, request):
        payload = create_order(request.data.get("enrollmentId"))
        return Response(payload, status=status.HTTP_200_OK)


class VerifyPaymentView(APIView):
    """
    결제 검증 API

    실패 응답은 {"success": false, "error": ...} 형태로 통일한다
    """

    permission_classes = (AllowAny,)

    @extend_schema(
        summary="결제 검증",
        description="Razorpay 서명(HMAC-SHA256)을 검증하고 결제/수강 신청을 결제 완료로 바꿉니다.",
        request=VerifyPaymentSerializer,
        responses={
            200: OpenApiResponse(description='{"success": true, "paymentId": "..."}'),
            400: OpenApiResponse(description='{"success": false, "error": "..."}'),
        },
        tags=["Payment"],
    )
    def post(self, request):
        data = request.data
        try:
            result = verify_payment(
                order_id=data.get("razorpay_order_id"),
                payment_id=data.get("razorpay_payment_id"),
                signature=data.get("razorpay_signature"),
                local_payment_id=data.get("paymentId"),
                enrollment_id=data.get("enrollmentId"),
            )
        except InvalidInputError as e:
            return Response({"success": False, "error": str(e.detail)}, status=status.HTTP_400_BAD_REQUEST)

        if not result.success:
            return Response({"success": False, "error": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, "paymentId": result.payment_id}, status=status.HTTP_200_OK)


class AdminPaymentListView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(
        summary="결제 목록",
        parameters=[OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False, enum=Payment.Status.values)],
        responses=PaymentSerializer(many=True),
        tags=["Admin"],
    )
    def get(self, request):
        payments = Payment.objects.select_related("enrollment").order_by("-created_at", "-id")
        payment_status = request.query_params.get("status")
        if payment_status:
            payments = payments.filter(status=payment_status)
        return Response({"items": PaymentSerializer(payments, many=True).data}, status=status.HTTP_200_OK)
