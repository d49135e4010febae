import hashlib
import hmac
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.exceptions import ConflictError, GatewayError, InvalidInputError, InvalidStateError
from apps.payments.gateway import RazorpayGatewayError, get_gateway
from apps.payments.models import Payment
from apps.registrations.models import Enrollment

logger = logging.getLogger(__name__)

# Razorpay receipt 필드 최대 길이
RECEIPT_MAX_LENGTH = 40


@dataclass
class VerificationResult:
    success: bool
    payment_id: str = None
    error: str = None


def to_minor_units(amount):
    """major unit 금액(예: 4999.50 INR)을 정수 minor unit(paise)으로 변환"""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_receipt(enrollment_id, payment_id):
    return f"enroll_{str(enrollment_id)[-8:]}_{str(payment_id)[-8:]}"[:RECEIPT_MAX_LENGTH]


def compute_signature(order_id, payment_id, secret):
    """HMAC-SHA256("{order_id}|{payment_id}") hex digest"""
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def is_valid_signature(order_id, payment_id, signature, secret):
    expected = compute_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode(), str(signature).encode())


def _parse_id(value):
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def order_payload(payment):
    return {
        "orderId": payment.razorpay_order_id,
        "amount": int(payment.amount_in_paise),
        "currency": payment.currency,
        "key": settings.RAZORPAY_KEY_ID,
        "paymentId": str(payment.pk),
    }


def _get_or_create_session(enrollment, amount, currency):
    """created 상태의 결제 세션을 찾고, 없으면 새로 만든다.

    수강 신청당 created 세션은 DB 제약으로 하나만 존재할 수 있으므로
    동시에 생성하다 제약에 걸리면 먼저 만들어진 세션을 다시 읽는다.
    """
    payment = Payment.objects.filter(enrollment=enrollment, status=Payment.Status.CREATED).first()
    if payment is not None:
        if not payment.razorpay_order_id and (payment.amount_in_paise != amount or payment.currency != currency):
            # 주문 전 세션이면 현재 수강 신청 금액으로 맞춤
            payment.amount_in_paise = amount
            payment.currency = currency
            payment.save(update_fields=["amount_in_paise", "currency", "updated_at"])
        return payment

    try:
        with transaction.atomic():
            return Payment.objects.create(
                enrollment=enrollment, amount_in_paise=amount, currency=currency, status=Payment.Status.CREATED
            )
    except IntegrityError:
        payment = Payment.objects.filter(enrollment=enrollment, status=Payment.Status.CREATED).first()
        if payment is None:
            raise ConflictError("Payment is already being processed. Please retry.")
        logger.info("Concurrent create-order for enrollment %s, using payment %s", enrollment.pk, payment.pk)
        return payment


def create_order(enrollment_id, gateway=None):
    """수강 신청에 대한 결제 세션과 Razorpay 주문을 만든다.

    이미 주문 번호가 있는 created 세션이 있으면 게이트웨이를 다시 호출하지 않고 그대로 반환한다.

    Args:
        enrollment_id: 수강 신청 id.
        gateway: 주문 생성 클라이언트. 없으면 설정값으로 만든 RazorpayGateway.

    Returns:
        dict: orderId, amount(paise), currency, key, paymentId.

    Raises:
        InvalidInputError: enrollment_id 가 없거나 수강 신청을 찾을 수 없는 경우.
        InvalidStateError: 금액이 0 이하이거나 이미 결제된 경우.
        GatewayError: 게이트웨이가 주문 생성을 거절한 경우. 세션은 failed 로 바뀐다.
    """
    if enrollment_id is None or str(enrollment_id).strip() == "":
        raise InvalidInputError("Missing enrollmentId")

    enrollment_pk = _parse_id(enrollment_id)
    enrollment = Enrollment.objects.filter(pk=enrollment_pk).first() if enrollment_pk is not None else None
    if enrollment is None:
        raise InvalidInputError("Enrollment not found")

    if enrollment.amount is None or enrollment.amount <= 0:
        raise InvalidStateError("Enrollment amount not set or invalid")
    if enrollment.status == Enrollment.Status.PAID:
        raise InvalidStateError("Enrollment is already paid")

    amount = to_minor_units(enrollment.amount)
    currency = (enrollment.currency or settings.DEFAULT_CURRENCY).upper()

    payment = _get_or_create_session(enrollment, amount, currency)
    if payment.razorpay_order_id:
        logger.info("Reusing order %s for enrollment %s", payment.razorpay_order_id, enrollment.pk)
        return order_payload(payment)

    gateway = gateway or get_gateway()
    try:
        order = gateway.create_order(amount, currency, build_receipt(enrollment.pk, payment.pk))
    except RazorpayGatewayError as e:
        logger.error("Razorpay order creation failed for payment %s: %s", payment.pk, e.description)
        payment.status = Payment.Status.FAILED
        payment.razorpay_order_id = None
        payment.save(update_fields=["status", "razorpay_order_id", "updated_at"])
        raise GatewayError(description=e.description) from e

    payment.razorpay_order_id = order["id"]
    payment.save(update_fields=["razorpay_order_id", "updated_at"])
    logger.info("Order %s created for enrollment %s (payment %s)", order["id"], enrollment.pk, payment.pk)
    return order_payload(payment)


def verify_payment(order_id, payment_id, signature, local_payment_id=None, enrollment_id=None, secret=None):
    """게이트웨이가 준 서명을 검증하고 결제 세션과 수강 신청을 paid 로 맞춘다.

    서명이 다르면 예외 대신 success=False 결과를 돌려준다.
    세션과 수강 신청 갱신은 하나의 트랜잭션으로 묶는다.

    Raises:
        InvalidInputError: order_id, payment_id, signature 중 하나라도 없는 경우.
    """
    if not order_id or not payment_id or not signature:
        raise InvalidInputError("Missing razorpay fields")

    secret = secret or settings.RAZORPAY_KEY_SECRET
    local_pk = _parse_id(local_payment_id)
    enrollment_pk = _parse_id(enrollment_id)

    if not is_valid_signature(order_id, payment_id, signature, secret):
        logger.warning("Signature mismatch for order %s (payment %s)", order_id, local_pk)
        if local_pk is not None:
            # 감사용으로 받은 값을 기록 (paid 세션은 건드리지 않음)
            Payment.objects.filter(pk=local_pk, status=Payment.Status.CREATED).update(
                status=Payment.Status.FAILED,
                razorpay_order_id=str(order_id)[:64],
                razorpay_payment_id=str(payment_id)[:64],
                razorpay_signature=str(signature)[:128],
                updated_at=timezone.now(),
            )
        return VerificationResult(success=False, error="Signature verification failed")

    with transaction.atomic():
        payment = None
        if local_pk is not None:
            # 서명된 주문 번호와 같은 세션일 때만 paymentId 를 믿는다
            payment = Payment.objects.select_for_update().filter(pk=local_pk, razorpay_order_id=order_id).first()
            if payment is None:
                logger.warning("Payment %s does not belong to order %s, looking up by order id", local_pk, order_id)
        if payment is None:
            payment = Payment.objects.select_for_update().filter(razorpay_order_id=order_id).first()

        if payment is None:
            enrollment = Enrollment.objects.filter(pk=enrollment_pk).first() if enrollment_pk is not None else None
            payment = Payment.objects.create(
                enrollment=enrollment,
                amount_in_paise=0,
                currency=settings.DEFAULT_CURRENCY,
                razorpay_order_id=order_id,
                razorpay_payment_id=payment_id,
                razorpay_signature=signature,
                status=Payment.Status.PAID,
            )
            logger.warning("No payment session for order %s, recorded as payment %s", order_id, payment.pk)
        else:
            payment.razorpay_payment_id = payment_id
            payment.razorpay_signature = signature
            payment.status = Payment.Status.PAID
            payment.save(update_fields=["razorpay_payment_id", "razorpay_signature", "status", "updated_at"])

        target_enrollment_id = payment.enrollment_id or enrollment_pk
        if target_enrollment_id is not None:
            Enrollment.objects.filter(pk=target_enrollment_id).update(
                status=Enrollment.Status.PAID, updated_at=timezone.now()
            )

    logger.info("Payment %s verified for order %s", payment.pk, order_id)
    return VerificationResult(success=True, payment_id=str(payment.pk))
