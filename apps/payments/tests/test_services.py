from decimal import Decimal
from unittest import mock

import pytest

from django.db import IntegrityError, transaction

from apps.common.exceptions import ConflictError, GatewayError, InvalidInputError, InvalidStateError
from apps.payments.gateway import RazorpayGatewayError
from apps.payments.models import Payment
from apps.payments.services import (
    build_receipt,
    compute_signature,
    create_order,
    is_valid_signature,
    to_minor_units,
    verify_payment,
)
from apps.registrations.models import Enrollment

SECRET = "rzp_test_secret"


class FakeGateway:
    """호출 횟수를 세는 주문 생성 클라이언트"""

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def create_order(self, amount, currency, receipt):
        self.calls.append({"amount": amount, "currency": currency, "receipt": receipt})
        if self.error:
            raise self.error
        return {"id": f"order_{len(self.calls)}", "amount": amount, "currency": currency, "receipt": receipt}


@pytest.fixture
def enrollment(db):
    return Enrollment.objects.create(
        user_email="a@b.com",
        course_type=Enrollment.CourseType.SKILLPATH,
        course_slug="frontend-101",
        amount=Decimal("4999"),
        currency="INR",
    )


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(Decimal("4999")) == 499900
    assert to_minor_units(Decimal("10.005")) == 1001
    assert to_minor_units("0.01") == 1


def test_build_receipt_uses_last_eight_characters_and_caps_length():
    assert build_receipt(12, 34) == "enroll_12_34"
    receipt = build_receipt("1234567890abcdef", "fedcba0987654321")
    assert receipt == "enroll_90abcdef_87654321"
    assert len(receipt) <= 40


def test_signature_matches_known_hmac():
    # echo -n "order_X|pay_Y" | openssl dgst -sha256 -hmac rzp_test_secret
    signature = compute_signature("order_X", "pay_Y", SECRET)
    assert len(signature) == 64
    assert is_valid_signature("order_X", "pay_Y", signature, SECRET)


@pytest.mark.parametrize(
    "order_id, payment_id, mutate_signature",
    [
        ("order_x", "pay_Y", False),
        ("order_X", "pay_Z", False),
        ("order_X", "pay_Y", True),
    ],
)
def test_single_character_mutation_fails_verification(order_id, payment_id, mutate_signature):
    signature = compute_signature("order_X", "pay_Y", SECRET)
    if mutate_signature:
        signature = signature[:-1] + ("0" if signature[-1] != "0" else "1")
    assert not is_valid_signature(order_id, payment_id, signature, SECRET)


def test_create_order_creates_session_and_returns_order(enrollment):
    gateway = FakeGateway()

    payload = create_order(enrollment.pk, gateway=gateway)

    payment = Payment.objects.get(enrollment=enrollment)
    assert payload == {
        "orderId": "order_1",
        "amount": 499900,
        "currency": "INR",
        "key": "rzp_test_key",
        "paymentId": str(payment.pk),
    }
    assert payment.status == Payment.Status.CREATED
    assert payment.razorpay_order_id == "order_1"
    assert gateway.calls[0]["receipt"] == build_receipt(enrollment.pk, payment.pk)


def test_create_order_reuses_existing_order(enrollment):
    gateway = FakeGateway()

    first = create_order(enrollment.pk, gateway=gateway)
    second = create_order(enrollment.pk, gateway=gateway)

    assert second["orderId"] == first["orderId"]
    assert second["paymentId"] == first["paymentId"]
    assert len(gateway.calls) == 1
    assert Payment.objects.filter(enrollment=enrollment).count() == 1


def test_create_order_reuses_created_session_without_order_id(enrollment):
    stale = Payment.objects.create(enrollment=enrollment, amount_in_paise=499900, currency="INR")
    gateway = FakeGateway()

    payload = create_order(enrollment.pk, gateway=gateway)

    assert payload["paymentId"] == str(stale.pk)
    assert Payment.objects.filter(enrollment=enrollment).count() == 1


def test_create_order_gateway_failure_marks_session_failed(enrollment):
    gateway = FakeGateway(error=RazorpayGatewayError({"code": "BAD_REQUEST_ERROR", "description": "Invalid amount"}))

    with pytest.raises(GatewayError) as exc_info:
        create_order(enrollment.pk, gateway=gateway)

    assert exc_info.value.description == "Invalid amount"
    payment = Payment.objects.get(enrollment=enrollment)
    assert payment.status == Payment.Status.FAILED
    assert payment.razorpay_order_id is None


def test_create_order_after_failure_mints_new_session(enrollment):
    with pytest.raises(GatewayError):
        create_order(enrollment.pk, gateway=FakeGateway(error=RazorpayGatewayError("timeout")))

    payload = create_order(enrollment.pk, gateway=FakeGateway())

    assert Payment.objects.filter(enrollment=enrollment).count() == 2
    assert Payment.objects.get(pk=payload["paymentId"]).status == Payment.Status.CREATED


def test_gateway_error_without_description_is_serialized():
    error = RazorpayGatewayError({"code": "SERVER_ERROR"})
    assert error.description == '{"code": "SERVER_ERROR"}'


def test_create_order_requires_enrollment_id(db):
    with pytest.raises(InvalidInputError):
        create_order(None, gateway=FakeGateway())


def test_create_order_unknown_enrollment(db):
    with pytest.raises(InvalidInputError):
        create_order(999, gateway=FakeGateway())
    with pytest.raises(InvalidInputError):
        create_order("not-a-number", gateway=FakeGateway())


def test_create_order_rejects_non_positive_amount(enrollment):
    enrollment.amount = Decimal("0")
    enrollment.save()

    with pytest.raises(InvalidStateError):
        create_order(enrollment.pk, gateway=FakeGateway())
    assert not Payment.objects.exists()


def test_verify_missing_fields(db):
    with pytest.raises(InvalidInputError):
        verify_payment("order_1", "", "sig")


def test_verify_marks_session_and_enrollment_paid(enrollment):
    create_order(enrollment.pk, gateway=FakeGateway())
    payment = Payment.objects.get(enrollment=enrollment)
    signature = compute_signature("order_1", "pay_1", SECRET)

    result = verify_payment("order_1", "pay_1", signature, local_payment_id=str(payment.pk))

    assert result.success
    assert result.payment_id == str(payment.pk)
    payment.refresh_from_db()
    enrollment.refresh_from_db()
    assert payment.status == Payment.Status.PAID
    assert payment.razorpay_payment_id == "pay_1"
    assert payment.razorpay_signature == signature
    assert enrollment.status == Enrollment.Status.PAID


def test_verify_falls_back_to_order_id_lookup(enrollment):
    create_order(enrollment.pk, gateway=FakeGateway())
    signature = compute_signature("order_1", "pay_1", SECRET)

    result = verify_payment("order_1", "pay_1", signature)

    payment = Payment.objects.get(razorpay_order_id="order_1")
    assert result.payment_id == str(payment.pk)
    assert payment.status == Payment.Status.PAID


def test_verify_prefers_session_enrollment_over_hint(enrollment):
    other = Enrollment.objects.create(
        user_email="c@d.com", course_type="courses", course_slug="python", amount=Decimal("100")
    )
    create_order(enrollment.pk, gateway=FakeGateway())
    signature = compute_signature("order_1", "pay_1", SECRET)

    verify_payment("order_1", "pay_1", signature, enrollment_id=str(other.pk))

    enrollment.refresh_from_db()
    other.refresh_from_db()
    assert enrollment.status == Enrollment.Status.PAID
    assert other.status == Enrollment.Status.PENDING


def test_verify_without_session_creates_ad_hoc_payment(enrollment):
    signature = compute_signature("order_unknown", "pay_9", SECRET)

    result = verify_payment("order_unknown", "pay_9", signature, enrollment_id=enrollment.pk)

    payment = Payment.objects.get(pk=result.payment_id)
    assert payment.status == Payment.Status.PAID
    assert payment.amount_in_paise == 0
    assert payment.currency == "INR"
    assert payment.enrollment == enrollment
    enrollment.refresh_from_db()
    assert enrollment.status == Enrollment.Status.PAID


def test_verify_signature_mismatch_marks_session_failed(enrollment):
    create_order(enrollment.pk, gateway=FakeGateway())
    payment = Payment.objects.get(enrollment=enrollment)

    result = verify_payment("order_1", "pay_1", "bad-signature", local_payment_id=payment.pk)

    assert not result.success
    assert result.error == "Signature verification failed"
    payment.refresh_from_db()
    enrollment.refresh_from_db()
    assert payment.status == Payment.Status.FAILED
    assert payment.razorpay_payment_id == "pay_1"
    assert payment.razorpay_signature == "bad-signature"
    assert enrollment.status == Enrollment.Status.PENDING


def test_verify_signature_mismatch_does_not_touch_paid_session(enrollment):
    create_order(enrollment.pk, gateway=FakeGateway())
    payment = Payment.objects.get(enrollment=enrollment)
    verify_payment("order_1", "pay_1", compute_signature("order_1", "pay_1", SECRET), local_payment_id=payment.pk)

    result = verify_payment("order_1", "pay_1", "forged", local_payment_id=payment.pk)

    assert not result.success
    payment.refresh_from_db()
    assert payment.status == Payment.Status.PAID


def test_verify_ignores_payment_id_of_another_order(enrollment):
    pricey = Enrollment.objects.create(
        user_email="c@d.com", course_type="courses", course_slug="python", amount=Decimal("9999")
    )
    gateway = FakeGateway()
    cheap_order = create_order(enrollment.pk, gateway=gateway)
    pricey_order = create_order(pricey.pk, gateway=gateway)
    signature = compute_signature(cheap_order["orderId"], "pay_cheap", SECRET)

    result = verify_payment(
        cheap_order["orderId"], "pay_cheap", signature, local_payment_id=pricey_order["paymentId"]
    )

    assert result.success
    assert result.payment_id == cheap_order["paymentId"]
    pricey.refresh_from_db()
    enrollment.refresh_from_db()
    assert pricey.status == Enrollment.Status.PENDING
    assert enrollment.status == Enrollment.Status.PAID
    pricey_payment = Payment.objects.get(pk=pricey_order["paymentId"])
    assert pricey_payment.status == Payment.Status.CREATED
    assert pricey_payment.razorpay_payment_id is None


def test_second_created_payment_per_enrollment_is_rejected(enrollment):
    Payment.objects.create(enrollment=enrollment, amount_in_paise=499900, currency="INR")

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Payment.objects.create(enrollment=enrollment, amount_in_paise=499900, currency="INR")

    # failed 세션은 몇 개든 허용
    Payment.objects.create(enrollment=enrollment, amount_in_paise=499900, currency="INR", status=Payment.Status.FAILED)


def test_create_order_uses_concurrently_created_session(enrollment):
    winner = Payment.objects.create(
        enrollment=enrollment, amount_in_paise=499900, currency="INR", razorpay_order_id="order_w"
    )
    gateway = FakeGateway()
    real_filter = Payment.objects.filter
    lookups = {"count": 0}

    def filter_missing_first(*args, **kwargs):
        # 첫 조회 시점에는 아직 다른 요청의 세션이 보이지 않았던 상황
        lookups["count"] += 1
        if lookups["count"] == 1:
            return Payment.objects.none()
        return real_filter(*args, **kwargs)

    with mock.patch.object(Payment.objects, "filter", side_effect=filter_missing_first):
        result = create_order(enrollment.pk, gateway=gateway)

    assert result["orderId"] == "order_w"
    assert result["paymentId"] == str(winner.pk)
    assert gateway.calls == []
    assert Payment.objects.filter(enrollment=enrollment).count() == 1


def test_create_order_conflict_when_no_session_survives(enrollment):
    with mock.patch.object(Payment.objects, "create", side_effect=IntegrityError("uniq_created_payment_per_enrollment")):
        with pytest.raises(ConflictError):
            create_order(enrollment.pk, gateway=FakeGateway())

    assert not Payment.objects.exists()


def test_gateway_create_order_posts_to_orders_endpoint():
    from apps.payments.gateway import RazorpayGateway

    gateway = RazorpayGateway("key", "secret", "https://api.razorpay.test/v1/", timeout=5)
    response = mock.Mock(status_code=200)
    response.json.return_value = {"id": "order_1", "amount": 100, "currency": "INR"}

    with mock.patch("apps.payments.gateway.requests.post", return_value=response) as post:
        order = gateway.create_order(100, "INR", "enroll_1_1")

    assert order["id"] == "order_1"
    post.assert_called_once_with(
        "https://api.razorpay.test/v1/orders",
        json={"amount": 100, "currency": "INR", "receipt": "enroll_1_1", "payment_capture": 1},
        auth=("key", "secret"),
        timeout=5,
    )


def test_gateway_unwraps_error_body():
    from apps.payments.gateway import RazorpayGateway

    gateway = RazorpayGateway("key", "secret", "https://api.razorpay.test/v1", timeout=5)
    response = mock.Mock(status_code=400)
    response.json.return_value = {"error": {"code": "BAD_REQUEST_ERROR", "description": "amount exceeds maximum"}}

    with mock.patch("apps.payments.gateway.requests.post", return_value=response):
        with pytest.raises(RazorpayGatewayError) as exc_info:
            gateway.create_order(100, "INR", "r")

    assert exc_info.value.description == "amount exceeds maximum"
    assert exc_info.value.status_code == 400
