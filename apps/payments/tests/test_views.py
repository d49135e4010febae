from unittest import mock

import pytest

from apps.payments.gateway import RazorpayGatewayError
from apps.payments.models import Payment
from apps.payments.services import compute_signature
from apps.registrations.models import Enrollment


@pytest.fixture
def gateway():
    fake = mock.Mock()
    fake.create_order.return_value = {"id": "order_X", "amount": 499900, "currency": "INR"}
    with mock.patch("apps.payments.services.get_gateway", return_value=fake):
        yield fake


@pytest.mark.django_db
def test_checkout_end_to_end(api_client, gateway):
    response = api_client.post(
        "/api/enrollments",
        {
            "userEmail": "a@b.com",
            "courseType": "skillpath",
            "courseSlug": "frontend-101",
            "amount": 4999,
            "currency": "INR",
        },
        format="json",
    )
    assert response.status_code == 201
    enrollment_id = response.data["data"]["id"]

    response = api_client.post("/api/payments/create-order", {"enrollmentId": enrollment_id}, format="json")
    assert response.status_code == 200
    order = response.json()
    assert order["orderId"] == "order_X"
    assert order["amount"] == 499900
    assert order["currency"] == "INR"
    payment_id = order["paymentId"]

    signature = compute_signature("order_X", "pay_123", "rzp_test_secret")
    response = api_client.post(
        "/api/payments/verify",
        {
            "razorpay_order_id": "order_X",
            "razorpay_payment_id": "pay_123",
            "razorpay_signature": signature,
            "paymentId": payment_id,
        },
        format="json",
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "paymentId": payment_id}
    assert Enrollment.objects.get(pk=enrollment_id).status == Enrollment.Status.PAID


@pytest.mark.django_db
def test_create_order_twice_returns_same_order(api_client, gateway):
    enrollment = Enrollment.objects.create(
        user_email="a@b.com", course_type="skillpath", course_slug="frontend-101", amount=4999
    )

    first = api_client.post("/api/payments/create-order", {"enrollmentId": enrollment.pk}, format="json").json()
    second = api_client.post("/api/payments/create-order", {"enrollmentId": enrollment.pk}, format="json").json()

    assert first["orderId"] == second["orderId"]
    assert gateway.create_order.call_count == 1


@pytest.mark.django_db
def test_create_order_missing_enrollment(api_client, gateway):
    response = api_client.post("/api/payments/create-order", {}, format="json")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing enrollmentId"}


@pytest.mark.django_db
def test_create_order_gateway_failure_details(api_client, gateway):
    gateway.create_order.side_effect = RazorpayGatewayError({"description": "Authentication failed"})
    enrollment = Enrollment.objects.create(
        user_email="a@b.com", course_type="skillpath", course_slug="frontend-101", amount=10
    )

    response = api_client.post("/api/payments/create-order", {"enrollmentId": enrollment.pk}, format="json")

    assert response.status_code == 400
    assert response.json() == {"error": "Razorpay order creation failed", "details": "Authentication failed"}
    assert Payment.objects.get().status == Payment.Status.FAILED


@pytest.mark.django_db
def test_verify_missing_fields(api_client):
    response = api_client.post("/api/payments/verify", {"razorpay_order_id": "order_X"}, format="json")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing razorpay fields"}


@pytest.mark.django_db
def test_verify_signature_mismatch(api_client):
    response = api_client.post(
        "/api/payments/verify",
        {"razorpay_order_id": "order_X", "razorpay_payment_id": "pay_1", "razorpay_signature": "nope"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Signature verification failed"}


@pytest.mark.django_db
def test_admin_payment_list_filters_by_status(admin_client):
    Payment.objects.create(amount_in_paise=100, status=Payment.Status.PAID)
    Payment.objects.create(amount_in_paise=200, status=Payment.Status.FAILED)

    response = admin_client.get("/api/admin/payments", {"status": "paid"})

    assert response.status_code == 200
    assert [item["amount_in_paise"] for item in response.json()["items"]] == [100]


@pytest.mark.django_db
def test_admin_payment_list_requires_admin(student_client):
    response = student_client.get("/api/admin/payments")

    assert response.status_code == 403
