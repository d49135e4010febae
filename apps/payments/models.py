from django.db import models

from apps.common.models import BaseModel
from apps.registrations.models import Enrollment


class Payment(BaseModel):
    """수강 신청 한 건에 대한 결제 시도 (결제 세션)

    created → paid (결제 검증 성공)
    created → failed (주문 생성 실패 또는 서명 불일치)
    삭제하지 않는다.
    """

    class Status(models.TextChoices):
        CREATED = "created", "Created"
        PAID = "paid", "Paid"
        FAILED = "failed", "Failed"
        REFUNDED = "refunded", "Refunded"

    # 검증 시 세션을 찾지 못해 새로 만드는 경우 수강 신청이 없을 수 있음
    enrollment = models.ForeignKey(
        Enrollment, on_delete=models.PROTECT, null=True, blank=True, related_name="payments"
    )
    amount_in_paise = models.PositiveIntegerField()  # minor unit
    currency = models.CharField(max_length=3, default="INR")
    razorpay_order_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    razorpay_payment_id = models.CharField(max_length=64, null=True, blank=True)
    razorpay_signature = models.CharField(max_length=128, null=True, blank=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.CREATED, db_index=True)

    def __str__(self):
        return f"Payment {self.pk} ({self.status})"

    class Meta:
        db_table = "payment"
        ordering = ("-created_at",)
        constraints = [
            # 수강 신청당 created 상태 세션은 하나만
            models.UniqueConstraint(
                fields=["enrollment"],
                condition=models.Q(status="created"),
                name="uniq_created_payment_per_enrollment",
            ),
        ]
