from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(BaseModelAdmin):
    list_display = ("id", "enrollment", "amount_in_paise", "currency", "razorpay_order_id", "status", "created_at")
    search_fields = ("razorpay_order_id", "razorpay_payment_id", "enrollment__user_email")
    list_filter = ("status", "currency")

    def has_delete_permission(self, request, obj=None):
        # 결제 기록은 삭제하지 않음
        return False
