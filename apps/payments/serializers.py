from rest_framework import serializers

from .models import Payment


class CreateOrderSerializer(serializers.Serializer):
    enrollmentId = serializers.CharField()
    email = serializers.EmailField(required=False)


class VerifyPaymentSerializer(serializers.Serializer):
    razorpay_order_id = serializers.CharField()
    razorpay_payment_id = serializers.CharField()
    razorpay_signature = serializers.CharField()
    paymentId = serializers.CharField(required=False)
    enrollmentId = serializers.CharField(required=False)


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = (
            "id",
            "enrollment",
            "amount_in_paise",
            "currency",
            "razorpay_order_id",
            "razorpay_payment_id",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields
