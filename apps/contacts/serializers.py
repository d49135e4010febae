import re

from rest_framework import serializers

from apps.common.fields import TrimmedCharField
from apps.contacts.models import Contact

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 2000


class ContactSubmitSerializer(serializers.Serializer):
    """문의 접수 Serializer

    길이 제한은 오류 대신 잘라내기로 처리한다.
    """

    name = TrimmedCharField(cap=120)
    email = TrimmedCharField(cap=200)
    phone = TrimmedCharField(cap=40)
    company = TrimmedCharField(cap=160)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=Contact.Reason.OTHER)
    subject = TrimmedCharField(cap=200)
    message = TrimmedCharField()
    newsletter = serializers.BooleanField(required=False, default=False)
    consent = serializers.BooleanField(required=False, default=False)

    def validate_email(self, email):
        return email.lower()

    def validate_reason(self, reason):
        reason = (reason or "").strip().lower()
        return reason if reason in Contact.Reason.values else Contact.Reason.OTHER

    def validate(self, attrs):
        if not attrs.get("name") or not attrs.get("email") or not attrs.get("message"):
            raise serializers.ValidationError("Name, email and message are required.")
        if not attrs.get("consent"):
            raise serializers.ValidationError("Please accept the privacy consent to submit the form.")
        if not EMAIL_REGEX.match(attrs["email"]):
            raise serializers.ValidationError("Please provide a valid email.")
        if len(attrs["message"]) < MESSAGE_MIN_LENGTH:
            raise serializers.ValidationError("Message is too short.")

        attrs["message"] = attrs["message"][:MESSAGE_MAX_LENGTH]
        return attrs

    def create(self, validated_data):
        return Contact.objects.create(**validated_data)


class ContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = (
            "id",
            "name",
            "email",
            "phone",
            "company",
            "reason",
            "subject",
            "message",
            "newsletter",
            "consent",
            "status",
            "meta",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ContactStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Contact.Status.choices)
