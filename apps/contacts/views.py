import logging

from django.db.models import Q
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import NotFoundError
from apps.common.permissions import IsAdminRole
from apps.common.utils import client_meta
from apps.contacts.models import Contact
from apps.contacts.serializers import ContactSerializer, ContactStatusSerializer, ContactSubmitSerializer

logger = logging.getLogger(__name__)


def first_error(errors):
    """serializer.errors 에서 첫 번째 메시지만 꺼냄"""
    for messages in errors.values():
        if isinstance(messages, (list, tuple)) and messages:
            return str(messages[0])
        return str(messages)
    return "Invalid request"


class ContactCreateView(APIView):
    """
    문의하기 API

    website 필드(숨김 필드)가 채워져 있으면 봇으로 보고 저장하지 않고 성공 응답만 준다
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="문의 접수",
        request=ContactSubmitSerializer,
        responses={201: OpenApiResponse(description="접수 완료"), 400: OpenApiResponse(description="입력값 오류")},
        examples=[
            OpenApiExample(
                "문의 예시",
                value={
                    "name": "Asha",
                    "email": "asha@example.com",
                    "reason": "support",
                    "message": "I cannot access my course dashboard.",
                    "consent": True,
                },
                request_only=True,
            )
        ],
        tags=["Contact"],
    )
    def post(self, request):
        if str(request.data.get("website") or "").strip():
            logger.info("Contact honeypot triggered from %s", client_meta(request)["ip"])
            return Response({"ok": True}, status=status.HTTP_200_OK)

        serializer = ContactSubmitSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": first_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        contact = serializer.save(status=Contact.Status.NEW, meta=client_meta(request))
        return Response({"ok": True, "id": contact.pk}, status=status.HTTP_201_CREATED)


class AdminContactListView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(
        summary="문의 목록",
        parameters=[
            OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False, enum=Contact.Status.values),
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False),
        ],
        responses=ContactSerializer(many=True),
        tags=["Admin"],
    )
    def get(self, request):
        contacts = Contact.objects.order_by("-created_at", "-id")

        contact_status = request.query_params.get("status")
        if contact_status in Contact.Status.values:
            contacts = contacts.filter(status=contact_status)

        q = request.query_params.get("q", "").strip()
        if q:
            contacts = contacts.filter(
                Q(name__icontains=q) | Q(email__icontains=q) | Q(subject__icontains=q) | Q(message__icontains=q)
            )

        return Response({"items": ContactSerializer(contacts, many=True).data}, status=status.HTTP_200_OK)


class AdminContactItemView(APIView):
    permission_classes = [IsAdminRole]

    def get_object(self, pk):
        contact = Contact.objects.filter(pk=pk).first()
        if contact is None:
            raise NotFoundError("Not found")
        return contact

    @extend_schema(summary="문의 상태 변경", request=ContactStatusSerializer, responses=ContactSerializer, tags=["Admin"])
    def patch(self, request, pk):
        serializer = ContactStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Invalid status"}, status=status.HTTP_400_BAD_REQUEST)

        contact = self.get_object(pk)
        contact.status = serializer.validated_data["status"]
        contact.save(update_fields=["status", "updated_at"])
        return Response({"ok": True, "contact": ContactSerializer(contact).data}, status=status.HTTP_200_OK)

    @extend_schema(summary="문의 삭제", responses={204: None}, tags=["Admin"])
    def delete(self, request, pk):
        self.get_object(pk).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
