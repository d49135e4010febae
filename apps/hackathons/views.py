import logging

from django.db.models import Q
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import NotFoundError
from apps.common.permissions import IsAdminRole
from apps.hackathons.models import Hackathon
from apps.hackathons.serializers import HackathonSerializer

logger = logging.getLogger(__name__)


def filter_by_status(queryset, hackathon_status, now=None):
    """upcoming / ongoing / past 를 현재 시각 기준으로 필터링"""
    now = now or timezone.now()
    if hackathon_status == "upcoming":
        return queryset.filter(start_at__gt=now)
    if hackathon_status == "ongoing":
        return queryset.filter(start_at__lte=now, end_at__gte=now)
    if hackathon_status == "past":
        return queryset.filter(end_at__lt=now)
    return queryset


def get_hackathon(pk):
    hackathon = Hackathon.objects.filter(pk=pk).first()
    if hackathon is None:
        raise NotFoundError("Hackathon not found")
    return hackathon


class HackathonListView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="해커톤 목록",
        description="status(upcoming/ongoing/past), q(제목/태그라인/설명 검색), published=true 로 필터링합니다.",
        parameters=[
            OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False, enum=["upcoming", "ongoing", "past"]),
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("published", bool, OpenApiParameter.QUERY, required=False),
        ],
        responses=HackathonSerializer(many=True),
        tags=["Hackathon"],
    )
    def get(self, request):
        hackathons = filter_by_status(Hackathon.objects.order_by("start_at"), request.query_params.get("status"))

        if request.query_params.get("published") == "true":
            hackathons = hackathons.filter(published=True)

        q = request.query_params.get("q", "").strip()
        if q:
            hackathons = hackathons.filter(Q(title__icontains=q) | Q(tagline__icontains=q) | Q(desc__icontains=q))

        return Response(HackathonSerializer(hackathons, many=True).data, status=status.HTTP_200_OK)


class HackathonDetailView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="해커톤 상세",
        responses={200: HackathonSerializer, 404: OpenApiResponse(description="없음")},
        tags=["Hackathon"],
    )
    def get(self, request, pk):
        return Response(HackathonSerializer(get_hackathon(pk)).data, status=status.HTTP_200_OK)


class AdminHackathonCreateView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(summary="해커톤 생성", request=HackathonSerializer, responses={201: HackathonSerializer}, tags=["Admin"])
    def post(self, request):
        serializer = HackathonSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        hackathon = serializer.save()
        logger.info("Hackathon created: %s", hackathon.slug)
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class AdminHackathonItemView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(summary="해커톤 수정", request=HackathonSerializer, responses=HackathonSerializer, tags=["Admin"])
    def patch(self, request, pk):
        serializer = HackathonSerializer(get_hackathon(pk), data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(summary="해커톤 삭제", responses={204: None}, tags=["Admin"])
    def delete(self, request, pk):
        get_hackathon(pk).delete()
        logger.info("Hackathon deleted: %s", pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
