import logging

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.exceptions import NotFoundError
from apps.common.permissions import IsAdminRole
from apps.courses.cache import get_cached_list, set_cached_list
from apps.courses.models import CareerPath, Course, SkillPath
from apps.courses.serializers import (
    CareerPathSerializer,
    CourseListSerializer,
    CourseSerializer,
    SkillPathSerializer,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 18
MAX_PAGE_SIZE = 60


def _positive_int(value, default):
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return default


# ------------------------------------------------------------------------------
# 공통 베이스 뷰
# ------------------------------------------------------------------------------


class CatalogListView(APIView):
    """공개 목록 조회 (캐시 사용)"""

    authentication_classes = ()
    permission_classes = (AllowAny,)
    model = None
    serializer_class = None
    cache_name = None

    def get(self, request):
        cached_data = get_cached_list(self.cache_name)
        if cached_data is not None:
            return Response(cached_data, status=status.HTTP_200_OK)

        items = self.model.objects.order_by("-created_at", "-id")
        response_data = {"items": self.serializer_class(items, many=True).data}
        set_cached_list(self.cache_name, response_data)
        return Response(response_data, status=status.HTTP_200_OK)


class CatalogDetailView(APIView):
    """slug 로 상세 조회"""

    authentication_classes = ()
    permission_classes = (AllowAny,)
    model = None
    serializer_class = None

    def get(self, request, slug):
        item = self.model.objects.filter(slug=slug).first()
        if item is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return Response(self.serializer_class(item).data, status=status.HTTP_200_OK)


class CatalogCountView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)
    model = None

    def get(self, request):
        return Response({"count": self.model.objects.count()}, status=status.HTTP_200_OK)


class AdminCatalogCreateView(APIView):
    """관리자 생성 - slug 는 제목(이름)으로 자동 생성"""

    permission_classes = [IsAdminRole]
    serializer_class = None

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        item = serializer.save()
        logger.info("%s created: %s", type(item).__name__, item.slug)
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class AdminCatalogItemView(APIView):
    """관리자 단건 조회/수정/삭제"""

    permission_classes = [IsAdminRole]
    model = None
    serializer_class = None

    def get_object(self, pk):
        item = self.model.objects.filter(pk=pk).first()
        if item is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return item

    def get(self, request, pk):
        return Response(self.serializer_class(self.get_object(pk)).data, status=status.HTTP_200_OK)

    def patch(self, request, pk):
        serializer = self.serializer_class(self.get_object(pk), data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)

    def delete(self, request, pk):
        item = self.get_object(pk)
        item.delete()
        logger.info("%s deleted: %s", self.model.__name__, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ------------------------------------------------------------------------------
# 과정 (Course)
# ------------------------------------------------------------------------------


class CourseListView(CatalogListView):
    model = Course
    serializer_class = CourseListSerializer
    cache_name = "courses"

    @extend_schema(
        summary="과정 목록 조회",
        description="검색어/카테고리/레벨로 필터링하고 page, limit 으로 페이지를 나눕니다 (limit 최대 60).",
        parameters=[
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("category", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("sub_category", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("level", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("page", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False),
        ],
        tags=["Course"],
    )
    def get(self, request):
        params = request.query_params
        page = _positive_int(params.get("page"), 1)
        limit = min(_positive_int(params.get("limit"), DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
        filters = {
            key: params.get(key, "").strip()
            for key in ("q", "category", "sub_category", "level")
            if params.get(key, "").strip()
        }

        cache_params = {**filters, "page": page, "limit": limit}
        cached_data = get_cached_list(self.cache_name, cache_params)
        if cached_data is not None:
            return Response(cached_data, status=status.HTTP_200_OK)

        courses = Course.objects.order_by("-created_at", "-id")
        if "q" in filters:
            q = filters["q"]
            courses = courses.filter(Q(title__icontains=q) | Q(desc__icontains=q) | Q(category__icontains=q))
        for key in ("category", "sub_category", "level"):
            if key in filters:
                courses = courses.filter(**{f"{key}__iexact": filters[key]})

        total = courses.count()
        offset = (page - 1) * limit
        response_data = {
            "items": CourseListSerializer(courses[offset : offset + limit], many=True).data,
            "total": total,
            "page": page,
            "limit": limit,
        }
        set_cached_list(self.cache_name, response_data, cache_params)
        return Response(response_data, status=status.HTTP_200_OK)


class CourseDetailView(CatalogDetailView):
    model = Course
    serializer_class = CourseSerializer

    @extend_schema(summary="과정 상세 조회", responses={200: CourseSerializer, 404: OpenApiResponse(description="없음")}, tags=["Course"])
    def get(self, request, slug):
        return super().get(request, slug)


class CourseCountView(CatalogCountView):
    model = Course

    @extend_schema(summary="과정 수", tags=["Course"])
    def get(self, request):
        return super().get(request)


class AdminCourseCreateView(AdminCatalogCreateView):
    serializer_class = CourseSerializer

    @extend_schema(summary="과정 생성", request=CourseSerializer, responses={201: CourseSerializer}, tags=["Admin"])
    def post(self, request):
        return super().post(request)


class AdminCourseItemView(AdminCatalogItemView):
    model = Course
    serializer_class = CourseSerializer


# ------------------------------------------------------------------------------
# 스킬패스 / 커리어패스
# ------------------------------------------------------------------------------


class SkillPathListView(CatalogListView):
    model = SkillPath
    serializer_class = SkillPathSerializer
    cache_name = "skillpaths"

    @extend_schema(summary="스킬패스 목록", responses=SkillPathSerializer(many=True), tags=["Course"])
    def get(self, request):
        return super().get(request)


class SkillPathDetailView(CatalogDetailView):
    model = SkillPath
    serializer_class = SkillPathSerializer

    @extend_schema(summary="스킬패스 상세", responses=SkillPathSerializer, tags=["Course"])
    def get(self, request, slug):
        return super().get(request, slug)


class SkillPathCountView(CatalogCountView):
    model = SkillPath

    @extend_schema(summary="스킬패스 수", tags=["Course"])
    def get(self, request):
        return super().get(request)


class AdminSkillPathCreateView(AdminCatalogCreateView):
    serializer_class = SkillPathSerializer

    @extend_schema(summary="스킬패스 생성", request=SkillPathSerializer, responses={201: SkillPathSerializer}, tags=["Admin"])
    def post(self, request):
        return super().post(request)


class AdminSkillPathItemView(AdminCatalogItemView):
    model = SkillPath
    serializer_class = SkillPathSerializer


class CareerPathListView(CatalogListView):
    model = CareerPath
    serializer_class = CareerPathSerializer
    cache_name = "careerpaths"

    @extend_schema(summary="커리어패스 목록", responses=CareerPathSerializer(many=True), tags=["Course"])
    def get(self, request):
        return super().get(request)


class CareerPathDetailView(CatalogDetailView):
    model = CareerPath
    serializer_class = CareerPathSerializer

    @extend_schema(summary="커리어패스 상세", responses=CareerPathSerializer, tags=["Course"])
    def get(self, request, slug):
        return super().get(request, slug)


class CareerPathCountView(CatalogCountView):
    model = CareerPath

    @extend_schema(summary="커리어패스 수", tags=["Course"])
    def get(self, request):
        return super().get(request)


class AdminCareerPathCreateView(AdminCatalogCreateView):
    serializer_class = CareerPathSerializer

    @extend_schema(summary="커리어패스 생성", request=CareerPathSerializer, responses={201: CareerPathSerializer}, tags=["Admin"])
    def post(self, request):
        return super().post(request)


class AdminCareerPathItemView(AdminCatalogItemView):
    model = CareerPath
    serializer_class = CareerPathSerializer
