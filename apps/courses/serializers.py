from rest_framework import serializers

from apps.common.fields import CommaSeparatedListField
from apps.common.utils import save_with_unique_slug
from apps.courses.models import CareerPath, Course, SkillPath

RATING_MIN = 0.0
RATING_MAX = 5.0


class SyllabusSectionSerializer(serializers.Serializer):
    """커리큘럼 한 단원: 제목과 세부 항목 목록"""

    title = serializers.CharField(max_length=200)
    items = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)


class CatalogItemSerializer(serializers.ModelSerializer):
    """과정/패스 공통 Serializer

    생성 시 slug 를 만들고, 수정 시 제목(이름)이 바뀌면 자기 자신을 제외하고 slug 를 다시 만든다.
    """

    href = serializers.CharField(read_only=True)
    perks = CommaSeparatedListField()
    syllabus = SyllabusSectionSerializer(many=True, required=False)
    rating = serializers.FloatField(required=False)
    students = serializers.IntegerField(required=False, min_value=0)

    def validate_rating(self, value):
        # 0 ~ 5 범위로 보정
        return min(max(value, RATING_MIN), RATING_MAX)

    def create(self, validated_data):
        instance = self.Meta.model(**validated_data)
        return save_with_unique_slug(instance, getattr(instance, instance.slug_source))

    def update(self, instance, validated_data):
        source = instance.slug_source
        source_changed = source in validated_data and validated_data[source] != getattr(instance, source)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if source_changed:
            return save_with_unique_slug(instance, getattr(instance, source))

        instance.save()
        return instance


class CourseSerializer(CatalogItemSerializer):
    class Meta:
        model = Course
        fields = (
            "id",
            "title",
            "slug",
            "href",
            "cover",
            "duration",
            "level",
            "category",
            "sub_category",
            "desc",
            "perks",
            "syllabus",
            "rating",
            "students",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("slug", "created_at", "updated_at")


class CourseListSerializer(serializers.ModelSerializer):
    """목록 카드용 (커리큘럼 제외)"""

    href = serializers.CharField(read_only=True)

    class Meta:
        model = Course
        fields = ("id", "title", "slug", "href", "cover", "duration", "level", "category", "sub_category", "rating", "students")


class PathSerializer(CatalogItemSerializer):
    skills = CommaSeparatedListField()

    class Meta:
        fields = (
            "id",
            "name",
            "slug",
            "href",
            "img",
            "desc",
            "duration",
            "level",
            "skills",
            "perks",
            "syllabus",
            "rating",
            "students",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("slug", "created_at", "updated_at")


class SkillPathSerializer(PathSerializer):
    class Meta(PathSerializer.Meta):
        model = SkillPath


class CareerPathSerializer(PathSerializer):
    class Meta(PathSerializer.Meta):
        model = CareerPath
