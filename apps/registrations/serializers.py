from django.conf import settings
from rest_framework import serializers

from .models import Enrollment

# 입력으로 들어오는 과정 종류 표기를 저장값으로 맞춤
COURSE_TYPE_ALIASES = {
    "skillpath": Enrollment.CourseType.SKILLPATH,
    "skill-path": Enrollment.CourseType.SKILLPATH,
    "skill_path": Enrollment.CourseType.SKILLPATH,
    "careerpath": Enrollment.CourseType.CAREERPATH,
    "career-path": Enrollment.CourseType.CAREERPATH,
    "career_path": Enrollment.CourseType.CAREERPATH,
    "courses": Enrollment.CourseType.COURSES,
    "course": Enrollment.CourseType.COURSES,
}


def normalize_course_type(value):
    return COURSE_TYPE_ALIASES.get(str(value or "").strip().lower())


class EnrollmentSerializer(serializers.ModelSerializer):
    """수강 신청 직렬화 클래스.

    요청/응답은 camelCase(userEmail, courseType, courseSlug) 를 사용한다.
    중복 신청은 DB 유니크 제약으로 확인하므로 기본 UniqueTogether 검증은 끈다.

    Attributes:
        userEmail: 신청자 이메일 (소문자, 공백 제거).
        courseType: skillpath / careerpath / courses.
        courseSlug: 신청한 과정의 slug.
    """

    userEmail = serializers.EmailField(source="user_email")
    courseType = serializers.CharField(source="course_type")
    courseSlug = serializers.CharField(source="course_slug", max_length=220)
    status = serializers.ChoiceField(choices=Enrollment.Status.choices, required=False)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, coerce_to_string=False)
    currency = serializers.CharField(max_length=3, required=False)
    meta = serializers.JSONField(required=False, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Enrollment
        fields = (
            "id",
            "userEmail",
            "courseType",
            "courseSlug",
            "status",
            "amount",
            "currency",
            "meta",
            "createdAt",
            "updatedAt",
        )
        validators = []

    def validate_userEmail(self, value):
        return value.strip().lower()

    def validate_courseType(self, value):
        course_type = normalize_course_type(value)
        if course_type is None:
            raise serializers.ValidationError("courseType must be one of skillpath, careerpath, courses.")
        return course_type

    def validate_courseSlug(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("courseSlug is required.")
        return value

    def validate_status(self, value):
        # 결제 완료 상태는 결제 검증을 통해서만 바뀐다
        if value == Enrollment.Status.PAID:
            raise serializers.ValidationError("Enrollment cannot be created as paid.")
        return value

    def validate_currency(self, value):
        return (value or settings.DEFAULT_CURRENCY).upper()

    def validate_meta(self, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("meta must be an object.")
        return value
