from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(BaseModelAdmin):
    """Enrollment 모델 관리자.

    관리자가 신청 상태를 취소(cancelled)로 바꿀 수 있다.
    """

    list_display = ("user_email", "course_type", "course_slug", "status", "amount", "currency", "created_at")
    search_fields = ("user_email", "course_slug")
    list_filter = ("course_type", "status")
