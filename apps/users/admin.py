from django.contrib import admin
from django.contrib.auth.hashers import make_password
from django.core.exceptions import ValidationError

from apps.common.admin import BaseModelAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseModelAdmin):
    # 표시할 컬럼
    list_display = ("email", "name", "urn", "role", "email_verified", "is_active", "created_at")
    # 검색 기능 설정
    search_fields = ("email", "name", "urn")
    # 필터링 조건
    list_filter = ("role", "email_verified", "is_active", "is_staff")
    readonly_fields = ("urn", "email_verification_token_hash", "email_verification_expires", "created_at", "updated_at")

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)
        # 슈퍼유저가 아닐 경우 아래 두 필드를 비활성화
        if not request.user.is_superuser:
            for field in ("is_superuser", "is_staff"):
                if field in form.base_fields:
                    form.base_fields[field].disabled = True
        return form

    def save_model(self, request, obj, form, change):
        """
        1) 최후의 superuser가 해제되지 않도록 방지
        2) 관리 화면에서 비밀번호를 바꾸면 해쉬화
        """
        if change and "is_superuser" in form.changed_data:
            if not obj.is_superuser and User.objects.filter(is_superuser=True).count() == 1:
                raise ValidationError("At least one superuser must remain.")

        if "password" in form.changed_data:
            obj.password = make_password(obj.password)

        if not obj.urn:
            from .utils import generate_registration_number

            obj.urn = generate_registration_number(obj.role)

        super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser  # superuser만 삭제 가능
