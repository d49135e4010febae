from django.contrib import admin


class BaseModelAdmin(admin.ModelAdmin):
    """스태프만 관리 화면에서 조회/수정할 수 있는 공통 ModelAdmin"""

    readonly_fields = ("created_at", "updated_at")

    def has_add_permission(self, request):
        return request.user.is_staff

    def has_change_permission(self, request, obj=None):
        return request.user.is_staff

    def has_delete_permission(self, request, obj=None):
        return request.user.is_staff

    def has_module_permission(self, request):
        return request.user.is_staff
