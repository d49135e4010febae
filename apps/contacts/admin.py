from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import Contact


@admin.register(Contact)
class ContactAdmin(BaseModelAdmin):
    list_display = ("name", "email", "reason", "status", "created_at")
    search_fields = ("name", "email", "subject")
    list_filter = ("reason", "status", "newsletter")
