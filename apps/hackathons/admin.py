from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import Hackathon


@admin.register(Hackathon)
class HackathonAdmin(BaseModelAdmin):
    list_display = ("title", "slug", "start_at", "end_at", "location_type", "published")
    search_fields = ("title", "tagline")
    list_filter = ("location_type", "published")
