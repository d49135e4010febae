from django.contrib import admin

from ..common.admin import BaseModelAdmin
from .models import CareerPath, Course, SkillPath


@admin.register(Course)
class CourseAdmin(BaseModelAdmin):
    list_display = ("title", "slug", "category", "level", "rating", "students")
    search_fields = ("title", "slug")
    list_filter = ("category", "level")


@admin.register(SkillPath)
class SkillPathAdmin(BaseModelAdmin):
    list_display = ("name", "slug", "level", "rating", "students")
    search_fields = ("name", "slug")


@admin.register(CareerPath)
class CareerPathAdmin(BaseModelAdmin):
    list_display = ("name", "slug", "level", "rating", "students")
    search_fields = ("name", "slug")
