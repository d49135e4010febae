from django.db import models

from apps.common.models import BaseModel


class CatalogItem(BaseModel):
    """과정/스킬패스/커리어패스 공통 필드

    slug 는 slug_source 필드(제목/이름)로부터 생성된다.
    """

    slug_source = "title"
    href_prefix = ""

    slug = models.SlugField(max_length=220, unique=True)
    desc = models.TextField(blank=True, default="")
    duration = models.CharField(max_length=60, blank=True, default="")
    level = models.CharField(max_length=60, blank=True, default="", db_index=True)
    perks = models.JSONField(default=list, blank=True)
    # [{"title": "...", "items": ["...", ...]}, ...]
    syllabus = models.JSONField(default=list, blank=True)
    rating = models.FloatField(default=0)
    students = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True

    @property
    def href(self):
        return f"{self.href_prefix}/{self.slug}"


class Course(CatalogItem):
    href_prefix = "/courses"

    title = models.CharField(max_length=200)
    cover = models.TextField(blank=True, default="")  # 커버 이미지 URL
    category = models.CharField(max_length=100, blank=True, default="", db_index=True)
    sub_category = models.CharField(max_length=100, blank=True, default="", db_index=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = "course"
        ordering = ("-created_at",)


class SkillPath(CatalogItem):
    slug_source = "name"
    href_prefix = "/skillpaths"

    name = models.CharField(max_length=200)
    img = models.TextField(blank=True, default="")
    skills = models.JSONField(default=list, blank=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = "skill_path"
        ordering = ("-created_at",)


class CareerPath(CatalogItem):
    slug_source = "name"
    href_prefix = "/careerpaths"

    name = models.CharField(max_length=200)
    img = models.TextField(blank=True, default="")
    skills = models.JSONField(default=list, blank=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = "career_path"
        ordering = ("-created_at",)
