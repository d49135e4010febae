from django.db import models

from apps.common.models import BaseModel


class Hackathon(BaseModel):
    class LocationType(models.TextChoices):
        ONLINE = "online", "Online"
        OFFLINE = "offline", "Offline"
        HYBRID = "hybrid", "Hybrid"

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    tagline = models.CharField(max_length=300, blank=True, default="")
    cover = models.TextField(blank=True, default="")
    desc = models.TextField(blank=True, default="")
    start_at = models.DateTimeField(db_index=True)
    end_at = models.DateTimeField(db_index=True)

    location_type = models.CharField(max_length=10, choices=LocationType.choices, default=LocationType.ONLINE)
    location_name = models.CharField(max_length=200, blank=True, default="")

    prize_pool = models.CharField(max_length=100, blank=True, default="")
    registration_url = models.URLField(max_length=500, blank=True, default="")

    # 문자열 리스트
    organizers = models.JSONField(default=list, blank=True)
    sponsors = models.JSONField(default=list, blank=True)
    rules = models.JSONField(default=list, blank=True)
    eligibility = models.JSONField(default=list, blank=True)
    tracks = models.JSONField(default=list, blank=True)
    judges = models.JSONField(default=list, blank=True)
    mentors = models.JSONField(default=list, blank=True)
    # [{"time": "...", "title": "..."}]
    schedule = models.JSONField(default=list, blank=True)

    published = models.BooleanField(default=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = "hackathon"
        ordering = ("start_at",)
