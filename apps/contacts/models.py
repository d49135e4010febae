from django.db import models

from apps.common.models import BaseModel


class Contact(BaseModel):
    class Reason(models.TextChoices):
        SUPPORT = "support", "Support"
        PARTNERSHIP = "partnership", "Partnership"
        HIRING = "hiring", "Hiring"
        FEEDBACK = "feedback", "Feedback"
        OTHER = "other", "Other"

    class Status(models.TextChoices):
        NEW = "new", "New"
        READ = "read", "Read"
        ARCHIVED = "archived", "Archived"

    name = models.CharField(max_length=120)
    email = models.EmailField(max_length=200)
    phone = models.CharField(max_length=40, blank=True, default="")
    company = models.CharField(max_length=160, blank=True, default="")
    reason = models.CharField(max_length=20, choices=Reason.choices, default=Reason.OTHER, db_index=True)
    subject = models.CharField(max_length=200, blank=True, default="")
    message = models.TextField(max_length=2000)
    newsletter = models.BooleanField(default=False)
    consent = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.NEW, db_index=True)
    # ip, userAgent, referer
    meta = models.JSONField(default=dict, blank=True)

    def __str__(self):
        return f"{self.name} <{self.email}>"

    class Meta:
        db_table = "contact"
        ordering = ("-created_at",)
