from django.db import models

from apps.common.models import BaseModel


class Enrollment(BaseModel):
    """수강 신청 (결제 전 구매 의사)

    (user_email, course_type, course_slug) 조합은 유일하다.
    """

    class CourseType(models.TextChoices):
        SKILLPATH = "skillpath", "Skill path"
        CAREERPATH = "careerpath", "Career path"
        COURSES = "courses", "Course"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"
        CANCELLED = "cancelled", "Cancelled"

    user_email = models.EmailField(db_index=True)
    course_type = models.CharField(max_length=20, choices=CourseType.choices)
    course_slug = models.CharField(max_length=220)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)  # 결제 금액 (major unit)
    currency = models.CharField(max_length=3, default="INR")
    meta = models.JSONField(default=dict, blank=True)

    def __str__(self):
        return f"{self.user_email} - {self.course_type}/{self.course_slug}"

    class Meta:
        db_table = "enrollment"
        ordering = ("-created_at",)
        constraints = [
            models.UniqueConstraint(fields=["user_email", "course_type", "course_slug"], name="uniq_user_course"),
        ]
