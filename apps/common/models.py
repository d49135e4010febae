from django.db import models


class BaseModel(models.Model):
    """생성/수정 시각을 공통으로 가지는 추상 모델"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
