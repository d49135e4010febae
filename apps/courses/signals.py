import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.courses.cache import invalidate_list_cache
from apps.courses.models import CareerPath, Course, SkillPath

logger = logging.getLogger(__name__)

CACHE_NAMES = {
    Course: "courses",
    SkillPath: "skillpaths",
    CareerPath: "careerpaths",
}


# 과정/패스 추가, 수정, 삭제 시 목록 캐시 삭제
@receiver(post_save, sender=Course)
@receiver(post_delete, sender=Course)
@receiver(post_save, sender=SkillPath)
@receiver(post_delete, sender=SkillPath)
@receiver(post_save, sender=CareerPath)
@receiver(post_delete, sender=CareerPath)
def handle_catalog_change(sender, instance, **kwargs):
    name = CACHE_NAMES[sender]
    invalidate_list_cache(name)
    logger.debug("Catalog cache invalidated: %s", name)
