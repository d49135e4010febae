import hashlib

from django.conf import settings
from django.core.cache import cache

# 목록 캐시는 버전 키를 올리는 방식으로 한 번에 무효화한다
VERSION_KEY = "catalog:{name}:version"


def _version(name):
    return cache.get_or_set(VERSION_KEY.format(name=name), 1, timeout=None)


def list_cache_key(name, params=None):
    """쿼리 파라미터까지 포함한 목록 캐시 키"""
    query = "&".join(f"{k}={v}" for k, v in sorted((params or {}).items()))
    digest = hashlib.md5(query.encode()).hexdigest()
    return f"catalog:{name}:v{_version(name)}:{digest}"


def get_cached_list(name, params=None):
    return cache.get(list_cache_key(name, params))


def set_cached_list(name, data, params=None):
    cache.set(list_cache_key(name, params), data, timeout=settings.CATALOG_CACHE_TIMEOUT)


def invalidate_list_cache(name):
    key = VERSION_KEY.format(name=name)
    try:
        cache.incr(key)
    except ValueError:
        # 버전 키가 아직 없거나 만료된 경우
        cache.set(key, 2, timeout=None)
