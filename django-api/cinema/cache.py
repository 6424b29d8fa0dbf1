"""Cache keys for cached API responses."""

from django.core.cache import cache

HALLS_LIST_KEY = "halls:list"


def invalidate_halls() -> None:
    cache.delete(HALLS_LIST_KEY)
