"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from cinema import models
from cinema.cache import HALLS_LIST_KEY


@pytest.mark.django_db
class TestHallsCache:
    """Tests for the cached halls list."""

    def test_halls_list_is_cached(self, api_client: APIClient):
        models.Hall.objects.create(name="Red", capacity=50)

        response = api_client.get("/api/halls")

        assert cache.get(HALLS_LIST_KEY) == response.json()

    def test_cached_response_is_served(self, api_client: APIClient):
        cache.set(HALLS_LIST_KEY, {"halls": []})
        models.Hall.objects.bulk_create([models.Hall(name="Red", capacity=50)])

        assert api_client.get("/api/halls").json() == {"halls": []}

    def test_hall_save_invalidates_list_cache(self, api_client: APIClient):
        """Saving a hall invalidates the halls:list cache key."""
        models.Hall.objects.create(name="Red", capacity=50)
        api_client.get("/api/halls")

        models.Hall.objects.create(name="Blue", capacity=5)

        assert cache.get(HALLS_LIST_KEY) is None
        names = [hall["name"] for hall in api_client.get("/api/halls").json()["halls"]]
        assert names == ["Blue", "Red"]

    def test_hall_delete_invalidates_list_cache(self, api_client: APIClient):
        """Deleting a hall invalidates the halls:list cache key."""
        hall = models.Hall.objects.create(name="Red", capacity=50)
        api_client.get("/api/halls")

        hall.delete()

        assert api_client.get("/api/halls").json() == {"halls": []}
