"""Django signals for cache invalidation."""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from cinema.cache import invalidate_halls
from cinema.models import Hall


@receiver([post_save, post_delete], sender=Hall)
def invalidate_hall_cache(sender, instance, **kwargs):
    """Invalidate the halls list when a hall is saved or deleted."""
    invalidate_halls()
    transaction.on_commit(invalidate_halls)
