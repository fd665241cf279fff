"""Django signals for catalog cache invalidation.

Eviction waits for the surrounding transaction to commit, so a rolled-back
purchase leaves the cache alone and a committed one is never served stale.
"""

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from tickets.cache_keys import CONCERT_LIST_KEY, concert_detail_key
from tickets.models import Concert


@receiver([post_save, post_delete], sender=Concert)
def invalidate_concert_cache(sender, instance, **kwargs):
    """Invalidate caches when a concert is saved or deleted."""
    keys = [CONCERT_LIST_KEY, concert_detail_key(instance.pk)]
    transaction.on_commit(lambda: cache.delete_many(keys))
