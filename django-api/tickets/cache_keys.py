"""Cache keys for catalog responses."""

import uuid

CONCERT_LIST_KEY = "concerts:list"
CATALOG_CACHE_TTL = 60


def concert_detail_key(concert_id: object) -> str:
    # Canonical UUID form so any spelling of an id maps to the key evicted on save.
    try:
        concert_id = uuid.UUID(str(concert_id))
    except ValueError:
        pass
    return f"concerts:{concert_id}"
