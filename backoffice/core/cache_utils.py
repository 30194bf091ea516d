"""
Caching utilities for upstream lookup lists
Dropdown data (customers, products, corporate batches) is cached per session
for a short TTL and dropped again whenever a screen writes to that resource.
"""
from django.conf import settings
from django.core.cache import cache
import hashlib
import logging

logger = logging.getLogger(__name__)

CUSTOMERS_LOOKUP = 'lookup_customers'
PRODUCTS_LOOKUP = 'lookup_products'
CORPORATE_BATCHES_LOOKUP = 'lookup_corporate_batches'


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    # Hash it to keep key length reasonable
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def session_cache_key(prefix, client, *args):
    """Cache key scoped to the upstream session the client forwards"""
    return make_cache_key(prefix, client.cookie, *args)


def cached_lookup(prefix, client, loader, *args, ttl=None):
    """
    Return a cached successful result for ``loader()``.

    Failed results are never cached so the next request retries upstream.
    """
    cache_key = session_cache_key(prefix, client, *args)
    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.debug(f"Cache HIT for {prefix}: {cache_key}")
        return cached_data

    logger.debug(f"Cache MISS for {prefix}: {cache_key}")
    result = loader()
    if result.get('success'):
        cache.set(cache_key, result, ttl or settings.LOOKUP_CACHE_TTL)
    return result


def invalidate_cache_pattern(pattern):
    """
    Invalidate all cache keys matching a pattern
    Note: This requires Redis with SCAN command support
    """
    try:
        from django_redis import get_redis_connection
        redis_conn = get_redis_connection("default")

        keys = []
        cursor = 0
        while True:
            cursor, partial_keys = redis_conn.scan(cursor, match=f"*{pattern}*", count=100)
            keys.extend(partial_keys)
            if cursor == 0:
                break

        if keys:
            redis_conn.delete(*keys)
            logger.info(f"Invalidated {len(keys)} cache keys matching pattern: {pattern}")
    except Exception as e:
        logger.debug(f"Could not invalidate cache pattern {pattern}: {str(e)}")


def invalidate_lookup(prefix, client, *args):
    """Drop a lookup for this session, and for every session when Redis is configured"""
    cache.delete(session_cache_key(prefix, client, *args))
    if settings.REDIS_URL:
        invalidate_cache_pattern(prefix)
