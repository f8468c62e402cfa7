"""
db package — cache backends for catalog lookups.

Usage:
    from tripplanner.db import get_cache
    cache = get_cache()
"""
from tripplanner.db.cache import InMemoryCache, RedisCache, get_cache, get_redis

__all__ = ["InMemoryCache", "RedisCache", "get_cache", "get_redis"]
