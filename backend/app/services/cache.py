import time
import functools
import inspect
import hashlib
import json


# in-process cache for upstream feed responses
class SimpleTTLCache:
    def __init__(self):
        self._store = {}

    # return the cached value, dropping it once expired
    def get(self, key):
        item = self._store.get(key)
        if not item:
            return None

        value, expires_at = item
        if time.monotonic() > expires_at:
            self._store.pop(key, None)
            return None

        return value

    def set(self, key, value, ttl_seconds: int):
        self._store[key] = (value, time.monotonic() + ttl_seconds)

    def clear(self):
        self._store.clear()


# shared by every cached client method
CACHE = SimpleTTLCache()


def make_cache_key(func, args, kwargs):
    """
    Deterministic key from the function's qualified name and its arguments.
    For methods the bound instance is replaced by its `cache_scope` attribute,
    so clients pointed at the same upstream share entries and others don't.
    """
    scope = None
    if args and hasattr(args[0], func.__name__):
        scope = getattr(args[0], "cache_scope", None)
        args = args[1:]
    raw = {
        "func": f"{func.__module__}.{func.__qualname__}",
        "scope": scope,
        "args": args,
        "kwargs": kwargs,
    }
    encoded = json.dumps(raw, sort_keys=True, default=str).encode()
    return hashlib.sha256(encoded).hexdigest()


def cached(ttl_seconds):
    """
    Cache an async function's result in CACHE.

    `ttl_seconds` is either a number or a zero-argument callable, so the TTL
    can come from settings at call time:

        @cached(ttl_seconds=lambda: settings.SCHEDULE_CACHE_SECONDS)
        async def fetch_schedule(self):
            ...
    """

    def resolve_ttl():
        return ttl_seconds() if callable(ttl_seconds) else ttl_seconds

    def decorator(func):
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"{func.__qualname__} must be async to be cached")

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            key = make_cache_key(func, args, kwargs)
            cached_value = CACHE.get(key)
            if cached_value is not None:
                return cached_value

            value = await func(*args, **kwargs)
            CACHE.set(key, value, resolve_ttl())
            return value

        return wrapper

    return decorator
