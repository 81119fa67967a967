"""Caching decorator for translation backends.

This module provides a drop-in wrapper for any :class:`~transcachex.backend.Backend`
that memoizes reads per locale and can be reset when the owning record changes.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
from collections.abc import Callable, MutableMapping
from typing import Any

from .backend import Backend, CachePolicy

logger = logging.getLogger(__name__)


class CachedBackend:
    """Wraps a backend to add a per-locale cache.

    With the default ``PASS_THROUGH`` policy:
    - Reads call the backend once per locale, later reads hit the cache
    - Writes always reach the backend and evict that locale from the cache
      instead of warming it

    With ``CACHE_ONLY``:
    - Writes store the given value in the cache and skip the backend
    - Reads come from the cache only; an unwritten locale raises ``KeyError``

    The cache container is built lazily by ``new_cache`` and dropped as a whole
    by ``clear_cache``. Containers need ``__getitem__``/``__setitem__``, plus
    ``__delitem__`` for pass-through writes.

    Args:
        backend: Backend to wrap (may be shared, only read/write are used)
        policy: Cache policy (default: from ``backend.writes_to_cache()``)
        cache_factory: Callable building an empty container
            (default: ``backend.new_cache``)

    Example:
        >>> backend = HashBackend(article, "title")
        >>> cached = CachedBackend(backend)
        >>> cached.read("en")  # hits the hash column
        >>> cached.read("en")  # served from cache
        >>> cached.clear_cache()
    """

    def __init__(
        self,
        backend: Backend,
        policy: CachePolicy | None = None,
        cache_factory: Callable[[], MutableMapping] | None = None,
    ):
        self.backend = backend
        if policy is None:
            policy = (
                CachePolicy.CACHE_ONLY
                if backend.writes_to_cache()
                else CachePolicy.PASS_THROUGH
            )
        self.policy = policy
        self.cache_factory = cache_factory or backend.new_cache
        self._cache: MutableMapping | None = None

        logger.debug(
            f"Decorated backend: {type(backend).__name__} "
            f"(attribute: {getattr(backend, 'attribute', None)}, policy: {policy.value})"
        )

    @property
    def cache(self) -> MutableMapping:
        """Current cache container, created on first access."""
        if self._cache is None:
            self._cache = self.new_cache()
        return self._cache

    def new_cache(self) -> MutableMapping:
        """Build a fresh, empty cache container."""
        return self.cache_factory()

    def read(self, locale: str, **options: Any) -> Any:
        """Read ``locale``, consulting the backend at most once until cleared.

        Args:
            locale: Locale to read
            **options: Forwarded unchanged to the backend on a miss

        Returns:
            Cached or freshly read value

        Raises:
            KeyError: Under ``CACHE_ONLY`` if ``locale`` was never written
        """
        cache = self.cache
        if self.policy is CachePolicy.CACHE_ONLY:
            return cache[locale]

        try:
            return cache[locale]
        except KeyError:
            logger.debug(f"Cache miss: {self._label()} [{locale}]")

        value = self.backend.read(locale, **options)
        cache[locale] = value
        return value

    def write(self, locale: str, value: Any, **options: Any) -> Any:
        """Write ``value`` for ``locale`` according to the cache policy.

        Args:
            locale: Locale to write
            value: Value to store
            **options: Forwarded unchanged to the backend

        Returns:
            ``value`` under ``CACHE_ONLY``, otherwise whatever the backend returns
        """
        if self.policy is CachePolicy.CACHE_ONLY:
            self.cache[locale] = value
            return value

        result = self.backend.write(locale, value, **options)
        # Not write-through: the next read of this locale goes back to the backend
        if self._cache is not None:
            try:
                del self._cache[locale]
            except KeyError:
                pass
        return result

    def clear_cache(self) -> None:
        """Drop every cached locale; the next read goes back to the backend."""
        if self._cache is not None:
            logger.debug(f"Cleared cache: {self._label()}")
        self._cache = None

    def _label(self) -> str:
        return f"{type(self.backend).__name__}.{getattr(self.backend, 'attribute', '?')}"

    def __repr__(self) -> str:
        return f"CachedBackend({self.backend!r}, policy={self.policy.value})"
