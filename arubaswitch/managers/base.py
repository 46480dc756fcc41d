"""Shared plumbing for the domain managers."""

from __future__ import annotations

import copy
from typing import Any, Callable

from arubaswitch.cache import CacheKey, ResponseCache
from arubaswitch.transport import ArubaRESTTransport


class BaseManager:
    """A group of operations sharing one transport and one response cache."""

    def __init__(self, transport: ArubaRESTTransport, cache: ResponseCache):
        self._transport = transport
        self._cache = cache

    def _cached(self, key: CacheKey | str, fetch: Callable[[], Any]) -> Any:
        """Return a copy of the cached value for ``key``, fetching and storing it on a miss.

        Callers get their own copy, so mutating a result never changes the cache.
        """
        if key not in self._cache:
            self._cache.set(key, fetch())
        return copy.deepcopy(self._cache.get(key))

    def _get_list(self, path: str, element: str) -> list[dict[str, Any]]:
        """GET ``path`` and return its ``element`` collection, or ``[]`` if absent."""
        result = self._transport.get(path)
        items = result.field(element)
        return list(items) if isinstance(items, list) else []
