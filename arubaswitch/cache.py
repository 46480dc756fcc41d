"""Per-session response cache with a fixed invalidation table."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from loguru import logger


class CacheKey(str, Enum):
    """Whole-table datasets held in the cache."""

    VLANS = "vlans"
    VLANS_PORTS = "vlans-ports"
    PORTS = "ports"
    POE_PORTS_STATUS = "poe-ports-status"
    ARP_TABLE = "arp-table"


class Mutation(str, Enum):
    """Mutating operations that make cached data stale."""

    CREATE_VLAN = "create_vlan"
    UPDATE_VLAN = "update_vlan"
    DELETE_VLAN = "delete_vlan"
    SET_UNTAGGED_VLAN = "set_untagged_vlan"
    SET_TAGGED_VLANS = "set_tagged_vlans"
    ENABLE_PORT = "enable_port"
    DISABLE_PORT = "disable_port"
    ENABLE_POE = "enable_poe"
    DISABLE_POE = "disable_poe"


# Which dataset each mutation clears. Per-port entries touched by port
# enable/disable are overwritten with the echoed record instead.
INVALIDATIONS: dict[Mutation, tuple[CacheKey, ...]] = {
    Mutation.CREATE_VLAN: (CacheKey.VLANS,),
    Mutation.UPDATE_VLAN: (CacheKey.VLANS,),
    Mutation.DELETE_VLAN: (CacheKey.VLANS,),
    Mutation.SET_UNTAGGED_VLAN: (CacheKey.VLANS_PORTS,),
    Mutation.SET_TAGGED_VLANS: (CacheKey.VLANS_PORTS,),
    Mutation.ENABLE_PORT: (CacheKey.PORTS,),
    Mutation.DISABLE_PORT: (CacheKey.PORTS,),
    Mutation.ENABLE_POE: (CacheKey.POE_PORTS_STATUS,),
    Mutation.DISABLE_POE: (CacheKey.POE_PORTS_STATUS,),
}


def port_key(port: str) -> str:
    return f"port:{port}"


class ResponseCache:
    """Lazily filled mapping from dataset key to the last decoded response.

    Not time based and not thread safe; one instance lives as long as the
    client that owns it.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    @staticmethod
    def _key(key: CacheKey | str) -> str:
        return key.value if isinstance(key, CacheKey) else key

    def __contains__(self, key: CacheKey | str) -> bool:
        return self._key(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey | str, default: Any = None) -> Any:
        return self._entries.get(self._key(key), default)

    def set(self, key: CacheKey | str, value: Any) -> None:
        self._entries[self._key(key)] = value

    def discard(self, keys: Iterable[CacheKey | str]) -> None:
        for key in keys:
            if self._entries.pop(self._key(key), None) is not None:
                logger.debug(f"cache: dropped {self._key(key)}")

    def invalidate(self, mutation: Mutation) -> None:
        """Drop every dataset ``mutation`` makes stale."""
        self.discard(INVALIDATIONS[mutation])

    def clear(self) -> None:
        self._entries.clear()
