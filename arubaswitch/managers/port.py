"""Port status, enable/disable and MAC-table lookups per port."""

from __future__ import annotations

import time
from typing import Any

from loguru import logger

from arubaswitch._util import validate_port_id
from arubaswitch.cache import CacheKey, Mutation, port_key
from arubaswitch.managers.base import BaseManager

RESTART_SETTLE_SECONDS = 5


class PortManager(BaseManager):
    """Port administration via ``/ports``."""

    def get_ports_status(self) -> list[dict[str, Any]]:
        """Status of every port (cached)."""
        return self._cached(CacheKey.PORTS, lambda: self._get_list("/ports", "port_element"))

    def get_port_status(self, port: str) -> dict[str, Any]:
        """Status record of one port (cached per port)."""
        port = validate_port_id(port)
        return self._cached(port_key(port), lambda: self._transport.get(f"/ports/{port}").payload or {})

    def is_port_enabled(self, port: str) -> bool:
        return self.get_port_status(port).get("is_port_enabled") is True

    def is_port_up(self, port: str) -> bool:
        return self.get_port_status(port).get("is_port_up") is True

    def enable_port(self, port: str) -> bool:
        return self._set_enabled(port, True)

    def disable_port(self, port: str) -> bool:
        return self._set_enabled(port, False)

    def _set_enabled(self, port: str, enabled: bool) -> bool:
        port = validate_port_id(port)
        try:
            result = self._transport.put(f"/ports/{port}", {"id": port, "is_port_enabled": enabled})
        finally:
            self._cache.invalidate(Mutation.ENABLE_PORT if enabled else Mutation.DISABLE_PORT)
            self._cache.discard([port_key(port)])

        if isinstance(result.payload, dict):
            self._cache.set(port_key(port), result.payload)

        if result.field("is_port_enabled") is enabled or str(result.field("port_id")) == port:
            logger.info(f"Port {port} {'enabled' if enabled else 'disabled'}")
            return True
        return False

    def restart_port(self, port: str) -> bool:
        """Disable ``port``, wait for the link to settle, then enable it again.

        Be careful with uplinks: the switch is unreachable through ``port``
        while it is down.
        """
        if not self.disable_port(port):
            return False
        time.sleep(RESTART_SETTLE_SECONDS)
        return self.enable_port(port)

    def get_mac_table_port(self, port: str) -> list[dict[str, Any]]:
        """MAC addresses learned on one port."""
        port = validate_port_id(port)
        return self._get_list(f"/ports/{port}/mac-table", "mac_table_entry_element")
