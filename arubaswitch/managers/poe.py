"""Power over Ethernet management."""

from __future__ import annotations

import time
from typing import Any

from loguru import logger

from arubaswitch._util import validate_port_id
from arubaswitch.cache import CacheKey, Mutation
from arubaswitch.managers.base import BaseManager
from arubaswitch.managers.port import RESTART_SETTLE_SECONDS
from arubaswitch.models.enums import PoEDeliveryState


class PoEManager(BaseManager):
    """PoE status and per-port power control."""

    def get_ports_poe_status(self) -> list[dict[str, Any]]:
        """PoE statistics of every port (cached).

        Each entry's ``poe_detection_status`` is one of the
        :class:`PoEDeliveryState` tokens.
        """
        return self._cached(CacheKey.POE_PORTS_STATUS, lambda: self._get_list("/poe/ports/stats", "port_poe_stats"))

    def get_port_poe_status(self, port: str) -> dict[str, Any]:
        port = validate_port_id(port)
        return self._transport.get(f"/ports/{port}/poe/stats").payload or {}

    def get_port_poe_delivery_state(self, port: str) -> PoEDeliveryState | None:
        """Delivery state of one port, or None if the switch reports an unknown token."""
        state = self.get_port_poe_status(port).get("poe_detection_status")
        try:
            return PoEDeliveryState(state)
        except ValueError:
            return None

    def enable_poe_port(self, port: str) -> bool:
        return self._set_poe(port, True)

    def disable_poe_port(self, port: str) -> bool:
        return self._set_poe(port, False)

    def _set_poe(self, port: str, enabled: bool) -> bool:
        port = validate_port_id(port)
        try:
            result = self._transport.put(f"/ports/{port}/poe", {"port_id": port, "is_poe_enabled": enabled})
        finally:
            self._cache.invalidate(Mutation.ENABLE_POE if enabled else Mutation.DISABLE_POE)

        if result.field("is_poe_enabled") is enabled or str(result.field("port_id")) == port:
            logger.info(f"PoE on port {port} {'enabled' if enabled else 'disabled'}")
            return True
        return False

    def restart_poe_port(self, port: str) -> bool:
        """Power-cycle the device attached to ``port``."""
        if not self.disable_poe_port(port):
            return False
        time.sleep(RESTART_SETTLE_SECONDS)
        return self.enable_poe_port(port)
