"""MAC address table and ARP table lookups."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from loguru import logger

from arubaswitch._util import normalize_mac, parse_ip
from arubaswitch.cache import CacheKey
from arubaswitch.exceptions import ApiError
from arubaswitch.managers.base import BaseManager

NOT_FOUND = 404

T = TypeVar("T")


class TablesManager(BaseManager):
    """Forwarding (MAC) and neighbour (ARP) tables.

    Single-entry lookups return None (or ``[]``) when the switch answers
    404 for an unknown address. Any other API error, e.g. an expired
    session, propagates.
    """

    def _lookup(self, what: str, fetch: Callable[[], T], missing: T) -> T:
        try:
            return fetch()
        except ApiError as e:
            if e.status_code != NOT_FOUND:
                raise
            logger.debug(f"{what} not found: {e}")
            return missing

    def get_mac_table(self) -> list[dict[str, Any]]:
        return self._get_list("/mac-table", "mac_table_entry_element")

    def get_mac_address_info(self, mac: str) -> dict[str, Any] | None:
        mac = normalize_mac(mac)
        return self._lookup(f"MAC {mac}", lambda: self._transport.get(f"/mac-table/{mac}").payload, None)

    def get_arp_table(self) -> list[dict[str, Any]]:
        """ARP table (cached)."""
        return self._cached(CacheKey.ARP_TABLE, lambda: self._get_list("/arp-table", "arp_table_entry_element"))

    def get_arp_by_ip(self, ip: str) -> dict[str, Any] | None:
        address = parse_ip(ip)
        return self._lookup(
            f"ARP entry for {address}", lambda: self._transport.get(f"/arp-table/{address}").payload, None
        )

    def get_arp_by_mac(self, mac: str) -> dict[str, Any] | None:
        mac = normalize_mac(mac)
        return self._lookup(
            f"ARP entry for {mac}", lambda: self._transport.get(f"/arp-table/mac-address/{mac}").payload, None
        )

    def get_arp_by_vlan(self, vlan_id: int) -> list[dict[str, Any]]:
        vlan_id = int(vlan_id)
        return self._lookup(
            f"ARP entries for VLAN {vlan_id}",
            lambda: self._get_list(f"/arp-table/vlan/{vlan_id}", "arp_table_entry_element"),
            [],
        )
