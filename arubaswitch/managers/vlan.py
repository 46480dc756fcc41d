"""VLAN and VLAN/port association management."""

from __future__ import annotations

from typing import Any, Iterable

from loguru import logger

from arubaswitch._util import validate_port_id
from arubaswitch.cache import CacheKey, Mutation
from arubaswitch.exceptions import PostconditionError, PreconditionError, SwitchError, VLANError
from arubaswitch.managers.base import BaseManager
from arubaswitch.models.enums import PortVlanMode
from arubaswitch.models.records import VlanPortAssociation


def _check_vlan_id(vlan_id: int) -> int:
    vlan_id = int(vlan_id)
    if not 1 <= vlan_id <= 4094:
        raise VLANError(f"Invalid VLAN ID: {vlan_id} (must be 1-4094)")
    return vlan_id


def _fmt(vlans: Iterable[int]) -> str:
    return ", ".join(str(v) for v in vlans) or "-"


class VLANManager(BaseManager):
    """VLAN CRUD and tagged/untagged port membership."""

    # ── VLANs ────────────────────────────────────────────────────────

    def get_vlans(self) -> list[dict[str, Any]]:
        """All VLANs on the switch (cached)."""
        return self._cached(CacheKey.VLANS, self._fetch_vlans)

    def _fetch_vlans(self) -> list[dict[str, Any]]:
        result = self._transport.get("/vlans")
        total = (result.field("collection_result") or {}).get("total_elements_count", 0)
        elements = result.field("vlan_element")
        if total and isinstance(elements, list):
            return elements
        return []

    def get_vlan(self, vlan_id: int) -> dict[str, Any] | None:
        for vlan in self.get_vlans():
            if int(vlan.get("vlan_id", -1)) == int(vlan_id):
                return vlan
        return None

    def create_vlan(self, vlan_id: int, name: str) -> bool:
        """Create a VLAN unless it already exists.

        Returns:
            True if the VLAN exists afterwards, False if the switch echoed a
            different id or name.
        """
        vlan_id = _check_vlan_id(vlan_id)
        if self.get_vlan(vlan_id) is not None:
            logger.debug(f"VLAN {vlan_id} already present, nothing to create")
            return True

        try:
            result = self._transport.post("/vlans", {"vlan_id": vlan_id, "name": name})
        finally:
            self._cache.invalidate(Mutation.CREATE_VLAN)

        if result.field("vlan_id") == vlan_id and result.field("name") == name:
            logger.info(f"Created VLAN {vlan_id} ({name})")
            return True
        logger.warning(f"Create VLAN {vlan_id}: switch echoed {result.payload!r}")
        return False

    def update_vlan(self, vlan_id: int, name: str) -> bool:
        """Rename an existing VLAN. Returns False if the VLAN does not exist."""
        vlan_id = _check_vlan_id(vlan_id)
        if self.get_vlan(vlan_id) is None:
            return False

        try:
            self._transport.post(f"/vlans/{vlan_id}", {"name": name})
        finally:
            self._cache.invalidate(Mutation.UPDATE_VLAN)
        logger.info(f"Renamed VLAN {vlan_id} to {name}")
        return True

    def delete_vlan(self, vlan_id: int) -> bool:
        """Delete a VLAN. A VLAN that does not exist counts as deleted."""
        vlan_id = _check_vlan_id(vlan_id)
        if self.get_vlan(vlan_id) is None:
            return True

        try:
            self._transport.delete(f"/vlans/{vlan_id}")
        finally:
            self._cache.invalidate(Mutation.DELETE_VLAN)
        logger.info(f"Deleted VLAN {vlan_id}")
        return True

    # ── VLAN/port associations ──────────────────────────────────────

    def get_vlans_ports(self) -> list[dict[str, Any]]:
        """Every VLAN/port association (cached)."""
        return self._cached(CacheKey.VLANS_PORTS, lambda: self._get_list("/vlans-ports", "vlan_port_element"))

    def get_vlans_port(self, port: str) -> list[dict[str, Any]]:
        """Associations of one port, tagged and untagged."""
        port = validate_port_id(port)
        return [e for e in self.get_vlans_ports() if str(e.get("port_id")) == port]

    def get_untagged_vlan(self, port: str) -> dict[str, Any] | None:
        for element in self.get_vlans_port(port):
            if VlanPortAssociation.from_element(element).is_untagged:
                return element
        return None

    def get_tagged_vlans(self, port: str) -> list[dict[str, Any]]:
        return [e for e in self.get_vlans_port(port) if VlanPortAssociation.from_element(e).is_tagged]

    def get_vlan_ports(self, vlan_id: int) -> list[dict[str, Any]]:
        """Associations of one VLAN across all ports."""
        return [e for e in self.get_vlans_ports() if int(e.get("vlan_id", -1)) == int(vlan_id)]

    def set_untagged_vlan(self, vlan_id: int, port: str) -> bool:
        """Make ``vlan_id`` the untagged VLAN of ``port``.

        A tagged membership of the same VLAN on that port is removed first.

        Returns:
            True if applied (or already in place), False if the switch echo
            does not mention the requested VLAN or port.

        Raises:
            VLANError: The conflicting tagged membership could not be removed.
        """
        vlan_id = _check_vlan_id(vlan_id)
        port = validate_port_id(port)

        current = self.get_untagged_vlan(port)
        if current is not None and int(current.get("vlan_id", -1)) == vlan_id:
            return True

        try:
            for element in self.get_tagged_vlans(port):
                if int(element.get("vlan_id", -1)) != vlan_id:
                    continue
                context = (
                    f"VLAN {vlan_id} is tagged on port {port} and could not be removed "
                    "before setting it untagged"
                )
                try:
                    result = self._transport.delete(f"/vlans-ports/{vlan_id}-{port}")
                except SwitchError as e:
                    raise VLANError(f"{context}: {e}") from e
                if not result.is_empty:
                    raise VLANError(f"{context}: unexpected response {result.payload!r}")
                break

            result = self._transport.post(
                "/vlans-ports",
                {"vlan_id": vlan_id, "port_id": port, "port_mode": PortVlanMode.UNTAGGED.value},
            )
        finally:
            self._cache.invalidate(Mutation.SET_UNTAGGED_VLAN)

        if result.field("vlan_id") == vlan_id or str(result.field("port_id")) == port:
            logger.info(f"Port {port}: untagged VLAN set to {vlan_id}")
            return True
        return False

    def set_tagged_vlans(self, vlans: Iterable[int], port: str) -> bool:
        """Make the tagged VLANs of ``port`` exactly ``vlans``.

        Missing memberships are added, extra ones removed. Nothing is rolled
        back on failure, so a raised ``VLANError`` may leave the port partly
        changed; its message lists the initial and wanted sets.

        Raises:
            PreconditionError: A requested VLAN is the port's untagged VLAN.
            VLANError: One of the add/remove requests failed.
            PostconditionError: The port does not carry exactly ``vlans``
                after all requests succeeded.
        """
        port = validate_port_id(port)
        wanted = list(dict.fromkeys(_check_vlan_id(v) for v in vlans))

        current: list[int] = []
        for element in self.get_vlans_port(port):
            assoc = VlanPortAssociation.from_element(element)
            if assoc.is_tagged:
                current.append(assoc.vlan_id)
            elif assoc.is_untagged and assoc.vlan_id in wanted:
                raise PreconditionError(
                    f"Cannot set tagged VLAN {assoc.vlan_id} because it is untagged on port {port}"
                )

        to_add = [v for v in wanted if v not in current]
        to_remove = [v for v in current if v not in wanted]
        sets = f"initial configuration: {_fmt(current)}, wanted configuration: {_fmt(wanted)}"

        try:
            for vlan_id in to_add:
                context = f"Cannot set tagged VLAN {vlan_id} on port {port} ({sets})"
                try:
                    result = self._transport.post(
                        "/vlans-ports",
                        {"vlan_id": vlan_id, "port_id": port, "port_mode": PortVlanMode.TAGGED.value},
                    )
                except SwitchError as e:
                    raise VLANError(f"{context}: {e}") from e
                if (
                    result.field("vlan_id") != vlan_id
                    or str(result.field("port_id")) != port
                    or result.field("port_mode") != PortVlanMode.TAGGED.value
                ):
                    raise VLANError(f"{context}: unexpected response {result.payload!r}")

            for vlan_id in to_remove:
                context = f"Cannot remove tagged VLAN {vlan_id} on port {port} ({sets})"
                try:
                    result = self._transport.delete(f"/vlans-ports/{vlan_id}-{port}")
                except SwitchError as e:
                    raise VLANError(f"{context}: {e}") from e
                if not result.is_empty:
                    raise VLANError(f"{context}: unexpected response {result.payload!r}")
        finally:
            self._cache.invalidate(Mutation.SET_TAGGED_VLANS)

        actual = sorted(int(e.get("vlan_id", -1)) for e in self.get_tagged_vlans(port))
        if sorted(wanted) != actual:
            raise PostconditionError(
                f"Changes on port {port} returned no error but do not match: "
                f"wanted tagged VLANs {_fmt(sorted(wanted))} vs real tagged VLANs {_fmt(actual)}"
            )

        logger.info(f"Port {port}: tagged VLANs {_fmt(wanted)} (added {_fmt(to_add)}, removed {_fmt(to_remove)})")
        return True
