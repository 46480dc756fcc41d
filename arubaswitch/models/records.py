"""Typed records for the few response fields the client reasons about.

Everything else is passed through as the decoded JSON dict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from arubaswitch.models.enums import PortVlanMode


@dataclass
class Banner:
    """Decoded login banners."""

    motd: str = ""
    exec: str = ""


@dataclass(frozen=True)
class VlanPortAssociation:
    """One ``vlan_port_element`` entry."""

    vlan_id: int
    port_id: str
    port_mode: PortVlanMode | str

    @classmethod
    def from_element(cls, element: dict[str, Any]) -> VlanPortAssociation:
        mode = element.get("port_mode", "")
        try:
            mode = PortVlanMode(mode)
        except ValueError:
            pass
        return cls(vlan_id=int(element.get("vlan_id", 0)), port_id=str(element.get("port_id", "")), port_mode=mode)

    @property
    def is_tagged(self) -> bool:
        return self.port_mode is PortVlanMode.TAGGED

    @property
    def is_untagged(self) -> bool:
        return self.port_mode is PortVlanMode.UNTAGGED
