"""Domain operation groups, each sharing the client's transport and cache."""

from arubaswitch.managers.base import BaseManager
from arubaswitch.managers.poe import PoEManager
from arubaswitch.managers.port import PortManager
from arubaswitch.managers.system import SystemManager
from arubaswitch.managers.tables import TablesManager
from arubaswitch.managers.vlan import VLANManager

__all__ = [
    "BaseManager",
    "VLANManager",
    "PortManager",
    "PoEManager",
    "SystemManager",
    "TablesManager",
]
