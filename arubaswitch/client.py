"""ArubaOS-Switch session client."""

from __future__ import annotations

from types import TracebackType
from typing import Any, Self

from loguru import logger

from arubaswitch.cache import ResponseCache
from arubaswitch.config import SwitchConfig
from arubaswitch.exceptions import SwitchError
from arubaswitch.managers.poe import PoEManager
from arubaswitch.managers.port import PortManager
from arubaswitch.managers.system import SystemManager
from arubaswitch.managers.tables import TablesManager
from arubaswitch.managers.vlan import VLANManager
from arubaswitch.transport import ArubaRESTTransport


class ArubaSwitch:
    """High-level client for one ArubaOS-Switch REST session.

    Logs in on construction and logs out exactly once on :meth:`close`,
    which the context manager calls on every exit path. The session cookie
    and the response cache are plain mutable state: do not share a client
    between threads, and do not close it while a call is in flight.

    Usage::

        config = SwitchConfig("switch01.example.net", "api", "secret")
        with ArubaSwitch(config) as switch:
            switch.vlan.create_vlan(100, "servers")
            switch.vlan.set_tagged_vlans([100, 200], "1/1")
            print(switch.system.get_running_config())
    """

    def __init__(self, config: SwitchConfig | None = None, **kwargs: Any):
        if config is None:
            config = SwitchConfig(**kwargs)
        self.config = config
        self.cache = ResponseCache()
        self._transport = ArubaRESTTransport(config)
        self._closed = False

        # Lazy-initialized managers
        self._vlan: VLANManager | None = None
        self._port: PortManager | None = None
        self._poe: PoEManager | None = None
        self._system: SystemManager | None = None
        self._tables: TablesManager | None = None

        try:
            self._transport.login()
        except SwitchError:
            self._transport.logout()
            raise

    @property
    def host(self) -> str:
        return self.config.hostname

    @property
    def transport(self) -> ArubaRESTTransport:
        return self._transport

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def vlan(self) -> VLANManager:
        """VLANs and tagged/untagged port membership."""
        if self._vlan is None:
            self._vlan = VLANManager(self._open_transport(), self.cache)
        return self._vlan

    @property
    def port(self) -> PortManager:
        """Port status and enable/disable."""
        if self._port is None:
            self._port = PortManager(self._open_transport(), self.cache)
        return self._port

    @property
    def poe(self) -> PoEManager:
        """Power over Ethernet."""
        if self._poe is None:
            self._poe = PoEManager(self._open_transport(), self.cache)
        return self._poe

    @property
    def system(self) -> SystemManager:
        """System status, banner, LED, ping and CLI."""
        if self._system is None:
            self._system = SystemManager(self._open_transport(), self.cache)
        return self._system

    @property
    def tables(self) -> TablesManager:
        """MAC and ARP tables."""
        if self._tables is None:
            self._tables = TablesManager(self._open_transport(), self.cache)
        return self._tables

    def clear_cache(self) -> None:
        self.cache.clear()

    def close(self) -> None:
        """Log out and drop cached state. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._vlan = None
        self._port = None
        self._poe = None
        self._system = None
        self._tables = None
        self.cache.clear()
        self._transport.logout()
        logger.debug(f"Closed session to {self.host}")

    def _open_transport(self) -> ArubaRESTTransport:
        if self._closed:
            raise SwitchError("Client is closed")
        return self._transport

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.close()
