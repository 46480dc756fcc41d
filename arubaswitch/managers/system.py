"""System status, banner, locator LED, ping and CLI execution."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from loguru import logger

from arubaswitch._util import parse_ip
from arubaswitch.exceptions import ProtocolError
from arubaswitch.managers.base import BaseManager
from arubaswitch.models.enums import BlinkTiming, CLIStatus, IPAddressVersion, LEDMode, SwitchType
from arubaswitch.models.records import Banner

# CLI commands (e.g. config generation) may run well past the normal timeout.
CLI_EXTRA_TIMEOUT_MS = 10000
LED_MAX_MINUTES = 1440


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


def _b64decode(data: str | None, what: str) -> str:
    if not data:
        return ""
    try:
        return base64.b64decode("".join(data.split()), validate=True).decode(errors="replace")
    except (binascii.Error, ValueError) as e:
        raise ProtocolError(f"{what} is not valid base64") from e


class SystemManager(BaseManager):
    """Switch-wide operations."""

    def get_system_status(self) -> dict[str, Any]:
        return self._transport.get("/system/status").payload or {}

    def get_switch_status(self) -> dict[str, Any]:
        """Hardware/stacking status from ``/system/status/switch``."""
        return self._transport.get("/system/status/switch").payload or {}

    def get_switch_type(self) -> SwitchType | None:
        try:
            return SwitchType(self.get_switch_status().get("switch_type"))
        except ValueError:
            return None

    def get_global_info(self) -> dict[str, Any]:
        return self._transport.get("/system/status/global_info").payload or {}

    def get_stack_members(self) -> list[dict[str, Any]]:
        return self._get_list("/system/status/members", "stack_member_element")

    # ── banner ──────────────────────────────────────────────────────

    def get_banner(self) -> Banner:
        result = self._transport.get("/banner")
        return Banner(
            motd=_b64decode(result.field("motd_base64_encoded"), "motd banner"),
            exec=_b64decode(result.field("exec_base64_encoded"), "exec banner"),
        )

    def set_banner(self, motd: str | None = None, exec_: str | None = None) -> bool:
        """Replace the MOTD and/or exec banner; None leaves a banner untouched."""
        wanted: dict[str, str] = {}
        if motd is not None:
            wanted["motd_base64_encoded"] = motd
        if exec_ is not None:
            wanted["exec_base64_encoded"] = exec_
        if not wanted:
            return True

        result = self._transport.put("/banner", {field: _b64encode(text) for field, text in wanted.items()})
        if isinstance(result.payload, dict):
            for field, text in wanted.items():
                if field in result.payload and _b64decode(result.payload[field], field) != text:
                    return False
        logger.info("Banner updated")
        return True

    # ── locator LED ─────────────────────────────────────────────────

    def blink_led_locator(self, mode: LEDMode | str, duration: int = 30) -> dict[str, Any] | bool:
        """Switch the locator LED on, off or blinking for ``duration`` minutes.

        Raises:
            ValueError: ``duration`` outside 1-1440 or unknown ``mode``.
        """
        if not 1 <= duration <= LED_MAX_MINUTES:
            raise ValueError(f"duration is invalid, must be between 1 and {LED_MAX_MINUTES}")
        mode = LEDMode(mode)
        body = {
            "led_blink_status": mode.value,
            "when": BlinkTiming.NOW.value,
            "duration_in_minutes": duration,
        }
        result = self._transport.post("/locator-led-blink", body)
        return True if result.is_empty else result.payload

    # ── diagnostics ─────────────────────────────────────────────────

    def ping(self, ip: str, timeout_seconds: int = 1) -> dict[str, Any]:
        """Ping ``ip`` from the switch and return the raw result."""
        address = parse_ip(ip)
        version = IPAddressVersion.IPV4 if address.version == 4 else IPAddressVersion.IPV6
        body = {
            "destination": {"ip_address": {"version": version.value, "octets": str(address)}},
            "timeout_in_seconds": timeout_seconds,
        }
        return self._transport.post("/ping", body).payload or {}

    def cli(self, command: str) -> str | None:
        """Run a CLI command and return its decoded output, or None if it failed."""
        timeout_ms = self._transport.config.timeout_ms + CLI_EXTRA_TIMEOUT_MS
        result = self._transport.post("/cli", {"cmd": command}, timeout_ms=timeout_ms)
        if result.field("status") == CLIStatus.SUCCESS.value:
            return _b64decode(result.field("result_base64_encoded"), "CLI result")
        logger.debug(f"CLI command {command!r} returned status {result.field('status')!r}")
        return None

    def get_running_config(self) -> str | None:
        return self.cli("show running-config")
