"""Input format helpers shared by the managers."""

from __future__ import annotations

import ipaddress
import re

from arubaswitch.exceptions import PortError

_MAC_HEX_RE = re.compile(r"^[0-9a-fA-F]{12}$")
_MAC_SEPARATED_RE = re.compile(r"^[0-9a-fA-F]{2}([:-])(?:[0-9a-fA-F]{2}\1){4}[0-9a-fA-F]{2}$")
_MAC_ARUBA_RE = re.compile(r"^[0-9a-fA-F]{6}-[0-9a-fA-F]{6}$")
_PORT_ID_RE = re.compile(r"^[A-Za-z0-9/_.-]+$")


def normalize_mac(mac: str) -> str:
    """Return ``mac`` in the ``xxxxxx-xxxxxx`` form the switch expects.

    Accepts ``aabbcc-ddeeff``, ``aa:bb:cc:dd:ee:ff``, ``aa-bb-cc-dd-ee-ff``
    and bare ``aabbccddeeff``.

    Raises:
        ValueError: If ``mac`` is none of the above.
    """
    mac = mac.strip()
    if _MAC_ARUBA_RE.match(mac):
        return mac.lower()
    if _MAC_SEPARATED_RE.match(mac):
        digits = re.sub(r"[:-]", "", mac)
    elif _MAC_HEX_RE.match(mac):
        digits = mac
    else:
        raise ValueError(f"Invalid MAC address: {mac!r}")
    digits = digits.lower()
    return f"{digits[:6]}-{digits[6:]}"


def parse_ip(ip: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    """Parse an IP address string, raising ``ValueError`` on bad input."""
    try:
        return ipaddress.ip_address(ip.strip())
    except ValueError as e:
        raise ValueError(f"Invalid IP address: {ip!r}") from e


def validate_port_id(port: str | int) -> str:
    """Return ``port`` as the string id used in URLs (e.g. ``"1/1"``, ``"A5"``)."""
    port_id = str(port).strip()
    if not port_id or not _PORT_ID_RE.match(port_id):
        raise PortError(f"Invalid port id: {port!r}")
    return port_id
