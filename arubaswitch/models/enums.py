"""Wire enumerations of the ArubaOS-Switch REST API.

Values are the exact tokens sent to and received from the switch.
"""

from __future__ import annotations

from enum import Enum


class LEDMode(str, Enum):
    """Locator LED state."""

    OFF = "LS_OFF"
    ON = "LS_ON"
    BLINK = "LS_BLINK"


class BlinkTiming(str, Enum):
    """When a locator LED change takes effect."""

    NOW = "LBT_NOW"


class PortVlanMode(str, Enum):
    """Membership mode of a port in a VLAN."""

    UNTAGGED = "POM_UNTAGGED"
    TAGGED = "POM_TAGGED_STATIC"


class SwitchType(str, Enum):
    STANDALONE = "ST_STANDALONE"
    STACKED = "ST_STACKED"


class CLIStatus(str, Enum):
    """CLI command status. Anything but ``SUCCESS`` is a failure."""

    SUCCESS = "CCS_SUCCESS"


class PoEDeliveryState(str, Enum):
    """PoE power delivery state of a port.

    ``DISABLE`` when PoE is off, ``SEARCHING`` when enabled but not
    delivering, ``DELIVERING`` when powering a device, and one of the fault
    states when the port is failing.
    """

    DISABLE = "PPDS_DISABLE"
    SEARCHING = "PPDS_SEARCHING"
    DELIVERING = "PPDS_DELIVERING"
    FAULT = "PPDS_FAULT"
    TEST = "PPDS_TEST"
    OTHER_FAULT = "PPDS_OTHER_FAULT"

    @property
    def is_fault(self) -> bool:
        return self in (PoEDeliveryState.FAULT, PoEDeliveryState.TEST, PoEDeliveryState.OTHER_FAULT)


class IPAddressVersion(str, Enum):
    IPV4 = "IAV_IP_V4"
    IPV6 = "IAV_IP_V6"
