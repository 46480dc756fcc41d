"""Data models for the ArubaOS-Switch API."""

from arubaswitch.models.enums import (
    BlinkTiming,
    CLIStatus,
    IPAddressVersion,
    LEDMode,
    PoEDeliveryState,
    PortVlanMode,
    SwitchType,
)
from arubaswitch.models.records import Banner, VlanPortAssociation
from arubaswitch.models.response import ApiResult, ResultKind

__all__ = [
    "ApiResult",
    "ResultKind",
    "Banner",
    "VlanPortAssociation",
    "LEDMode",
    "BlinkTiming",
    "PortVlanMode",
    "SwitchType",
    "CLIStatus",
    "PoEDeliveryState",
    "IPAddressVersion",
]
