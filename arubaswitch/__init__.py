"""ArubaOS-Switch REST API client library.

Provides session-based access to the ArubaOS-Switch REST API (VLAN, port,
PoE, MAC/ARP tables, system status, banner and CLI) with an in-memory
response cache per session.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
    level: str | None = None,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = level or os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from arubaswitch.cache import CacheKey, ResponseCache  # noqa: E402
from arubaswitch.client import ArubaSwitch  # noqa: E402
from arubaswitch.config import SwitchConfig, TLSHostVerification  # noqa: E402
from arubaswitch.exceptions import (  # noqa: E402
    ApiError,
    AuthenticationError,
    InvalidConfig,
    PortError,
    PostconditionError,
    PreconditionError,
    ProtocolError,
    SwitchError,
    TransportError,
    VLANError,
)
from arubaswitch.transport import ArubaRESTTransport  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "ArubaSwitch",
    "ArubaRESTTransport",
    "SwitchConfig",
    "TLSHostVerification",
    "ResponseCache",
    "CacheKey",
    "SwitchError",
    "InvalidConfig",
    "AuthenticationError",
    "TransportError",
    "ProtocolError",
    "ApiError",
    "PreconditionError",
    "PostconditionError",
    "VLANError",
    "PortError",
]
