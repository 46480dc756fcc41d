"""Connection configuration for an ArubaOS-Switch."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from arubaswitch.exceptions import InvalidConfig

_LABEL_RE = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?$")


class TLSHostVerification(str, Enum):
    """How strictly the server certificate must match the hostname."""

    STRICT = "strict"
    OFF = "off"


def is_valid_domain(hostname: str) -> bool:
    """Check ``hostname`` is a syntactically valid domain name (IPv4 literals pass)."""
    if not hostname or len(hostname) > 253:
        return False
    name = hostname[:-1] if hostname.endswith(".") else hostname
    if not name:
        return False
    return all(_LABEL_RE.match(label) for label in name.split("."))


class SwitchConfig(BaseModel):
    """Endpoint, credentials and transport tunables for one switch.

    The hostname is validated on construction and on assignment; anything
    that is not a domain name raises :class:`InvalidConfig`. Setters return
    the same instance so calls can be chained::

        config = SwitchConfig("switch01.example.net", "api", "secret").set_timeout(10000)
    """

    model_config = ConfigDict(validate_assignment=True)

    hostname: str
    username: str
    password: str = Field(repr=False)
    timeout_ms: int = Field(default=5000, gt=0)
    verify_tls_peer: bool = True
    verify_tls_host: TLSHostVerification = TLSHostVerification.STRICT
    api_version: str = Field(default="v7", min_length=1)

    def __init__(self, hostname: str | None = None, username: str | None = None, password: str | None = None, **data: Any):
        if hostname is not None:
            data["hostname"] = hostname
        if username is not None:
            data["username"] = username
        if password is not None:
            data["password"] = password
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfig(_summarize(e)) from e

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as e:
            raise InvalidConfig(_summarize(e)) from e

    @field_validator("hostname")
    @classmethod
    def _check_hostname(cls, value: str) -> str:
        if not is_valid_domain(value):
            raise ValueError(f"Invalid hostname provided: {value!r}")
        return value

    # getters

    def get_hostname(self) -> str:
        return self.hostname

    def get_username(self) -> str:
        return self.username

    def get_password(self) -> str:
        return self.password

    def get_timeout(self) -> int:
        """Default request timeout in milliseconds."""
        return self.timeout_ms

    def get_verify_tls_peer(self) -> bool:
        return self.verify_tls_peer

    def get_verify_tls_host(self) -> TLSHostVerification:
        return self.verify_tls_host

    def get_api_version(self) -> str:
        return self.api_version

    # fluent setters

    def set_timeout(self, timeout_ms: int) -> Self:
        self.timeout_ms = timeout_ms
        return self

    def set_verify_tls_peer(self, verify: bool) -> Self:
        self.verify_tls_peer = verify
        return self

    def set_verify_tls_host(self, verify: bool) -> Self:
        """``True`` requires a certificate/hostname match, ``False`` disables it."""
        self.verify_tls_host = TLSHostVerification.STRICT if verify else TLSHostVerification.OFF
        return self

    def set_api_version(self, version: str) -> Self:
        self.api_version = version
        return self

    @property
    def base_url(self) -> str:
        return f"https://{self.hostname}/rest/{self.api_version}"


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "config"
        parts.append(f"{loc}: {err.get('msg', '')}")
    return "; ".join(parts)
