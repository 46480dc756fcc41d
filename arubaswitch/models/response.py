"""Decoded response of a single REST call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResultKind(Enum):
    OK = "ok"
    EMPTY = "empty"


@dataclass(frozen=True)
class ApiResult:
    """Outcome of a successful request: a JSON payload, or no body at all.

    In-band API errors never become an ``ApiResult``; the transport raises
    :class:`~arubaswitch.exceptions.ApiError` for them.
    """

    kind: ResultKind
    payload: Any = None

    @classmethod
    def ok(cls, payload: Any) -> ApiResult:
        return cls(ResultKind.OK, payload)

    @classmethod
    def empty(cls) -> ApiResult:
        return cls(ResultKind.EMPTY)

    @property
    def is_empty(self) -> bool:
        return self.kind is ResultKind.EMPTY

    def field(self, name: str, default: Any = None) -> Any:
        """Return ``payload[name]`` if the payload is an object, else ``default``."""
        if isinstance(self.payload, dict):
            return self.payload.get(name, default)
        return default
