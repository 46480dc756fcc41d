"""Exception hierarchy for ArubaOS-Switch API access."""


class SwitchError(Exception):
    """Base exception for all switch API errors."""


class InvalidConfig(SwitchError):
    """Configuration rejected at construction or assignment."""


class AuthenticationError(SwitchError):
    """Login did not yield a session cookie."""


class TransportError(SwitchError):
    """Connection, timeout or other I/O failure below the HTTP layer."""


class ProtocolError(SwitchError):
    """Response body is not the JSON envelope the API promises."""


class ApiError(SwitchError):
    """Well-formed response carrying an in-band error message."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class PreconditionError(SwitchError):
    """Requested change conflicts with the current switch state."""


class PostconditionError(SwitchError):
    """A multi-step change reported no error but did not converge."""


class VLANError(SwitchError):
    """A step of a VLAN/port association change failed."""


class PortError(SwitchError):
    """Port identifier or port operation rejected."""
