"""Error taxonomy for a single login attempt."""


class PortalError(Exception):
    """Base class for failures recovered at the attempt boundary."""

    stage = "unknown"


class TransportError(PortalError):
    """Network failure or a non-200 reply from the gateway."""

    stage = "request"


class MalformedEnvelope(PortalError):
    """Response body lacks the trailing ``(...)`` payload."""

    stage = "envelope"


class DecodeError(PortalError):
    """Envelope payload is not the expected JSON object."""

    stage = "decode"


class UnclassifiedResult(PortalError):
    """``result`` flag is neither ``"0"`` nor ``"1"``."""

    stage = "resolve"


class ConfigError(ValueError):
    """Raised when the settings file or the error table cannot be used."""
