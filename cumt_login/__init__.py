"""Auto-login daemon for the CUMT campus network portal."""

from .client import PortalClient
from .decoder import decode_envelope
from .errors import (
    ConfigError,
    DecodeError,
    MalformedEnvelope,
    PortalError,
    TransportError,
    UnclassifiedResult,
)
from .models import DecodedResult, ErrorCodeEntry, LoginRequest, Outcome
from .probe import check_online
from .resolver import ReturnCode, find_error_entry, resolve_outcome
from .scheduler import ScheduleCoordinator, next_daily_deadline

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DecodeError",
    "DecodedResult",
    "ErrorCodeEntry",
    "LoginRequest",
    "MalformedEnvelope",
    "Outcome",
    "PortalClient",
    "PortalError",
    "ReturnCode",
    "ScheduleCoordinator",
    "TransportError",
    "UnclassifiedResult",
    "check_online",
    "decode_envelope",
    "find_error_entry",
    "next_daily_deadline",
    "resolve_outcome",
]
