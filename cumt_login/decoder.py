import base64
import binascii
import json
from typing import Any, Dict, Iterator, Union

from .errors import DecodeError, MalformedEnvelope
from .models import DecodedResult

FIELDS = ("result", "msg", "ret_code")


def iter_payloads(body: Union[bytes, str]) -> Iterator[bytes]:
    """Yield every ``(...)`` slice that closes the buffer, leftmost first."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    if not body.endswith(b")"):
        raise MalformedEnvelope(f"not expected response format: {body[:80]!r}")

    start = body.find(b"(", 0, len(body) - 1)
    if start == -1:
        raise MalformedEnvelope(f"not expected response format: {body[:80]!r}")
    while start != -1:
        yield body[start + 1:-1]
        start = body.find(b"(", start + 1, len(body) - 1)


def extract_payload(body: Union[bytes, str]) -> Dict[str, Any]:
    """Return the first trailing ``(...)`` group that holds a JSON object.

    Callback names and script prefixes may contain parentheses of their own,
    so later ``(`` positions are tried until one parses.
    """
    error = "no JSON object in envelope"
    for payload in iter_payloads(body):
        try:
            data = json.loads(payload)
        except (ValueError, RecursionError) as exc:
            error = f"invalid JSON payload: {exc}"
            continue
        if isinstance(data, dict):
            return data
        error = f"expected a JSON object, got {type(data).__name__}"
    raise DecodeError(error)


def decode_message(msg: str) -> str:
    """Base64-decode ``msg``, falling back to the raw string."""
    try:
        return base64.b64decode(msg, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return msg


def decode_envelope(body: Union[bytes, str]) -> DecodedResult:
    """Parse the gateway's ``callback({...})`` reply.

    The ``msg`` field is base64 on failed logins only. A ``msg`` that is not
    valid base64 is kept as sent, so the failure itself is still reported.
    """
    data = extract_payload(body)

    values = {}
    for field in FIELDS:
        value = data.get(field)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise DecodeError(f"field {field!r} is not a string: {value!r}")
        values[field] = value

    if values["result"] != "1":
        values["msg"] = decode_message(values["msg"])
    return DecodedResult(**values)
