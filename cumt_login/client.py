"""HTTP side of a login attempt against the ePortal gateway."""

import logging
from typing import Optional, Sequence

import requests

from .decoder import decode_envelope
from .errors import TransportError
from .models import DecodedResult, ErrorCodeEntry, LoginRequest, Outcome
from .resolver import resolve_outcome

logger = logging.getLogger("cumt_login.client")


class PortalClient:
    """Sends the fixed login GET and classifies the gateway's reply."""

    def __init__(
        self,
        login_request: LoginRequest,
        error_table: Sequence[ErrorCodeEntry],
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.login_request = login_request
        self.error_table = error_table
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def session(self) -> requests.Session:
        return self._session

    def fetch(self) -> DecodedResult:
        try:
            response = self._session.get(self.login_request.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"request GET failed: {exc}") from exc

        if response.status_code != 200:
            raise TransportError(
                f"request GET failed with response code {response.status_code}"
            )
        logger.debug("Gateway replied with %d bytes", len(response.content))
        return decode_envelope(response.content)

    def login(self) -> Outcome:
        return resolve_outcome(self.fetch(), self.error_table)

    def close(self) -> None:
        self._session.close()
