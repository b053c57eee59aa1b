"""Daily and reconnect login loops.

Both loops run in their own daemon thread with their own HTTP session. They
share the login request and the error table, which are never written after
construction, and a stop event used to wake them on shutdown. Nothing else
is shared, so a login made by one loop does not reset the other's timer.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence

import requests

from .client import PortalClient
from .errors import PortalError
from .models import ErrorCodeEntry, LoginRequest, Outcome
from .probe import DEFAULT_CHECK_URL, check_online

DAILY_LOGIN_HOUR = 7
RECONNECT_INTERVAL_SECONDS = 5 * 60

logger = logging.getLogger("cumt_login.scheduler")


def next_daily_deadline(now: datetime, hour: int = DAILY_LOGIN_HOUR) -> datetime:
    deadline = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if now >= deadline:
        deadline += timedelta(days=1)
    return deadline


class ScheduleCoordinator:
    def __init__(
        self,
        login_request: LoginRequest,
        error_table: Sequence[ErrorCodeEntry],
        check_url: str = DEFAULT_CHECK_URL,
        daily_hour: int = DAILY_LOGIN_HOUR,
        reconnect_interval: float = RECONNECT_INTERVAL_SECONDS,
        timeout: Optional[float] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
        clock: Callable[[], datetime] = datetime.now,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.login_request = login_request
        self.error_table = tuple(error_table)
        self.check_url = check_url
        self.daily_hour = daily_hour
        self.reconnect_interval = reconnect_interval
        self.timeout = timeout
        self._session_factory = session_factory
        self._clock = clock
        self._stop = stop_event or threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def new_client(self) -> PortalClient:
        return PortalClient(
            self.login_request,
            self.error_table,
            session=self._session_factory(),
            timeout=self.timeout,
        )

    def attempt_login(self, client: PortalClient) -> Optional[Outcome]:
        logger.info("The url trying to fetch: %s", self.login_request.redacted_url)
        try:
            outcome = client.login()
        except PortalError as exc:
            logger.error(
                "Login attempt against %s failed at %s stage: %s",
                self.login_request.redacted_url,
                exc.stage,
                exc,
            )
            return None

        if outcome.success:
            logger.info(outcome.message)
        else:
            logger.warning(outcome.message)
        return outcome

    def check_and_reconnect(self, client: PortalClient) -> bool:
        """Probe connectivity and log in once if it is down.

        Returns the probe result.
        """
        if check_online(client.session, self.check_url, self.timeout):
            logger.info(
                "Network status check PASS, next check in %s seconds...",
                self.reconnect_interval,
            )
            return True

        logger.info(
            "Network status check FAIL, program will try to reconnect every %s seconds...",
            self.reconnect_interval,
        )
        self.attempt_login(client)
        return False

    def run_reconnect(self) -> None:
        client = self.new_client()
        try:
            while not self._stop.is_set():
                try:
                    self.check_and_reconnect(client)
                except Exception:
                    logger.exception("Reconnect check failed unexpectedly")
                if self._stop.wait(self.reconnect_interval):
                    break
        finally:
            client.close()

    def run_daily_login(self) -> None:
        client = self.new_client()
        try:
            while not self._stop.is_set():
                now = self._clock()
                deadline = next_daily_deadline(now, self.daily_hour)
                logger.info("Will try to login at %s...", deadline.isoformat(sep=" "))
                if self._stop.wait((deadline - now).total_seconds()):
                    break
                try:
                    self.attempt_login(client)
                except Exception:
                    logger.exception("Daily login attempt failed unexpectedly")
        finally:
            client.close()

    def start(self) -> None:
        if self._threads:
            raise RuntimeError("coordinator already started")
        for name, target in (
            ("reconnect", self.run_reconnect),
            ("daily-login", self.run_daily_login),
        ):
            thread = threading.Thread(target=target, name=name, daemon=True)
            thread.start()
            self._threads.append(thread)

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> None:
        for thread in self._threads:
            thread.join(timeout)
