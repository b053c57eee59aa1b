#!/usr/bin/env python3
import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
CONFIG_PATH = PROJECT_ROOT / "config" / "settings.json"

from cumt_login.errors import ConfigError  # noqa: E402
from cumt_login.logging_config import setup_logging  # noqa: E402
from cumt_login.models import mask_value  # noqa: E402
from cumt_login.scheduler import ScheduleCoordinator  # noqa: E402
from cumt_login.settings import load_error_table, load_settings  # noqa: E402

logger = logging.getLogger("cumt_autologin")


def parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep this machine logged in to the CUMT campus network."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help=f"settings file (default: {CONFIG_PATH})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Error reading config file: %s", exc)
        return 2

    log_path = setup_logging(settings.log_file_path, log_level=settings.log_level)
    try:
        error_table = load_error_table(settings.info_sheet_path)
    except ConfigError as exc:
        logger.error("Error reading ret_err_info_sheet file: %s", exc)
        return 2

    logger.info(
        "Initialization success! account=%s operator=%s entries=%d log=%s",
        mask_value(settings.user_account),
        settings.operator,
        len(error_table),
        log_path,
    )

    stop_event = threading.Event()
    coordinator = ScheduleCoordinator(
        settings.login_request,
        error_table,
        check_url=settings.check_url,
        daily_hour=settings.daily_login_hour,
        reconnect_interval=settings.reconnect_interval_seconds,
        timeout=settings.timeout_seconds,
        stop_event=stop_event,
    )

    def handle_signal(signum, frame) -> None:
        logger.info("Received signal %s, program will exit...", signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    coordinator.start()
    while not stop_event.wait(1.0):
        pass
    coordinator.join(timeout=1.0)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
