"""Loading of the settings file and the gateway error table."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .errors import ConfigError
from .models import DEFAULT_GATEWAY_HOST, ErrorCodeEntry, LoginRequest
from .probe import DEFAULT_CHECK_URL
from .scheduler import DAILY_LOGIN_HOUR, RECONNECT_INTERVAL_SECONDS

DEFAULT_TIMEOUT_SECONDS = 8


@dataclass(frozen=True)
class Settings:
    user_account: str
    user_password: str
    operator: str
    log_file_path: Path
    info_sheet_path: Path
    log_level: str = "INFO"
    gateway_host: str = DEFAULT_GATEWAY_HOST
    check_url: str = DEFAULT_CHECK_URL
    daily_login_hour: int = DAILY_LOGIN_HOUR
    reconnect_interval_seconds: float = RECONNECT_INTERVAL_SECONDS
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS

    @property
    def login_request(self) -> LoginRequest:
        return LoginRequest(
            account=self.user_account,
            operator=self.operator,
            password=self.user_password,
            gateway_host=self.gateway_host,
        )


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc}") from exc


def _resolve_path(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _required(config: Dict[str, Any], key: str) -> str:
    value = config.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"missing or empty setting {key!r}")
    return value


def parse_settings(config: Dict[str, Any], base_dir: Path) -> Settings:
    if not isinstance(config, dict):
        raise ConfigError("settings must be a JSON object")

    try:
        hour = int(config.get("daily_login_hour", DAILY_LOGIN_HOUR))
        interval = float(config.get("reconnect_interval_seconds", RECONNECT_INTERVAL_SECONDS))
        timeout = config.get("http", {}).get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        if timeout is not None:
            timeout = float(timeout)
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"invalid numeric setting: {exc}") from exc

    if not 0 <= hour <= 23:
        raise ConfigError(f"daily_login_hour must be within 0-23, got {hour}")
    if interval <= 0:
        raise ConfigError(f"reconnect_interval_seconds must be positive, got {interval}")
    if timeout is not None and timeout <= 0:
        raise ConfigError(f"http.timeout_seconds must be positive, got {timeout}")

    return Settings(
        user_account=_required(config, "user_account"),
        user_password=_required(config, "user_password"),
        operator=_required(config, "operator"),
        log_file_path=_resolve_path(base_dir, config.get("log_file_path") or "logs"),
        info_sheet_path=_resolve_path(
            base_dir, config.get("info_sheet_path") or "ret_err_info_sheet.json"
        ),
        log_level=str(config.get("log_level", "INFO")).upper(),
        gateway_host=config.get("gateway_host") or DEFAULT_GATEWAY_HOST,
        check_url=config.get("check_url") or DEFAULT_CHECK_URL,
        daily_login_hour=hour,
        reconnect_interval_seconds=interval,
        timeout_seconds=timeout,
    )


def load_settings(path: Union[str, Path]) -> Settings:
    path = Path(path)
    return parse_settings(_read_json(path), path.resolve().parent)


def load_error_table(path: Union[str, Path]) -> Tuple[ErrorCodeEntry, ...]:
    """Read the ``[{ret_code, raw_info, info_zh, info_en}, ...]`` sheet.

    File order is kept, since lookups stop at the first matching ``raw_info``.
    """
    path = Path(path)
    records = _read_json(path)
    if not isinstance(records, list):
        raise ConfigError(f"{path} must contain a JSON array")

    entries = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ConfigError(f"entry {index} of {path} is not an object")
        try:
            entries.append(
                ErrorCodeEntry(
                    ret_code=str(record.get("ret_code", "")),
                    raw_info=str(record["raw_info"]),
                    info_zh=str(record.get("info_zh", "")),
                    info_en=str(record.get("info_en", "")),
                )
            )
        except KeyError as exc:
            raise ConfigError(f"entry {index} of {path} has no {exc} field") from exc
    return tuple(entries)
