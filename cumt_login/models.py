from dataclasses import dataclass
from urllib.parse import quote

DEFAULT_GATEWAY_HOST = "10.2.5.251:801"

LOGIN_URL_TEMPLATE = (
    "http://{host}/eportal/?c=Portal&a=login&login_method=1"
    "&user_account={account}%40{operator}&user_password={password}"
)


def mask_value(value: str, keep: int = 2) -> str:
    if not value:
        return ""
    if len(value) <= keep * 2:
        return "*" * len(value)
    return f"{value[:keep]}***{value[-keep:]}"


@dataclass(frozen=True)
class LoginRequest:
    """Credentials for the portal, combined into one fixed login URL."""

    account: str
    operator: str
    password: str
    gateway_host: str = DEFAULT_GATEWAY_HOST

    def _format(self, password: str) -> str:
        return LOGIN_URL_TEMPLATE.format(
            host=self.gateway_host,
            account=quote(self.account, safe=""),
            operator=quote(self.operator, safe=""),
            password=password,
        )

    @property
    def url(self) -> str:
        return self._format(quote(self.password, safe=""))

    @property
    def redacted_url(self) -> str:
        return self._format(mask_value(self.password))


@dataclass(frozen=True)
class DecodedResult:
    result: str
    msg: str
    ret_code: str


@dataclass(frozen=True)
class ErrorCodeEntry:
    ret_code: str
    raw_info: str
    info_zh: str
    info_en: str


@dataclass(frozen=True)
class Outcome:
    success: bool
    message: str

    def __str__(self) -> str:
        return self.message
