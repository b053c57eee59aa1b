from enum import Enum
from typing import Optional, Sequence

from .errors import UnclassifiedResult
from .models import DecodedResult, ErrorCodeEntry, Outcome

SUCCESS_MESSAGE = "CUMT校园网登录成功(￣▽￣)~*"
FAILURE_PREFIX = "状态：登录失败 "
NO_MATCH_MESSAGE = (
    "信息：未知错误（没有找到对应的错误信息） Msg_EN: Unknown Error(No known infomation matched)"
)


class ReturnCode(Enum):
    # 0-成功 1帐户密码不对 2IP已经在线 3系统忙 4未知错误
    # 5-REQ_CHALLENGE失败 6-REQ_CHALLENGE超时 7-认证失败 8-认证超时 9-下线失败 10-下线超时 11-其他错误
    BAD_CREDENTIALS = "1"
    ALREADY_ONLINE = "2"
    SYSTEM_BUSY = "3"
    UNKNOWN_ERROR = "4"
    CHALLENGE_FAILED = "5"
    CHALLENGE_TIMEOUT = "6"
    AUTH_FAILED = "7"
    AUTH_TIMEOUT = "8"
    OFFLINE_FAILED = "9"
    OFFLINE_TIMEOUT = "10"
    OTHER_ERROR = "11"
    UNKNOWN = ""

    @classmethod
    def parse(cls, value: str) -> "ReturnCode":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


FAILURE_MESSAGES = {
    ReturnCode.ALREADY_ONLINE: "信息：您已登录校园网(～￣▽￣)～  Msg_EN: IP already online",
    ReturnCode.SYSTEM_BUSY: "信息：系统繁忙，请稍后再试  Msg_EN: System busy, please try again later",
    ReturnCode.UNKNOWN_ERROR: "信息：未知错误  Msg_EN: Unknown Error",
    ReturnCode.CHALLENGE_FAILED: "信息: REQ_CHALLENGE失败  Msg_EN: REQ_CHALLENGE failed",
    ReturnCode.CHALLENGE_TIMEOUT: "信息: REQ_CHALLENGE超时  Msg_EN: REQ_CHALLENGE timeout",
    ReturnCode.AUTH_FAILED: "信息：认证失败  Msg_EN: Authentication failed",
    ReturnCode.AUTH_TIMEOUT: "信息：认证超时  Msg_EN: Authentication timeout",
    ReturnCode.OFFLINE_FAILED: "信息：下线失败  Msg_EN: Offline failed",
    ReturnCode.OFFLINE_TIMEOUT: "信息：下线超时  Msg_EN: Offline timeout",
    ReturnCode.OTHER_ERROR: "信息：其他错误  Msg_EN: Other error",
    ReturnCode.UNKNOWN: "信息：未知错误  Msg_EN: Unknown Error",
}


def find_error_entry(
    error_table: Sequence[ErrorCodeEntry], raw_info: str
) -> Optional[ErrorCodeEntry]:
    for entry in error_table:
        if entry.raw_info == raw_info:
            return entry
    return None


def _credential_failure(msg: str, error_table: Sequence[ErrorCodeEntry]) -> str:
    entry = find_error_entry(error_table, msg)
    if entry is None:
        return NO_MATCH_MESSAGE
    return f"信息：{entry.info_zh} MSG_EN: {entry.info_en}"


def resolve_outcome(
    result: DecodedResult, error_table: Sequence[ErrorCodeEntry]
) -> Outcome:
    """Classify a decoded gateway reply.

    Only ``ret_code`` 1 consults ``error_table``; every other failure code maps
    to a fixed bilingual message and unknown codes fall back to the generic
    one.
    """
    if result.result == "1":
        return Outcome(success=True, message=SUCCESS_MESSAGE)
    if result.result != "0":
        raise UnclassifiedResult(f"unexpected result flag {result.result!r}")

    code = ReturnCode.parse(result.ret_code)
    if code is ReturnCode.BAD_CREDENTIALS:
        detail = _credential_failure(result.msg, error_table)
    else:
        detail = FAILURE_MESSAGES[code]
    return Outcome(success=False, message=FAILURE_PREFIX + detail)
