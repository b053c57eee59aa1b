import logging

import pytest
import requests

from cumt_login.models import ErrorCodeEntry, LoginRequest


class StubResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


class StubSession:
    """Replays queued responses or exceptions for ``get`` calls."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        reply = self.replies.pop(0) if self.replies else requests.ConnectionError("no route")
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True


@pytest.fixture(name="login_request")
def fixture_login_request():
    return LoginRequest(account="08201234", operator="telecom", password="s3cretpw")


@pytest.fixture(name="error_table")
def fixture_error_table():
    return (
        ErrorCodeEntry("1", "ldap auth error", "密码错误", "Wrong password"),
        ErrorCodeEntry("1", "userid error1", "账号不存在", "Account does not exist"),
        ErrorCodeEntry("1", "ldap auth error", "重复条目", "Duplicate entry"),
    )


@pytest.fixture(name="restore_root_logger")
def fixture_restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
