import logging
from typing import Optional

import requests

DEFAULT_CHECK_URL = "https://baidu.com"

logger = logging.getLogger("cumt_login.probe")


def check_online(
    session: requests.Session,
    check_url: str = DEFAULT_CHECK_URL,
    timeout: Optional[float] = None,
) -> bool:
    try:
        response = session.get(check_url, timeout=timeout)
    except requests.RequestException as exc:
        logger.debug("Connectivity probe %s failed: %s", check_url, exc)
        return False

    if response.status_code != 200:
        logger.debug("Connectivity probe %s returned status=%s", check_url, response.status_code)
        return False
    return True
