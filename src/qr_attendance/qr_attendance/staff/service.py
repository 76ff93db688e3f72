from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaffAccount:
    """The single staff login configured for this deployment."""

    username: str
    password_hash: str


class StaffAuthService:
    """Use case: staff sign in to manage events, view reports and approve students."""

    def __init__(self, account: StaffAccount):
        self._account = account

    def authenticate(self, username: str, password: str) -> str:
        username = (username or "").strip()
        if not self._account.password_hash:
            raise AuthenticationError("Staff login is not configured")

        try:
            ok = check_password_hash(self._account.password_hash, password or "")
        except ValueError:
            # malformed hash in config
            logger.error("STAFF_PASSWORD_HASH is not a valid werkzeug hash")
            ok = False

        if not ok or not hmac.compare_digest(username, self._account.username):
            logger.warning("staff login failed username=%r", username)
            raise AuthenticationError("Invalid username or password")

        logger.info("staff login username=%s", username)
        return self._account.username
