"""
User lookup client used by the order ledger.

A lookup answers one of three things: the user exists (FOUND), the directory
says it does not (NOT_FOUND), or the directory could not give an answer
(UNREACHABLE). The last two are kept apart so a directory outage is never
reported to callers as a missing user.
"""

import enum
import logging
from typing import Optional
from urllib.parse import quote

import requests

from microservices.http_client import HttpClient
from microservices.models import User

logger = logging.getLogger(__name__)


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"


class LookupResult:
    def __init__(self, status: LookupStatus, user: Optional[User] = None, reason: str = None):
        self.status = status
        self.user = user
        self.reason = reason

    @classmethod
    def found_user(cls, user: User) -> "LookupResult":
        return cls(LookupStatus.FOUND, user=user)

    @classmethod
    def missing(cls) -> "LookupResult":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def unreachable_because(cls, reason: str) -> "LookupResult":
        return cls(LookupStatus.UNREACHABLE, reason=reason)

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def not_found(self) -> bool:
        return self.status is LookupStatus.NOT_FOUND

    @property
    def unreachable(self) -> bool:
        return self.status is LookupStatus.UNREACHABLE

    def __repr__(self):
        return f"LookupResult({self.status.value}, user={self.user!r}, reason={self.reason!r})"


class UserLookupClient:
    """Asks the user directory whether a user exists. No retries, no caching."""

    def __init__(self, http_client: HttpClient):
        self.http = http_client

    @classmethod
    def from_config(cls, config) -> "UserLookupClient":
        return cls(HttpClient(config["USER_SERVICE_URL"], timeout=config["USER_SERVICE_TIMEOUT"]))

    def lookup(self, user_id: str) -> LookupResult:
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValueError("user_id must be a non-empty string")

        path = f"/users/{quote(user_id, safe='')}"
        try:
            response = self.http.get(path)
        except requests.exceptions.Timeout:
            logger.warning(f"User service timed out after {self.http.timeout}s looking up {user_id!r}")
            return LookupResult.unreachable_because("timeout")
        except requests.exceptions.RequestException as e:
            logger.error(f"Error reaching user service: {e}")
            return LookupResult.unreachable_because(f"connection error: {e.__class__.__name__}")

        if response.status_code == 404:
            logger.info(f"User {user_id!r} not found")
            return LookupResult.missing()

        if not 200 <= response.status_code < 300:
            logger.warning(f"User service returned {response.status_code} for {path}")
            return LookupResult.unreachable_because(f"status {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            logger.warning(f"User service returned a non-JSON body for {path}")
            return LookupResult.unreachable_because("invalid response body")

        payload = _user_payload(body)
        if not payload:
            logger.info(f"User {user_id!r} not found (empty payload)")
            return LookupResult.missing()

        try:
            user = User.from_dict(payload)
        except (KeyError, TypeError, AttributeError):
            logger.warning(f"User service returned a malformed user for {path}: {payload!r}")
            return LookupResult.unreachable_because("invalid response body")

        logger.debug(f"User {user_id!r} found")
        return LookupResult.found_user(user)

    def close(self):
        self.http.close()


def _user_payload(body):
    """Pull the user object out of an envelope, or accept a bare user object."""
    if not isinstance(body, dict):
        return None
    if "success" in body or "data" in body:
        if body.get("success") is False:
            return None
        return body.get("data")
    return body
