"""Blocking GitHub client used to check the token and quota before a run."""

import logging
from typing import Optional

import requests

from .async_client import GitHubAPIError
from .config import ACCEPT, API, API_VERSION, REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


class InvalidTokenError(GitHubAPIError):
    pass


class GitHubClient:
    """Handles the few synchronous calls made outside the async pipeline."""

    BASE_URL = API

    def __init__(self, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": ACCEPT,
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def get(self, endpoint: str, params: Optional[dict] = None) -> dict:
        url = f"{self.BASE_URL}{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError(f"Request to {endpoint} failed: {e}")

        if response.status_code == 401:
            raise InvalidTokenError("GitHub rejected the token (401 Bad credentials)", status=401)
        if response.status_code >= 400:
            raise GitHubAPIError(
                f"GitHub API error {response.status_code} for {endpoint}", status=response.status_code
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(f"Invalid JSON from {endpoint}: {e}")

    def check_rate_limit(self) -> tuple[int, int]:
        """Returns (remaining, limit) for core API."""
        data = self.get("/rate_limit")
        core = data.get("resources", {}).get("core", {})
        return core.get("remaining", 0), core.get("limit", 0)

    def close(self):
        self.session.close()
