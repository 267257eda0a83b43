"""Async GitHub client for pull request listing and README retrieval via aiohttp.

All requests of a run share one session. Listing errors propagate to the
caller; README errors are collapsed into a ``ReadmeOutcome``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
from typing import Any

import aiohttp

from .config import ACCEPT, API, API_VERSION, PER_PAGE, REQUEST_TIMEOUT, USER_AGENT
from .types import ReadmeOutcome, ReadmeStatus

log = logging.getLogger(__name__)

EXPECTED_ENCODING = "base64"


class GitHubAPIError(Exception):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class NotFoundError(GitHubAPIError):
    pass


class RateLimitExceeded(GitHubAPIError):
    pass


class AsyncGitHubClient:
    """Thin async wrapper around the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = API,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncGitHubClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": ACCEPT,
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``path`` and decode the JSON body. Raises ``GitHubAPIError``."""
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"
        try:
            async with session.get(url, params=params) as resp:
                body = await resp.text()
                if resp.status == 404:
                    raise NotFoundError(f"Not found: {path}", status=404)
                if resp.status in (403, 429) and resp.headers.get("X-RateLimit-Remaining") == "0":
                    reset = resp.headers.get("X-RateLimit-Reset")
                    raise RateLimitExceeded(
                        f"GitHub rate limit exceeded. Reset at epoch={reset}.",
                        status=resp.status,
                    )
                if resp.status >= 400:
                    raise GitHubAPIError(
                        f"GitHub API error {resp.status} for {path}: {body[:200]}",
                        status=resp.status,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise GitHubAPIError(f"Request to {path} failed: {exc!r}") from exc

        try:
            return json.loads(body)
        except ValueError as exc:
            raise GitHubAPIError(f"Invalid JSON from {path}: {exc}") from exc

    # ── Pagination ───────────────────────────────────────────────

    async def get_paginated(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Fetch pages 1, 2, ... until an empty page and concatenate them.

        Pages are requested one at a time. There is no page cap; the loop ends
        only when the API returns an empty list.
        """
        items: list[Any] = []
        page = 1
        while True:
            p = dict(params or {})
            p["per_page"] = PER_PAGE
            p["page"] = page
            data = await self._request_json(path, p)
            if not isinstance(data, list):
                raise GitHubAPIError(f"Expected list for paginated endpoint {path}, got {type(data).__name__}")
            if not data:
                break
            items.extend(data)
            log.debug("Fetched page %d of %s (%d items)", page, path, len(data))
            page += 1
        return items

    async def list_pull_requests(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self.get_paginated(f"/repos/{owner}/{repo}/pulls", {"state": "all"})

    # ── README ───────────────────────────────────────────────────

    async def fetch_readme_outcome(self, full_name: str) -> ReadmeOutcome:
        """Fetch and decode one README. Never raises for API or decode problems."""
        try:
            data = await self._request_json(f"/repos/{full_name}/readme")
        except NotFoundError:
            log.debug("No README: %s", full_name)
            return ReadmeOutcome(full_name, ReadmeStatus.NOT_FOUND)
        except GitHubAPIError as exc:
            log.warning("README fetch failed: %s (%s)", full_name, exc)
            return ReadmeOutcome(full_name, ReadmeStatus.FAILED, detail=str(exc))

        return decode_readme_payload(full_name, data)

    async def fetch_readme(self, full_name: str) -> str | None:
        outcome = await self.fetch_readme_outcome(full_name)
        return outcome.text


def decode_readme_payload(full_name: str, data: Any) -> ReadmeOutcome:
    """Turn a ``/readme`` response body into text, or an absent outcome."""
    if not isinstance(data, dict) or not data.get("content"):
        return ReadmeOutcome(full_name, ReadmeStatus.NO_CONTENT)

    encoding = data.get("encoding") or EXPECTED_ENCODING
    if encoding != EXPECTED_ENCODING:
        log.warning("Unexpected encoding (%s) - skipping README of %s", encoding, full_name)
        return ReadmeOutcome(full_name, ReadmeStatus.UNSUPPORTED_ENCODING, detail=encoding)

    try:
        # content is wrapped at 60 columns; b64decode drops the newlines
        raw = base64.b64decode(data["content"])
        text = raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        log.warning("Could not decode README of %s: %s", full_name, exc)
        return ReadmeOutcome(full_name, ReadmeStatus.DECODE_ERROR, detail=str(exc))

    return ReadmeOutcome(full_name, ReadmeStatus.FOUND, text=text)
