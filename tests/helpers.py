from __future__ import annotations

import base64
from typing import Any

from readme_analyzer.async_client import AsyncGitHubClient, NotFoundError


class FakeGitHubClient(AsyncGitHubClient):
    """Serves canned JSON per path instead of talking to GitHub.

    A route value may be a payload, an exception instance to raise, or a
    callable taking the request params and returning either of those.
    Unknown paths behave like a 404.
    """

    def __init__(self, routes: dict[str, Any] | None = None, **kwargs):
        super().__init__(token="test-token", **kwargs)
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def _request_json(self, path, params=None):
        self.calls.append((path, dict(params or {})))
        if path not in self.routes:
            raise NotFoundError(f"Not found: {path}", status=404)
        value = self.routes[path]
        if callable(value):
            value = value(params or {})
        if isinstance(value, BaseException):
            raise value
        return value

    def paths(self) -> list[str]:
        return [path for path, _ in self.calls]


def readme_payload(text: str) -> dict[str, str]:
    encoded = base64.encodebytes(text.encode("utf-8")).decode("ascii")
    return {"content": encoded, "encoding": "base64"}


def pages(*page_items: list) -> Any:
    """Route serving ``page_items[n - 1]`` for page n and [] afterwards."""
    def _serve(params):
        page = params["page"]
        return page_items[page - 1] if page <= len(page_items) else []
    return _serve


def pull(full_name: str | None, number: int = 1) -> dict[str, Any]:
    if full_name is None:
        return {"number": number, "head": {"repo": None}}
    return {"number": number, "head": {"repo": {"full_name": full_name}}}
