"""Configuration constants for the README Word Analyzer."""

from __future__ import annotations

import os
from dataclasses import dataclass

API = "https://api.github.com"
API_VERSION = "2022-11-28"
ACCEPT = "application/vnd.github+json"
USER_AGENT = "readme-word-analyzer"

# Target repository (owner is fixed, repo can be overridden on the CLI)
DEFAULT_OWNER = "woowacourse-precourse"
DEFAULT_REPO = "java-lotto-8"

# GitHub caps list endpoints at 100 items per page
PER_PAGE = 100

# README fetching
CONCURRENCY = 20
REQUEST_TIMEOUT = 30.0

# Report
TOP_N = 50
MAX_WORD_WIDTH = 30
MIN_WORD_WIDTH = 4

# Warn when the core quota drops below this many requests
LOW_QUOTA_THRESHOLD = 100

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


@dataclass(frozen=True)
class AnalyzerConfig:
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    token: str | None = None
    concurrency: int = CONCURRENCY
    top_n: int = TOP_N
    timeout_s: float = REQUEST_TIMEOUT

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def resolve_token(explicit: str | None = None) -> str | None:
    """Token precedence: explicit value, then GITHUB_TOKEN, then GH_TOKEN."""
    if explicit:
        return explicit
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
