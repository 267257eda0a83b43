from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum


class ReadmeStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    NO_CONTENT = "no_content"
    UNSUPPORTED_ENCODING = "unsupported_encoding"
    DECODE_ERROR = "decode_error"
    FAILED = "failed"


@dataclass(frozen=True)
class ReadmeOutcome:
    full_name: str
    status: ReadmeStatus
    text: str | None = None
    detail: str = ""

    @property
    def found(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class RankedEntry:
    word: str
    count: int


@dataclass(frozen=True)
class AnalysisResult:
    target: str
    pull_request_count: int
    head_repos: tuple[str, ...]
    word_counts: Counter[str]
    outcomes: tuple[ReadmeOutcome, ...] = field(default_factory=tuple)

    def status_counts(self) -> dict[ReadmeStatus, int]:
        """Number of head repos per README outcome, in enum order."""
        tally = Counter(o.status for o in self.outcomes)
        return {status: tally[status] for status in ReadmeStatus if tally[status]}
