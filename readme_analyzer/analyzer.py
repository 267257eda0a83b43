"""Pipeline: pull requests → head repos → READMEs → word counts."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Iterable

from .async_client import AsyncGitHubClient
from .batching import BatchCallback, process_in_batches
from .config import AnalyzerConfig
from .text_rules import update_word_counts
from .types import AnalysisResult, ReadmeOutcome

log = logging.getLogger(__name__)


def collect_head_repos(pull_requests: Iterable[dict[str, Any]]) -> list[str]:
    """Unique ``head.repo.full_name`` values, in first-seen order.

    Pull requests whose head repository was deleted (``repo`` is null) or
    that lack the field entirely are skipped.
    """
    seen: dict[str, None] = {}
    for pr in pull_requests:
        head_repo = (pr.get("head") or {}).get("repo")
        if not head_repo:
            continue
        full_name = head_repo.get("full_name")
        if full_name:
            seen.setdefault(full_name, None)
    return list(seen)


async def analyze_repository(
    client: AsyncGitHubClient,
    config: AnalyzerConfig,
    *,
    on_pull_requests: Callable[[int], None] | None = None,
    on_head_repos: Callable[[list[str]], None] | None = None,
    on_batch_start: BatchCallback | None = None,
    on_readme_done: Callable[[ReadmeOutcome], None] | None = None,
) -> AnalysisResult:
    """Run the whole analysis for ``config.owner/config.repo``.

    Errors while listing pull requests propagate. README problems only
    reduce what gets counted.
    """
    pull_requests = await client.list_pull_requests(config.owner, config.repo)
    if on_pull_requests:
        on_pull_requests(len(pull_requests))

    head_repos = collect_head_repos(pull_requests)
    if on_head_repos:
        on_head_repos(head_repos)

    word_counts: Counter[str] = Counter()

    async def _count_readme(full_name: str) -> ReadmeOutcome:
        log.info("Requesting README of %s", full_name)
        outcome = await client.fetch_readme_outcome(full_name)
        if outcome.text is not None:
            update_word_counts(outcome.text, word_counts)
        if on_readme_done:
            on_readme_done(outcome)
        return outcome

    results = await process_in_batches(
        head_repos, config.concurrency, _count_readme, on_batch_start=on_batch_start,
    )

    return AnalysisResult(
        target=config.full_name,
        pull_request_count=len(pull_requests),
        head_repos=tuple(head_repos),
        word_counts=word_counts,
        outcomes=tuple(r for r in results if r is not None),
    )
