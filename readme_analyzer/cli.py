#!/usr/bin/env python3
"""README Word Analyzer CLI - most frequent words in PR head repo READMEs."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rich.logging import RichHandler

from . import display
from .analyzer import analyze_repository
from .async_client import AsyncGitHubClient, GitHubAPIError
from .config import (
    AnalyzerConfig,
    CONCURRENCY,
    DEFAULT_OWNER,
    DEFAULT_REPO,
    LOW_QUOTA_THRESHOLD,
    REQUEST_TIMEOUT,
    TOP_N,
    resolve_token,
)
from .github_api import GitHubClient, InvalidTokenError
from .ranking import rank_words
from .types import AnalysisResult

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readme-analyzer",
        description=(
            f"Count the most frequent words in the READMEs of every repository that"
            f" opened a pull request against {DEFAULT_OWNER}/<repo>."
        ),
    )
    parser.add_argument(
        "repo", nargs="?", default=DEFAULT_REPO,
        help=f"Repository name under {DEFAULT_OWNER} (default: {DEFAULT_REPO})",
    )
    parser.add_argument(
        "--token", default=None,
        help="GitHub token (or set GITHUB_TOKEN / GH_TOKEN).",
    )
    parser.add_argument(
        "--top", type=int, default=TOP_N,
        help=f"Number of words to show (default: {TOP_N})",
    )
    parser.add_argument(
        "--concurrency", type=_positive_int, default=CONCURRENCY,
        help=f"READMEs fetched at the same time (default: {CONCURRENCY})",
    )
    parser.add_argument(
        "--timeout", type=_positive_float, default=REQUEST_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT:g})",
    )
    parser.add_argument(
        "--no-quota-check", action="store_true", default=False,
        help="Skip the token/rate-limit check before the run",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="More log output (-v info, -vv debug)",
    )
    return parser


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {number:g}")
    return number


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=display.err_console, show_path=False)],
        force=True,
    )


def check_quota(config: AnalyzerConfig) -> None:
    """Raises ``InvalidTokenError`` if the token is rejected; other failures only warn."""
    client = GitHubClient(config.token, timeout=config.timeout_s)
    try:
        remaining, limit = client.check_rate_limit()
    except InvalidTokenError:
        raise
    except GitHubAPIError as e:
        log.warning("Could not check the rate limit: %s", e)
        return
    finally:
        client.close()

    low = remaining < LOW_QUOTA_THRESHOLD
    display.print_quota(remaining, limit, low)
    if low:
        log.warning("Only %d API requests left; some READMEs may fail to load.", remaining)


async def run_analysis(config: AnalyzerConfig) -> AnalysisResult:
    async with AsyncGitHubClient(token=config.token, timeout=config.timeout_s) as client:
        display.print_fetching_pull_requests()
        return await analyze_repository(
            client,
            config,
            on_pull_requests=display.print_pull_request_count,
            on_head_repos=lambda repos: display.print_head_repo_count(repos, config.concurrency),
            on_batch_start=display.print_batch_start,
            on_readme_done=display.print_readme_done,
        )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    try:
        return _main_inner(argv)
    except KeyboardInterrupt:
        display.console.print("\n[yellow]Cancelled.[/yellow]")
        return 130


def _main_inner(argv: list[str] | None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    token = resolve_token(args.token)
    if not token:
        display.print_token_help()
        return 1

    config = AnalyzerConfig(
        owner=DEFAULT_OWNER,
        repo=args.repo,
        token=token,
        concurrency=args.concurrency,
        top_n=args.top,
        timeout_s=args.timeout,
    )
    display.print_banner(config)

    try:
        if not args.no_quota_check:
            check_quota(config)
        result = asyncio.run(run_analysis(config))
    except InvalidTokenError as e:
        display.print_error(f"{e}. Check GITHUB_TOKEN.")
        return 1
    except GitHubAPIError as e:
        display.print_error(f"Failed to list pull requests of {config.full_name}: {e}")
        return 1
    except Exception:
        display.print_error("Unexpected failure during the run:")
        display.err_console.print_exception()
        return 1

    display.print_summary(result)
    display.print_ranking(
        rank_words(result.word_counts, config.top_n),
        distinct_words=len(result.word_counts),
        top_n=config.top_n,
    )
    display.print_done()
    return 0


if __name__ == "__main__":
    sys.exit(main())
