"""Rich terminal output for the README word analysis."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from .config import AnalyzerConfig, MAX_WORD_WIDTH, MIN_WORD_WIDTH
from .types import AnalysisResult, RankedEntry, ReadmeStatus

console = Console()
err_console = Console(stderr=True)

ELLIPSIS = "…"

_STATUS_LABELS = {
    ReadmeStatus.FOUND: ("found", "green"),
    ReadmeStatus.NOT_FOUND: ("no README", "dim"),
    ReadmeStatus.NO_CONTENT: ("empty", "dim"),
    ReadmeStatus.UNSUPPORTED_ENCODING: ("bad encoding", "yellow"),
    ReadmeStatus.DECODE_ERROR: ("undecodable", "yellow"),
    ReadmeStatus.FAILED: ("failed", "red"),
}


def truncate_word(word: str, width: int) -> str:
    if len(word) <= width:
        return word
    return word[: width - 1] + ELLIPSIS


def word_column_width(entries: list[RankedEntry]) -> int:
    longest = max((len(e.word) for e in entries), default=MIN_WORD_WIDTH)
    return min(MAX_WORD_WIDTH, max(MIN_WORD_WIDTH, longest))


def print_token_help():
    """Explain how to provide a token when none was found."""
    body = Text()
    body.append("This tool makes many GitHub API requests and cannot run\n", style="bright_white")
    body.append("reliably without authentication.\n\n", style="bright_white")
    body.append("1. Create a personal access token:\n", style="cyan")
    body.append("   https://github.com/settings/tokens?type=beta\n\n", style="green")
    body.append("2. Export it (macOS / Linux):\n", style="cyan")
    body.append('   export GITHUB_TOKEN="<your token>"\n\n', style="yellow")
    body.append("3. Or on Windows PowerShell:\n", style="cyan")
    body.append('   setx GITHUB_TOKEN "<your token>"\n\n', style="yellow")
    body.append("Then run again:\n", style="white")
    body.append("   readme-analyzer <repo>", style="green")
    console.print()
    console.print(Panel(body, title="[bold red]GitHub API token required[/bold red]", box=box.ROUNDED))
    console.print()


def print_banner(config: AnalyzerConfig):
    console.print()
    console.print("[bold cyan]GitHub README Word Analyzer[/bold cyan]")
    console.print()
    console.print(f"[bright_white]Target repository:[/bright_white] [bold green]{escape(config.full_name)}[/bold green]")
    if config.token:
        console.print("[bright_white]Auth mode:[/bright_white] [green]token (higher rate limit)[/green]")
    else:
        console.print("[bright_white]Auth mode:[/bright_white] [yellow]anonymous (60 requests/hour)[/yellow]")


def print_quota(remaining: int, limit: int, low: bool):
    style = "yellow" if low else "dim"
    console.print(f"[{style}]API quota: {remaining:,}/{limit:,} requests remaining[/{style}]")


def print_fetching_pull_requests():
    console.print("\n[bright_blue]Fetching pull requests...[/bright_blue]")


def print_pull_request_count(count: int):
    console.print(f"[green]Pull requests loaded:[/green] [bright_white]{count}[/bright_white]")


def print_head_repo_count(head_repos: list[str], concurrency: int):
    console.print(f"\n[bright_white]Unique head repos:[/bright_white] [bright_magenta]{len(head_repos)}[/bright_magenta]")
    console.print(f"\n[bright_blue]Collecting READMEs ({concurrency} at a time)[/bright_blue]")


def print_batch_start(first: int, last: int, total: int):
    console.print(f"\n[bright_blue]> Batch ({first}~{last}/{total})[/bright_blue]")


def print_readme_done(outcome):
    label, style = _STATUS_LABELS[outcome.status]
    console.print(f"  [dim]•[/dim] {escape(outcome.full_name)} [{style}]{label}[/{style}]")


def print_summary(result: AnalysisResult):
    console.print("\n[green]Word frequencies computed.[/green]")
    parts = []
    for status, count in result.status_counts().items():
        label, style = _STATUS_LABELS[status]
        parts.append(f"[{style}]{count} {label}[/{style}]")
    if parts:
        console.print("READMEs: " + ", ".join(parts))


def print_ranking(entries: list[RankedEntry], distinct_words: int, top_n: int):
    """Ranked word table; the first three rows are highlighted."""
    console.print()
    if not entries:
        console.print("[yellow]No words found in any README.[/yellow]")
        return

    width = word_column_width(entries)
    table = Table(
        title=f"[bold]Top {top_n} words[/bold]",
        caption=f"{distinct_words:,} distinct words",
        box=box.SIMPLE,
    )
    table.add_column("#", style="dim", justify="right", width=3)
    table.add_column("word", width=width, no_wrap=True)
    table.add_column("count", style="cyan", justify="right")

    for rank, entry in enumerate(entries, 1):
        style = "bright_yellow" if rank <= 3 else "white"
        table.add_row(f"{rank}.", Text(truncate_word(entry.word, width), style=style), str(entry.count))

    console.print(table)


def print_done():
    console.print("\n[dim]Done.[/dim]")


def print_error(message: str):
    err_console.print(f"\n[bold red]Error:[/bold red] {escape(message)}")
