"""End-to-end tests of the README word pipeline against a fake GitHub."""

import asyncio

import pytest

from readme_analyzer.analyzer import analyze_repository, collect_head_repos
from readme_analyzer.async_client import GitHubAPIError
from readme_analyzer.config import AnalyzerConfig
from readme_analyzer.types import ReadmeStatus

from helpers import FakeGitHubClient, pages, pull, readme_payload

PULLS = "/repos/owner/target/pulls"


def _config(**overrides):
    values = {"owner": "owner", "repo": "target", "token": "t", "concurrency": 2}
    values.update(overrides)
    return AnalyzerConfig(**values)


def run(coro):
    return asyncio.run(coro)


class TestCollectHeadRepos:
    def test_deduplicates_preserving_first_seen_order(self):
        prs = [pull("b/one"), pull("a/two"), pull("b/one"), pull("c/three"), pull("a/two")]
        assert collect_head_repos(prs) == ["b/one", "a/two", "c/three"]

    def test_skips_missing_head_repo(self):
        prs = [
            pull(None),
            {"number": 2},
            {"number": 3, "head": None},
            {"number": 4, "head": {"repo": {}}},
            pull("x/y"),
        ]
        assert collect_head_repos(prs) == ["x/y"]

    def test_many_prs_same_repo(self):
        assert collect_head_repos([pull("x/y", n) for n in range(250)]) == ["x/y"]


class TestAnalyzeRepository:
    def test_single_fetch_per_head_repo(self):
        client = FakeGitHubClient({
            PULLS: pages([pull("x/y", 1), pull("x/y", 2)]),
            "/repos/x/y/readme": readme_payload("Go Go gopher!"),
        })

        result = run(analyze_repository(client, _config()))

        assert dict(result.word_counts) == {"go": 2, "gopher": 1}
        assert client.paths().count("/repos/x/y/readme") == 1
        assert result.pull_request_count == 2
        assert result.head_repos == ("x/y",)

    def test_accumulates_across_readmes_and_skips_failures(self):
        client = FakeGitHubClient({
            PULLS: pages(
                [pull("a/one"), pull("b/two"), pull("c/three")],
                [pull("d/four"), pull("a/one")],
            ),
            "/repos/a/one/readme": readme_payload("Lotto game README"),
            "/repos/b/two/readme": readme_payload("lotto numbers"),
            # c/three has no README (404 from the fake)
            "/repos/d/four/readme": GitHubAPIError("Request to /repos/d/four/readme failed"),
        })

        result = run(analyze_repository(client, _config()))

        assert result.word_counts == {"lotto": 2, "game": 1, "readme": 1, "numbers": 1}
        assert result.head_repos == ("a/one", "b/two", "c/three", "d/four")
        assert [o.status for o in result.outcomes] == [
            ReadmeStatus.FOUND,
            ReadmeStatus.FOUND,
            ReadmeStatus.NOT_FOUND,
            ReadmeStatus.FAILED,
        ]
        assert result.status_counts() == {
            ReadmeStatus.FOUND: 2,
            ReadmeStatus.NOT_FOUND: 1,
            ReadmeStatus.FAILED: 1,
        }

    def test_pull_request_listing_error_propagates(self):
        client = FakeGitHubClient({PULLS: GitHubAPIError("GitHub API error 500", status=500)})
        with pytest.raises(GitHubAPIError):
            run(analyze_repository(client, _config()))
        assert not any(path.endswith("/readme") for path in client.paths())

    def test_all_prs_listed_before_first_readme(self):
        client = FakeGitHubClient({
            PULLS: pages([pull("a/one")], [pull("b/two")]),
            "/repos/a/one/readme": readme_payload("alpha"),
            "/repos/b/two/readme": readme_payload("beta"),
        })

        run(analyze_repository(client, _config()))

        paths = client.paths()
        last_listing = max(i for i, p in enumerate(paths) if p == PULLS)
        first_readme = min(i for i, p in enumerate(paths) if p.endswith("/readme"))
        assert last_listing < first_readme

    def test_callbacks(self):
        client = FakeGitHubClient({
            PULLS: pages([pull("a/one"), pull("b/two"), pull("c/three")]),
            "/repos/a/one/readme": readme_payload("alpha"),
        })
        seen = {"prs": None, "repos": None, "batches": [], "done": []}

        run(analyze_repository(
            client,
            _config(concurrency=2),
            on_pull_requests=lambda n: seen.update(prs=n),
            on_head_repos=lambda repos: seen.update(repos=list(repos)),
            on_batch_start=lambda *r: seen["batches"].append(r),
            on_readme_done=lambda o: seen["done"].append(o.full_name),
        ))

        assert seen["prs"] == 3
        assert seen["repos"] == ["a/one", "b/two", "c/three"]
        assert seen["batches"] == [(1, 2, 3), (3, 3, 3)]
        assert sorted(seen["done"]) == ["a/one", "b/two", "c/three"]

    def test_no_pull_requests(self):
        client = FakeGitHubClient({PULLS: pages()})
        result = run(analyze_repository(client, _config()))
        assert result.pull_request_count == 0
        assert result.word_counts == {}
        assert result.outcomes == ()
