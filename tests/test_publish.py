"""
Tests for pull request reconciliation and the Publisher state machine.

Run with:
    pytest tests/test_publish.py -v
"""

import httpx
import pytest

from git_ai_commit.commit import CommitGenerator, CommitRecord
from git_ai_commit.git import DiffCollector, RepositoryStateError
from git_ai_commit.github import GitHubClient, GitHubError
from git_ai_commit.publish import (
    CREATED,
    NO_CHANGES,
    UPDATED,
    PR_BODY_TEMPLATE,
    Publisher,
    PublishState,
    PullRequestTarget,
    append_body,
    reconcile_pull_request,
)

FIX_REPLY = '{"title": "fix(auth): handle expired tokens", "body": ["- fix bug"]}'
RECORD = CommitRecord(title="fix(auth): handle expired tokens", body=("- fix bug",))
TARGET = PullRequestTarget(owner="acme", repo="widgets", head="feature/auth")


def seed_pull(fake_github, number, body, head="feature/auth"):
    fake_github.pulls.append({
        "number": number,
        "title": "existing",
        "body": body,
        "html_url": f"https://github.com/acme/widgets/pull/{number}",
        "head": {"ref": head},
        "base": {"ref": "main"},
    })


# ---------------------------------------------------------------------------
# append_body
# ---------------------------------------------------------------------------

class TestAppendBody:

    def test_appends_on_new_line(self):
        assert append_body("- first", "- second") == "- first\n- second"

    def test_trailing_newlines_collapsed(self):
        assert append_body("- first\n\n", "- second") == "- first\n- second"

    def test_blank_existing_replaced(self):
        assert append_body("  \n", "- second") == "- second"

    def test_empty_addition_keeps_existing(self):
        assert append_body("- first", "") == "- first"


# ---------------------------------------------------------------------------
# reconcile_pull_request
# ---------------------------------------------------------------------------

class TestReconcile:

    def test_creates_when_none_open(self, fake_github):
        outcome = reconcile_pull_request(fake_github.client(), TARGET, RECORD)

        assert outcome.action == CREATED
        assert outcome.number == 1
        assert outcome.url == "https://github.com/acme/widgets/pull/1"
        pr = fake_github.pulls[0]
        assert pr["title"] == RECORD.title
        assert pr["body"] == PR_BODY_TEMPLATE.format(body="- fix bug")
        assert pr["base"]["ref"] == "main"

    def test_updates_existing(self, fake_github):
        seed_pull(fake_github, 7, "## Summary\n\n### Changes\n- earlier work")

        outcome = reconcile_pull_request(fake_github.client(), TARGET, RECORD)

        assert outcome.action == UPDATED
        assert outcome.number == 7
        assert fake_github.pulls[0]["body"].endswith("- earlier work\n- fix bug")
        assert ("POST", "/repos/acme/widgets/pulls") not in fake_github.requests

    def test_null_body_is_replaced(self, fake_github):
        seed_pull(fake_github, 3, None)
        reconcile_pull_request(fake_github.client(), TARGET, RECORD)
        assert fake_github.pulls[0]["body"] == "- fix bug"

    def test_other_branch_prs_ignored(self, fake_github):
        seed_pull(fake_github, 1, "- unrelated", head="feature/other")

        outcome = reconcile_pull_request(fake_github.client(), TARGET, RECORD)

        assert outcome.action == CREATED
        assert fake_github.pulls[0]["body"] == "- unrelated"

    def test_first_of_several_is_updated(self, fake_github):
        seed_pull(fake_github, 4, "- four")
        seed_pull(fake_github, 5, "- five")

        outcome = reconcile_pull_request(fake_github.client(), TARGET, RECORD)

        assert outcome.number == 4
        assert fake_github.pulls[0]["body"] == "- four\n- fix bug"
        assert fake_github.pulls[1]["body"] == "- five"

    def test_second_run_appends_not_duplicates(self, fake_github):
        client = fake_github.client()
        reconcile_pull_request(client, TARGET, RECORD)
        reconcile_pull_request(client, TARGET, RECORD)

        assert len(fake_github.pulls) == 1
        assert fake_github.pulls[0]["body"].endswith("- fix bug\n- fix bug")

    def test_no_commits_between_is_not_an_error(self, fake_github):
        fake_github.create_error = (422, {
            "message": "Validation Failed",
            "errors": [{"resource": "PullRequest", "code": "custom",
                        "message": "No commits between main and feature/auth"}],
        })

        outcome = reconcile_pull_request(fake_github.client(), TARGET, RECORD)

        assert outcome.action == NO_CHANGES
        assert outcome.number is None
        assert outcome.url == "https://github.com/acme/widgets/tree/feature/auth"

    def test_other_validation_error_raises(self, fake_github):
        fake_github.create_error = (422, {"message": "Validation Failed",
                                          "errors": [{"message": "base is invalid"}]})
        with pytest.raises(GitHubError) as exc:
            reconcile_pull_request(fake_github.client(), TARGET, RECORD)
        assert exc.value.status_code == 422
        assert "base is invalid" in exc.value.details

    def test_list_failure_raises(self, fake_github):
        fake_github.list_error = (401, {"message": "Bad credentials"})
        with pytest.raises(GitHubError, match="Bad credentials"):
            reconcile_pull_request(fake_github.client(), TARGET, RECORD)


# ---------------------------------------------------------------------------
# Publisher
# ---------------------------------------------------------------------------

@pytest.fixture
def make_publisher(repository, make_llm):
    """Return a factory for a Publisher backed by the fake git runner."""
    def _make(*replies, github=None, base_branch="main"):
        generator = CommitGenerator(DiffCollector(repository), make_llm(*replies))
        return Publisher(repository, generator, github, base_branch=base_branch)
    return _make


class TestPublisher:

    def test_commit_and_push_without_pr(self, make_publisher, fake_git):
        result = make_publisher(FIX_REPLY).publish()

        assert result.ok
        assert result.record == RECORD
        assert result.outcome is None
        assert result.warning is None
        assert result.history == [
            PublishState.GENERATING,
            PublishState.COMMITTING,
            PublishState.PUSHING,
            PublishState.DONE,
        ]
        assert "commit -m fix(auth): handle expired tokens" in fake_git.calls
        assert "push -u origin feature/auth" in fake_git.calls
        assert not fake_git.ran("remote get-url")

    def test_commit_message_is_title_only(self, make_publisher, fake_git):
        make_publisher(FIX_REPLY).publish()
        commit = next(c for c in fake_git.calls if c.startswith("commit"))
        assert "- fix bug" not in commit

    def test_nothing_staged_raises(self, make_publisher, fake_git):
        fake_git.responses["diff --cached --name-only"] = ""
        with pytest.raises(RepositoryStateError):
            make_publisher(FIX_REPLY).publish()
        assert not fake_git.ran("commit")

    def test_generation_failure_writes_nothing(self, make_publisher, fake_git):
        result = make_publisher("garbage", "still garbage").publish(create_pr=True)

        assert result.state is PublishState.FAILED
        assert result.failure.stage == "generation"
        assert result.record is None
        assert not fake_git.ran("commit")
        assert not fake_git.ran("push")

    def test_commit_failure_skips_push(self, make_publisher, fake_git):
        fake_git.failures.add("commit")
        result = make_publisher(FIX_REPLY).publish()

        assert result.state is PublishState.FAILED
        assert result.failure.stage == "commit"
        assert not fake_git.ran("push")

    def test_push_failure(self, make_publisher, fake_git, fake_github):
        fake_git.failures.add("push")
        result = make_publisher(FIX_REPLY, github=fake_github.client()).publish(create_pr=True)

        assert result.state is PublishState.FAILED
        assert result.failure.stage == "push"
        assert fake_github.requests == []

    def test_creates_pull_request(self, make_publisher, fake_github):
        result = make_publisher(FIX_REPLY, github=fake_github.client()).publish(create_pr=True)

        assert result.ok
        assert result.outcome.action == CREATED
        assert result.history[-3:] == [
            PublishState.RESOLVING_REPO_IDENTITY,
            PublishState.RECONCILING_PR,
            PublishState.DONE,
        ]

    def test_base_branch_forwarded(self, make_publisher, fake_github):
        make_publisher(FIX_REPLY, github=fake_github.client(), base_branch="develop").publish(create_pr=True)
        assert fake_github.pulls[0]["base"]["ref"] == "develop"

    def test_two_publishes_share_one_pr(self, make_publisher, fake_github):
        client = fake_github.client()
        first = make_publisher(FIX_REPLY, github=client).publish(create_pr=True)
        second = make_publisher(FIX_REPLY, github=client).publish(create_pr=True)

        assert first.outcome.action == CREATED
        assert second.outcome.action == UPDATED
        assert len(fake_github.pulls) == 1
        assert fake_github.pulls[0]["body"].endswith("- fix bug\n- fix bug")

    def test_non_github_remote_is_warning(self, make_publisher, fake_git, fake_github):
        fake_git.responses["remote get-url origin"] = "https://gitlab.com/acme/widgets.git\n"
        result = make_publisher(FIX_REPLY, github=fake_github.client()).publish(create_pr=True)

        assert result.ok
        assert result.warning.stage == "repo-identity"
        assert fake_github.requests == []

    def test_missing_remote_is_warning(self, make_publisher, fake_git):
        fake_git.failures.add("remote get-url")
        result = make_publisher(FIX_REPLY).publish(create_pr=True)

        assert result.ok
        assert result.warning.stage == "repo-identity"

    def test_missing_github_client_is_warning(self, make_publisher):
        result = make_publisher(FIX_REPLY).publish(create_pr=True)

        assert result.ok
        assert result.warning.stage == "pr"
        assert "GH_ACCESS_TOKEN" in result.warning.message

    def test_github_error_is_warning(self, make_publisher, fake_git, fake_github):
        fake_github.list_error = (500, {"message": "Server Error"})
        result = make_publisher(FIX_REPLY, github=fake_github.client()).publish(create_pr=True)

        assert result.ok
        assert result.warning.stage == "pr"
        assert "Server Error" in result.warning.message
        assert fake_git.ran("push")

    def test_no_commits_between_still_done(self, make_publisher, fake_github):
        fake_github.create_error = (422, {"message": "Validation Failed",
                                          "errors": [{"message": "No commits between main and feature/auth"}]})
        result = make_publisher(FIX_REPLY, github=fake_github.client()).publish(create_pr=True)

        assert result.ok
        assert result.warning is None
        assert result.outcome.action == NO_CHANGES

    def test_html_reply_is_warning(self, make_publisher, fake_git):
        html = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>"))
        github = GitHubClient("t", transport=html)

        result = make_publisher(FIX_REPLY, github=github).publish(create_pr=True)

        assert result.state is PublishState.DONE
        assert result.warning.stage == "pr"
        assert "Invalid JSON" in result.warning.message
        assert fake_git.ran("push")

    def test_created_pull_without_number_is_warning(self, make_publisher):
        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json=[])
            return httpx.Response(201, json={"title": "x", "html_url": "https://github.com/acme/widgets/pull/?"})

        github = GitHubClient("t", transport=httpx.MockTransport(handler))
        result = make_publisher(FIX_REPLY, github=github).publish(create_pr=True)

        assert result.ok
        assert result.warning.stage == "pr"
        assert "no valid number" in result.warning.message


# ---------------------------------------------------------------------------
# GitHubClient
# ---------------------------------------------------------------------------

class TestGitHubClient:

    def test_token_required(self):
        with pytest.raises(GitHubError, match="GH_ACCESS_TOKEN"):
            GitHubClient("")

    def test_request_headers(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json=[])

        with GitHubClient("secret", transport=httpx.MockTransport(handler)) as client:
            assert client.list_pull_requests("acme", "widgets", head="acme:main") == []

        assert seen["authorization"] == "Bearer secret"
        assert seen["accept"] == "application/vnd.github+json"
        assert seen["x-github-api-version"] == "2022-11-28"

    def test_list_maps_pull_requests(self, fake_github):
        seed_pull(fake_github, 9, None)
        pulls = fake_github.client().list_pull_requests("acme", "widgets", head="acme:feature/auth")

        assert len(pulls) == 1
        assert pulls[0].number == 9
        assert pulls[0].body == ""
        assert pulls[0].head_ref == "feature/auth"

    def test_error_without_json_body(self):
        client = GitHubClient("t", transport=httpx.MockTransport(lambda r: httpx.Response(502, text="bad gateway")))
        with pytest.raises(GitHubError) as exc:
            client.list_pull_requests("acme", "widgets")
        assert exc.value.status_code == 502
        assert exc.value.errors == []

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = GitHubClient("t", transport=httpx.MockTransport(handler))
        with pytest.raises(GitHubError, match="GitHub request failed"):
            client.list_pull_requests("acme", "widgets")

    def test_list_rejects_non_list_payload(self):
        client = GitHubClient("t", transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"message": "hi"})))
        with pytest.raises(GitHubError, match="Expected a list"):
            client.list_pull_requests("acme", "widgets")

    def test_success_with_invalid_json(self):
        client = GitHubClient("t", transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<html>")))
        with pytest.raises(GitHubError) as exc:
            client.list_pull_requests("acme", "widgets")
        assert exc.value.status_code == 200
