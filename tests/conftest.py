"""Shared fakes: git runner, LLM client and an in-memory GitHub pulls API."""

import json

import httpx
import pytest

from git_ai_commit.git import GitError, GitRepository
from git_ai_commit.github import GitHubClient
from git_ai_commit.llm import LLMClient


class FakeGit:
    """Stands in for the git executable. Keys are the args after 'git'."""

    def __init__(self):
        self.responses = {
            "status --porcelain": "M  src/auth.py\n",
            "rev-parse --abbrev-ref HEAD": "feature/auth\n",
            "diff --cached --name-only": "src/auth.py\n",
            "diff --cached": "+ added login validation\n",
            "remote get-url origin": "git@github.com:acme/widgets.git\n",
        }
        self.failures: set[str] = set()
        self.calls: list[str] = []

    def __call__(self, args, *, cwd):
        key = " ".join(args[1:])
        self.calls.append(key)
        for prefix in self.failures:
            if key.startswith(prefix):
                raise GitError(f"Git command failed: git {key}")
        return self.responses.get(key, "")

    def ran(self, prefix: str) -> bool:
        return any(call.startswith(prefix) for call in self.calls)


class FakeLLMClient(LLMClient):
    """Replays canned replies; an Exception instance in the list is raised."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.prompts = []

    @property
    def name(self) -> str:
        return "Fake (test)"

    def generate(self, prompt):
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeGitHub:
    """Minimal GitHub pulls API backed by a list, served through httpx.MockTransport."""

    def __init__(self):
        self.pulls: list[dict] = []
        self.requests: list[tuple[str, str]] = []
        self.create_error: tuple[int, dict] | None = None
        self.list_error: tuple[int, dict] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))
        owner = path.split("/")[2]

        if request.method == "GET":
            if self.list_error:
                status, payload = self.list_error
                return httpx.Response(status, json=payload)
            head = request.url.params.get("head")
            matches = [p for p in self.pulls if head is None or f"{owner}:{p['head']['ref']}" == head]
            return httpx.Response(200, json=matches)

        if request.method == "POST":
            if self.create_error:
                status, payload = self.create_error
                return httpx.Response(status, json=payload)
            data = json.loads(request.content)
            number = len(self.pulls) + 1
            pr = {
                "number": number,
                "title": data["title"],
                "body": data["body"],
                "html_url": f"https://github.com/{owner}/widgets/pull/{number}",
                "head": {"ref": data["head"]},
                "base": {"ref": data["base"]},
            }
            self.pulls.append(pr)
            return httpx.Response(201, json=pr)

        if request.method == "PATCH":
            number = int(path.rsplit("/", 1)[1])
            pr = next(p for p in self.pulls if p["number"] == number)
            pr["body"] = json.loads(request.content)["body"]
            return httpx.Response(200, json=pr)

        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> GitHubClient:
        return GitHubClient("test-token", transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def repository(fake_git, tmp_path):
    return GitRepository(tmp_path, runner=fake_git)


@pytest.fixture
def make_llm():
    """Return a factory for FakeLLMClient."""
    def _make(*replies):
        return FakeLLMClient(replies)
    return _make


@pytest.fixture
def fake_github():
    return FakeGitHub()
