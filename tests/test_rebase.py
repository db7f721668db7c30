import pytest

from dxtool.git import Command, GitError
from dxtool.httpmock import Registry, Request
from dxtool.rebase import Rebase, RebaseError

BOTH_REMOTES = """origin https://github.com/origin/clone (fetch)
origin https://github.com/origin/clone (push)
upstream https://github.com/upstream/repo (fetch)
upstream https://github.com/upstream/repo (push)"""

ORIGIN_ONLY = """origin https://github.com/origin/clone (fetch)
origin https://github.com/origin/clone (push)"""

ORIGIN_ONLY_GIT = """origin https://github.com/origin/clone.git (fetch)
origin https://github.com/origin/clone.git (push)"""


class FakeClient:
    def __init__(self, registry):
        self.registry = registry

    def rest(self, host, method, path, body=None):
        if host == "github.com":
            base = "https://api.github.com/"
        else:
            base = f"https://{host}/api/v3/"
        response = self.registry.round_trip(Request(method, base + path))
        return response.json() if response.body else None


class FakeRunner:
    def __init__(self, remotes, branch, porcelain=""):
        self.remotes = remotes
        self.branch = branch
        self.porcelain = porcelain
        self.commands = []

    def run_without_retry(self, command: Command) -> str:
        text = str(command)
        self.commands.append(text)
        if text == "git branch --show-current":
            return self.branch
        if text == "git remote -v":
            return self.remotes
        if text == "git status --porcelain":
            return self.porcelain
        return "<dummy output>"


CASES = [
    (
        "simple rebase on master",
        BOTH_REMOTES, "master", "master", False,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git fetch --tags upstream master",
            "git rebase upstream/master", "git push origin master",
        ],
        ["https://api.github.com/repos/origin/clone",
         "https://api.github.com/repos/upstream/repo"],
    ),
    (
        "simple rebase on main",
        BOTH_REMOTES, "main", "main", False,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git fetch --tags upstream main",
            "git rebase upstream/main", "git push origin main",
        ],
        ["https://api.github.com/repos/origin/clone",
         "https://api.github.com/repos/upstream/repo"],
    ),
    (
        "simple rebase on main with force-with-lease",
        BOTH_REMOTES, "main", "main", True,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git fetch --tags upstream main",
            "git rebase upstream/main", "git push origin main --force-with-lease",
        ],
        ["https://api.github.com/repos/origin/clone",
         "https://api.github.com/repos/upstream/repo"],
    ),
    (
        "simple rebase on main with no upstream",
        ORIGIN_ONLY, "main", "", False,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git pull --tags origin main",
        ],
        ["https://api.github.com/repos/origin/clone"],
    ),
    (
        "complex rebase on differing branches",
        BOTH_REMOTES, "master", "main", False,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git fetch --tags upstream main",
            "git rebase upstream/main", "git push origin master",
        ],
        ["https://api.github.com/repos/origin/clone",
         "https://api.github.com/repos/upstream/repo"],
    ),
    (
        "complex rebase on differing branches with force-with-lease",
        BOTH_REMOTES, "master", "main", True,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git fetch --tags upstream main",
            "git rebase upstream/main", "git push origin master --force-with-lease",
        ],
        ["https://api.github.com/repos/origin/clone",
         "https://api.github.com/repos/upstream/repo"],
    ),
    (
        "simple rebase on main with .git extension",
        ORIGIN_ONLY_GIT, "main", "", False,
        [
            "git remote -v", "git remote -v", "git status --porcelain",
            "git branch --show-current", "git pull --tags origin main",
        ],
        ["https://api.github.com/repos/origin/clone"],
    ),
]


@pytest.mark.parametrize(
    "remotes,origin_branch,upstream_branch,force,expected_commands,expected_requests",
    [case[1:] for case in CASES],
    ids=[case[0] for case in CASES],
)
def test_can_rebase(
    remotes, origin_branch, upstream_branch, force, expected_commands, expected_requests
):
    registry = Registry()
    registry.stub_response(200, f'{{ "default_branch":"{origin_branch}"}}')
    if upstream_branch:
        registry.stub_response(200, f'{{ "default_branch":"{upstream_branch}"}}')

    runner = FakeRunner(remotes, origin_branch)
    rebase = Rebase(FakeClient(registry), runner, force_with_lease=force)
    rebase.origin_default_branch = origin_branch
    rebase.upstream_default_branch = upstream_branch

    rebase.validate()
    assert rebase.run() is True

    assert runner.commands == expected_commands
    assert [r.url for r in registry.requests] == expected_requests


def test_validate_resolves_repositories():
    registry = Registry()
    registry.stub_response(200, '{ "default_branch":"master"}')
    registry.stub_response(200, '{ "default_branch":"main"}')
    rebase = Rebase(FakeClient(registry), FakeRunner(BOTH_REMOTES, "master"))
    rebase.validate()
    assert (rebase.origin_host, rebase.origin_org, rebase.origin_repo) == (
        "github.com", "origin", "clone")
    assert (rebase.upstream_host, rebase.upstream_org, rebase.upstream_repo) == (
        "github.com", "upstream", "repo")
    assert rebase.origin_default_branch == "master"
    assert rebase.upstream_default_branch == "main"


def test_same_origin_and_upstream_is_an_error():
    registry = Registry()
    rebase = Rebase(FakeClient(registry), FakeRunner("", "main"))
    with pytest.raises(RebaseError, match="origin & upstream appear to be the same"):
        rebase.validate()
    assert registry.requests == []


def test_invalid_origin_url_is_an_error():
    remotes = "origin https://github.com/only-org (push)"
    rebase = Rebase(FakeClient(Registry()), FakeRunner(remotes, "main"))
    with pytest.raises(GitError):
        rebase.validate()


def test_run_stops_on_local_changes():
    runner = FakeRunner(ORIGIN_ONLY, "main", porcelain=" M go.sum")
    rebase = Rebase(FakeClient(Registry()), runner, origin_default_branch="main")
    assert rebase.run() is False
    assert runner.commands == ["git status --porcelain"]


def test_run_stops_when_not_on_default_branch():
    runner = FakeRunner(ORIGIN_ONLY, "feature")
    rebase = Rebase(FakeClient(Registry()), runner, origin_default_branch="main")
    assert rebase.run() is False
    assert runner.commands == ["git status --porcelain", "git branch --show-current"]