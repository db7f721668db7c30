"""Thin helpers that express git operations as commands for a runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlsplit

log = logging.getLogger(__name__)


class GitError(ValueError):
    """Raised when git-related input cannot be interpreted."""


@dataclass(frozen=True)
class Command:
    """A program invocation: name, arguments and working directory."""

    name: str
    args: tuple[str, ...] = ()
    dir: str = ""

    def __str__(self) -> str:
        return " ".join((self.name, *self.args))


class CommandRunner(Protocol):
    def run_without_retry(self, command: Command) -> str: ...


def _git(runner: CommandRunner, directory: str, *args: str) -> str:
    return runner.run_without_retry(Command("git", tuple(args), directory or ""))


def get_remote(runner: CommandRunner, name: str) -> str:
    """URL of the named remote, or an empty string if there is none."""
    return extract_url_from_remote(_git(runner, "", "remote", "-v"), name)


def current_branch_name(runner: CommandRunner, directory: str) -> str:
    return _git(runner, directory, "branch", "--show-current")


def stash(runner: CommandRunner, directory: str) -> str:
    return _git(runner, directory, "stash")


def stash_pop(runner: CommandRunner, directory: str) -> str:
    return _git(runner, directory, "stash", "pop")


def add(runner: CommandRunner, directory: str, name: str) -> str:
    return _git(runner, directory, "add", name)


def commit(runner: CommandRunner, directory: str, message: str) -> str:
    return _git(runner, directory, "commit", "-m", message)


def status(runner: CommandRunner, directory: str) -> str:
    return _git(runner, directory, "status")


def local_changes(runner: CommandRunner, directory: str) -> bool:
    """True if tracked files have changes; untracked files are ignored."""
    output = _git(runner, directory, "status", "--porcelain")
    changed = [
        line
        for line in output.strip().split("\n")
        if line and not line.startswith("??")
    ]
    log.debug("changed files %s, len=%d", changed, len(changed))
    return bool(changed)


def config_committer_information(
    runner: CommandRunner, directory: str, email: str, name: str
) -> None:
    _git(runner, directory, "config", "user.email", email)
    _git(runner, directory, "config", "user.name", name)


def config_property(runner: CommandRunner, directory: str, prop: str, value: str) -> None:
    _git(runner, directory, "config", prop, value)


def extract_url_from_remote(text: str, name: str) -> str:
    """Find the push URL of a remote in `git remote -v` output."""
    lines = text.split("\n")
    log.debug("raw git remotes: %s", lines)
    push_lines = [line for line in lines if line.endswith("(push)")]
    log.debug("filtered git remotes: %s", push_lines)
    for line in push_lines:
        if line.startswith(name):
            return line.split()[1]
    return ""


def extract_host_org_and_repo_url(url: str) -> tuple[str, str, str]:
    """Split a repository URL into (host, org, repo)."""
    url = url.removesuffix(".git")
    parts = urlsplit(url)
    fragments = parts.path.split("/")
    if len(fragments) != 3:
        raise GitError(f"invalid url path '{parts.path}'")
    host = parts.netloc.rpartition("@")[2]
    return host, fragments[1], fragments[2]