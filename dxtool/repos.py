"""Listing and bulk deletion of repositories owned by an org or a user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from .gh import RestClient

log = logging.getLogger(__name__)


class MultiSelectPrompter(Protocol):
    def select_multiple_from_options(self, message: str, options: list[str]) -> list[str]: ...


@dataclass(frozen=True)
class RepoInfo:
    """A repository as listed by the REST API."""

    name: str
    full_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> RepoInfo:
        return cls(name=data.get("name", ""), full_name=data.get("full_name", ""))


RepoGetter = Callable[[str, str], list[RepoInfo]]


@dataclass
class RepoManager:
    """Operations over the repositories of an owner."""

    client: RestClient
    prompter: MultiSelectPrompter

    def _list(self, host: str, path: str) -> list[RepoInfo]:
        data = self.client.rest(host, "GET", path) or []
        return [RepoInfo.from_json(item) for item in data]

    def list_repositories_for_org(self, host: str, org: str) -> list[RepoInfo]:
        return self._list(host, f"orgs/{org}/repos")

    def list_repositories_for_user(self, host: str, user: str) -> list[RepoInfo]:
        return self._list(host, f"users/{user}/repos")

    def select_repositories(self, host: str, owner: str, getter: RepoGetter) -> list[str]:
        """Ask which of the owner's repositories to delete."""
        repos = getter(host, owner)
        return self.prompter.select_multiple_from_options(
            "Select repositories to delete", [repo.name for repo in repos]
        )

    def _delete_selected(self, host: str, owner: str, getter: RepoGetter) -> list[str]:
        selected = self.select_repositories(host, owner, getter)
        for name in selected:
            log.info("deleting %s/%s", owner, name)
            self.client.rest(host, "DELETE", f"repos/{owner}/{name}")
        return selected

    def delete_repositories_from_org(self, host: str, org: str) -> list[str]:
        """Delete the chosen repositories of an org; returns their names."""
        return self._delete_selected(host, org, self.list_repositories_for_org)

    def delete_repositories_from_user(self, host: str, user: str) -> list[str]:
        """Delete the chosen repositories of a user; returns their names."""
        return self._delete_selected(host, user, self.list_repositories_for_user)