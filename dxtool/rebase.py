"""Rebase the local default branch onto its upstream and push it to origin."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .gh import RestClient, get_default_branch
from .git import (
    Command,
    CommandRunner,
    current_branch_name,
    extract_host_org_and_repo_url,
    get_remote,
    local_changes,
)

log = logging.getLogger(__name__)


class RebaseError(RuntimeError):
    """Raised when the repository's remotes do not allow a rebase."""


@dataclass
class Rebase:
    """Bring the local default branch up to date with the upstream remote."""

    client: RestClient
    runner: CommandRunner
    force_with_lease: bool = False
    origin_host: str = ""
    origin_org: str = ""
    origin_repo: str = ""
    upstream_host: str = ""
    upstream_org: str = ""
    upstream_repo: str = ""
    origin_default_branch: str = ""
    upstream_default_branch: str = ""

    def validate(self) -> None:
        """Resolve the remotes and their default branches."""
        origin = get_remote(self.runner, "origin")
        upstream = get_remote(self.runner, "upstream")

        if not upstream:
            log.warning("No remote named 'upstream' found")

        if origin == upstream:
            raise RebaseError(f"origin & upstream appear to be the same: {origin}")

        self.origin_host, self.origin_org, self.origin_repo = (
            extract_host_org_and_repo_url(origin)
        )
        log.debug("determined origin repo as %s/%s", self.origin_org, self.origin_repo)

        self.origin_default_branch = get_default_branch(
            self.client, self.origin_host, self.origin_org, self.origin_repo
        )
        log.debug("determined origin default branch as %s", self.origin_default_branch)

        if upstream:
            self.upstream_host, self.upstream_org, self.upstream_repo = (
                extract_host_org_and_repo_url(upstream)
            )
            log.debug(
                "determined upstream repo as %s/%s", self.upstream_org, self.upstream_repo
            )
            self.upstream_default_branch = get_default_branch(
                self.client, self.upstream_host, self.upstream_org, self.upstream_repo
            )
            log.debug(
                "determined upstream default branch as %s", self.upstream_default_branch
            )

    def _git(self, *args: str) -> None:
        output = self.runner.run_without_retry(Command("git", args))
        log.info("%s", output)

    def run(self) -> bool:
        """Perform the rebase; False if the working tree is not in a fit state."""
        if local_changes(self.runner, ""):
            log.error("There appear to be local changes, please stash and try again")
            return False

        if current_branch_name(self.runner, "") != self.origin_default_branch:
            log.error(
                "You appear to not be on the default branch, please switch to %s",
                self.origin_default_branch,
            )
            return False

        if not self.upstream_repo and not self.upstream_org:
            self._git("pull", "--tags", "origin", self.origin_default_branch)
            return True

        self._git("fetch", "--tags", "upstream", self.upstream_default_branch)
        self._git("rebase", f"upstream/{self.upstream_default_branch}")
        push_args = ["push", "origin", self.origin_default_branch]
        if self.force_with_lease:
            push_args.append("--force-with-lease")
        self._git(*push_args)
        return True