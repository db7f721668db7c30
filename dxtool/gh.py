"""Small queries against the GitHub REST API."""

from __future__ import annotations

from typing import Any, Protocol


class RestClient(Protocol):
    def rest(self, host: str, method: str, path: str, body: Any = None) -> Any: ...


def get_default_branch(client: RestClient, host: str, org: str, repo: str) -> str:
    data = client.rest(host, "GET", f"repos/{org}/{repo}") or {}
    return data.get("default_branch", "")


def get_current_user(client: RestClient, host: str) -> str:
    data = client.rest(host, "GET", "user") or {}
    return data.get("login", "")


def get_orgs_for_user(client: RestClient, host: str) -> list[str]:
    organisations = client.rest(host, "GET", "user/orgs") or []
    return [org.get("login", "") for org in organisations]