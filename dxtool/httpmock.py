"""In-memory HTTP stubs for exercising API clients without a network."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Union

Body = Union[str, bytes]


@dataclass
class Request:
    """An outgoing HTTP request as seen by a stub."""

    method: str
    url: str
    body: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """A canned HTTP response."""

    status_code: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.body)


Matcher = Callable[[Request], bool]
Responder = Callable[[Request], Response]


@dataclass
class Stub:
    """A matcher paired with the responder used once it matches."""

    matcher: Matcher
    responder: Responder
    matched: bool = False


def _as_bytes(body: Body) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else bytes(body)


def match_any(request: Request) -> bool:
    """Match every request."""
    return True


def string_response(body: Body) -> Responder:
    """Build a responder answering 200 with the given body."""
    content = _as_bytes(body)

    def responder(request: Request) -> Response:
        return Response(200, content)

    return responder


def repo_network_stub_response(
    owner: str, repo: str, default_branch: str, permission: str
) -> str:
    """GraphQL payload describing a single repository."""
    return f"""
		{{ "data": {{ "repo_000": {{
			"id": "REPOID",
			"name": "{repo}",
			"owner": {{"login": "{owner}"}},
			"defaultBranchRef": {{
				"name": "{default_branch}"
			}},
			"viewerPermission": "{permission}"
		}} }} }}
	"""


def repo_network_stub_fork_response(fork_full_name: str, parent_full_name: str) -> str:
    """GraphQL payload describing a fork and its parent repository."""
    try:
        fork_owner, fork_name = fork_full_name.split("/", 1)
        parent_owner, parent_name = parent_full_name.split("/", 1)
    except ValueError as exc:
        raise ValueError("repository names must be of the form owner/name") from exc
    return f"""
		{{ "data": {{ "repo_000": {{
			"id": "REPOID2",
			"name": "{fork_name}",
			"owner": {{"login": "{fork_owner}"}},
			"defaultBranchRef": {{
				"name": "master"
			}},
			"viewerPermission": "ADMIN",
			"parent": {{
				"id": "REPOID1",
				"name": "{parent_name}",
				"owner": {{"login": "{parent_owner}"}},
				"defaultBranchRef": {{
					"name": "master"
				}},
				"viewerPermission": "READ"
			}}
		}} }} }}
	"""


@dataclass
class Registry:
    """Ordered collection of stubs; each stub answers at most one request."""

    requests: list[Request] = field(default_factory=list)
    _stubs: list[Stub] = field(default_factory=list, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def register(self, matcher: Matcher, responder: Responder) -> None:
        with self._lock:
            self._stubs.append(Stub(matcher, responder))

    def verify(self) -> None:
        """Raise AssertionError if any registered stub was never used."""
        unmatched = sum(1 for stub in self._stubs if not stub.matched)
        if unmatched:
            raise AssertionError(f"{unmatched} unmatched HTTP stubs")

    def round_trip(self, request: Request) -> Response:
        """Answer a request with the first unused stub that matches it."""
        with self._lock:
            stub = next(
                (s for s in self._stubs if not s.matched and s.matcher(request)),
                None,
            )
            if stub is None:
                raise LookupError(
                    f"no registered stubs matched {request.method} {request.url}"
                )
            stub.matched = True
            self.requests.append(request)
        return stub.responder(request)

    def stub_response(self, status: int, body: Body) -> None:
        content = _as_bytes(body)
        self.register(match_any, lambda request: Response(status, content))

    def stub_with_fixture(self, status: int, fixture_path: str | Path) -> None:
        """Answer with the contents of a file; a read failure is raised on use."""
        try:
            content = Path(fixture_path).read_bytes()
        except OSError as exc:
            error = exc

            def responder(request: Request) -> Response:
                raise error

        else:

            def responder(request: Request) -> Response:
                return Response(status, content)

        self.register(match_any, responder)

    def stub_repo_response(self, owner: str, repo: str) -> None:
        self.stub_repo_response_with_permission(owner, repo, "WRITE")

    def stub_repo_response_with_permission(
        self, owner: str, repo: str, permission: str
    ) -> None:
        self.register(
            match_any,
            string_response(repo_network_stub_response(owner, repo, "master", permission)),
        )

    def stub_repo_response_with_default_branch(
        self, owner: str, repo: str, default_branch: str
    ) -> None:
        self.register(
            match_any,
            string_response(
                repo_network_stub_response(owner, repo, default_branch, "WRITE")
            ),
        )

    def stub_forked_repo_response(self, own_repo: str, parent_repo: str) -> None:
        self.register(
            match_any,
            string_response(repo_network_stub_fork_response(own_repo, parent_repo)),
        )