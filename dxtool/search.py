"""Repository-wide GraphQL searches for security settings and alerts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

log = logging.getLogger(__name__)

SECURITY_CONFIG_QUERY = """{
	search(type:REPOSITORY, query: "%s", first: 100) {
      nodes {
      ... on Repository {
        nameWithOwner
        url
        hasVulnerabilityAlertsEnabled
		isSecurityPolicyEnabled
        defaultBranchRef {
          name
          branchProtectionRule {
            pattern
            requiresStatusChecks
            restrictsPushes
          }
        }
      }
    }
  }
}"""

VULNERABILITY_ALERTS_QUERY = """{
	search(type:REPOSITORY, query: "%s", first: 100) {
      nodes {
      ... on Repository {
        nameWithOwner
        url
	vulnerabilityAlerts(first: 100, states: OPEN) {
          totalCount
          nodes {
            securityAdvisory {
              ghsaId
              severity
              summary
              cvss {
                vectorString
                score
              }
              identifiers {
                type
                value
              }
            }
            state
            createdAt
            dependabotUpdate {
              pullRequest {
                number
              }
            }
          }
        }
      }
    }
  }
}"""


class GraphQLClient(Protocol):
    def graphql(self, host: str, query: str) -> Any: ...


class SearchConfig(Protocol):
    def configured_servers(self) -> list[str]: ...

    def repos_to_query(self, host: str) -> list[str]: ...


def _search_nodes(client: GraphQLClient, config: SearchConfig, host: str,
                  template: str) -> list[dict[str, Any]]:
    query = template % " ".join(config.repos_to_query(host))
    log.debug("running query\n%s", query)
    data = client.graphql(host, query) or {}
    return list((data.get("search") or {}).get("nodes") or [])


def _require_dependencies(client: Any, config: Any) -> None:
    if client is None:
        raise ValueError("a GraphQL client must be set")
    if config is None:
        raise ValueError("a configuration must be set")


@dataclass
class GetSecurityConfig:
    """Collect the security settings of the configured repositories."""

    client: GraphQLClient
    config: SearchConfig
    repositories: list[dict[str, Any]] = field(default_factory=list)

    def validate(self) -> None:
        """Check that a client and a configuration are available."""
        _require_dependencies(self.client, self.config)

    def run(self) -> None:
        self.repositories = [
            repo
            for host in self.config.configured_servers()
            for repo in self.security_config_for_host(host)
        ]

    def security_config_for_host(self, host: str) -> list[dict[str, Any]]:
        return _search_nodes(self.client, self.config, host, SECURITY_CONFIG_QUERY)


@dataclass
class GetVulnerabilityAlerts:
    """Collect the open vulnerability alerts of the configured repositories."""

    client: GraphQLClient
    config: SearchConfig
    alerts: list[dict[str, Any]] = field(default_factory=list)

    def validate(self) -> None:
        """Check that a client and a configuration are available."""
        _require_dependencies(self.client, self.config)

    def run(self) -> None:
        self.alerts = [
            repo
            for host in self.config.configured_servers()
            for repo in self.vulnerability_alerts_for_host(host)
        ]

    def vulnerability_alerts_for_host(self, host: str) -> list[dict[str, Any]]:
        return _search_nodes(self.client, self.config, host, VULNERABILITY_ALERTS_QUERY)