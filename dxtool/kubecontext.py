"""Switching, importing and namespace selection for Kubernetes contexts."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

log = logging.getLogger(__name__)


@dataclass
class KubeEntry:
    """A named context, cluster or user entry of a kubeconfig."""

    settings: dict[str, Any] = field(default_factory=dict)
    location_of_origin: str = ""

    @property
    def namespace(self) -> str:
        return self.settings.get("namespace", "")

    @property
    def cluster(self) -> str:
        return self.settings.get("cluster", "")


@dataclass
class KubeConfig:
    """The parts of a kubeconfig that context handling needs."""

    current_context: str = ""
    contexts: dict[str, KubeEntry] = field(default_factory=dict)
    clusters: dict[str, KubeEntry] = field(default_factory=dict)
    auth_infos: dict[str, KubeEntry] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)
    api_version: str = "v1"
    kind: str = "Config"


class Kuber(Protocol):
    def load_api_config(self) -> KubeConfig: ...

    def load_api_config_from_path(self, path: str) -> KubeConfig: ...

    def set_kube_context(self, context: str, config: KubeConfig) -> KubeConfig: ...

    def set_kube_config(self, config: KubeConfig) -> KubeConfig: ...

    def get_current_namespace(self, config: KubeConfig) -> str: ...

    def set_kube_namespace(self, namespace: str, config: KubeConfig) -> KubeConfig: ...


class Prompter(Protocol):
    def select_from_options_with_default(
        self, message: str, default: str, options: list[str]
    ) -> str: ...


class NamespaceLister(Protocol):
    def list_namespaces(self) -> list[str]: ...


@dataclass
class Context:
    """Select a kube context and make it current."""

    kuber: Kuber
    prompter: Prompter | None = None
    context: str = ""
    config: KubeConfig | None = None

    def validate(self) -> None:
        self.config = self.kuber.load_api_config()
        if not self.context:
            try:
                self.context = self._select_context()
            except Exception as exc:
                raise RuntimeError(f"failed to select context: {exc}") from exc

    def run(self) -> None:
        if self.config is None:
            self.config = self.kuber.load_api_config()
        self.config = self.kuber.set_kube_context(self.context, self.config)

    def _select_context(self) -> str:
        if self.prompter is None:
            raise RuntimeError("no prompter available to select a context")
        assert self.config is not None
        try:
            return self.prompter.select_from_options_with_default(
                "Select a context:",
                self.config.current_context,
                list(self.config.contexts),
            )
        except Exception as exc:
            raise RuntimeError(
                f"failed selecting context from prompter: {exc}"
            ) from exc


@dataclass
class ImportContext:
    """Merge the contexts, clusters and users of another kubeconfig."""

    kuber: Kuber
    path: str = ""
    config: KubeConfig | None = None
    config_to_import: KubeConfig | None = None

    def validate(self) -> None:
        if not self.path:
            raise ValueError("path must be set")
        self.config = self.kuber.load_api_config()
        self.config_to_import = self.kuber.load_api_config_from_path(self.path)

    def run(self) -> None:
        if self.config is None or self.config_to_import is None:
            raise RuntimeError("configuration must be loaded before importing")
        log.info("Importing config from %s", self.path)

        new_config = self.config
        current = new_config.contexts.get(new_config.current_context)
        if current is None:
            raise KeyError(f"current context '{new_config.current_context}' not found")
        origin = current.location_of_origin
        log.debug("locationOfOrigin %s", origin)

        sections = (
            ("context", self.config_to_import.contexts, new_config.contexts),
            ("authInfo", self.config_to_import.auth_infos, new_config.auth_infos),
            ("cluster", self.config_to_import.clusters, new_config.clusters),
        )
        for label, source, target in sections:
            for name, entry in source.items():
                log.debug("%s %s from %s", label, name, entry.location_of_origin)
                target[name] = dataclasses.replace(entry, location_of_origin=origin)

        for name, value in self.config_to_import.extensions.items():
            log.debug("extensions %s", name)
            new_config.extensions[name] = value

        self.config = self.kuber.set_kube_config(new_config)


@dataclass
class Namespace:
    """Select a namespace and make it the current context's default."""

    kuber: Kuber
    prompter: Prompter | None = None
    lister: NamespaceLister | None = None
    namespace: str = ""
    api_config: KubeConfig | None = None

    def validate(self) -> None:
        try:
            self.api_config = self.kuber.load_api_config()
        except Exception as exc:
            raise RuntimeError(f"failed to create load api config: {exc}") from exc
        try:
            self.namespace = self._select_namespace()
        except Exception as exc:
            raise RuntimeError(f"failed to select namespace: {exc}") from exc

    def run(self) -> None:
        print(f"you selected namespace {self.namespace}")
        if self.api_config is None:
            try:
                self.api_config = self.kuber.load_api_config()
            except Exception as exc:
                raise RuntimeError(
                    f"failed to create load api config: {exc}"
                ) from exc
        self.api_config = self.kuber.set_kube_namespace(self.namespace, self.api_config)

    def _select_namespace(self) -> str:
        assert self.api_config is not None
        current = self.kuber.get_current_namespace(self.api_config)
        try:
            namespaces = self._load_namespaces()
        except Exception as exc:
            raise RuntimeError(f"while loading namespaces: {exc}") from exc
        if self.prompter is None:
            raise RuntimeError("no prompter available to select a namespace")
        try:
            return self.prompter.select_from_options_with_default(
                "Select a namespace:", current, namespaces
            )
        except Exception as exc:
            raise RuntimeError(
                f"failed selecting namespace from prompter: {exc}"
            ) from exc

    def _load_namespaces(self) -> list[str]:
        if self.lister is None:
            raise RuntimeError("failed to create kube client")
        try:
            names = self.lister.list_namespaces()
        except Exception as exc:
            raise RuntimeError(f"loading namespaces {exc}") from exc
        return sorted(names)