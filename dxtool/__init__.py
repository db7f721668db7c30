"""Helpers for git remotes and rebasing, GitHub queries, kube contexts and HTTP stubs."""

__version__ = "0.1.0"

__all__ = ["gh", "git", "httpmock", "kubecontext", "rebase", "repos", "search"]