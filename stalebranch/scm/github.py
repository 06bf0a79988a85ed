"""GitHub revision timestamp provider using PyGithub."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

import requests
from github import Auth, Github, GithubException
from github.Commit import Commit
from github.Repository import Repository

from stalebranch.scm.base import RevisionTimestampProvider
from stalebranch.scm.models import Credential, HeadReference, TimestampLookupError

logger = logging.getLogger(__name__)

# https://host/owner/repo(.git), ssh://git@host/owner/repo(.git), git@host:owner/repo(.git)
_REMOTE_PATTERNS = [
    re.compile(r"^(?:https?|ssh|git)://(?:[^@/]+@)?[^/]+/(?P<repo>[^/]+/[^/]+?)(?:\.git)?/?$"),
    re.compile(r"^[\w.-]+@[\w.-]+:(?P<repo>[^/]+/[^/]+?)(?:\.git)?/?$"),
]

_RETRYABLE_STATUSES = (429, 502, 503, 504)


def parse_repo_id(remote: str) -> str:
    """Extract 'owner/repo' from a GitHub remote URL.

    Raises ValueError if the remote does not point at a repository.
    """
    for pattern in _REMOTE_PATTERNS:
        m = pattern.match(remote.strip())
        if m:
            return m.group("repo")
    raise ValueError(f"Cannot determine owner/repo from remote {remote!r}")


def _to_epoch_millis(dt: datetime) -> int:
    # PyGithub may hand back naive datetimes; GitHub reports UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


class GitHubTimestampProvider(RevisionTimestampProvider):
    """GitHub implementation of RevisionTimestampProvider.

    A fresh client is built per lookup since every call may carry a
    different credential. Nothing is cached between calls.
    """

    name = "github"

    def __init__(self, base_url: str | None = None) -> None:
        self._base_url = base_url

    def _client(self, credential: Credential) -> Github:
        auth = Auth.Token(credential.secret.get_secret_value())
        if self._base_url:
            return Github(auth=auth, base_url=self._base_url)
        return Github(auth=auth)

    def _tip_commit(self, repo: Repository, head: HeadReference) -> Commit:
        if head.kind == "branch":
            return repo.get_branch(head.name).commit
        if head.kind == "tag":
            return repo.get_commit(f"refs/tags/{head.name}")
        try:
            number = int(head.name.lstrip("#"))
        except ValueError:
            raise ValueError(
                f"Change request head {head.name!r} is not a pull request number"
            ) from None
        return repo.get_commit(repo.get_pull(number).head.sha)

    def get_timestamp(
        self, remote: str, credential: Credential, head: HeadReference
    ) -> int:
        """Return the committer date of the head's tip in epoch milliseconds."""
        repo_id = parse_repo_id(remote)
        logger.debug(
            "Fetching tip of %s %s on %s with credential %s",
            head.kind, head.name, repo_id, credential.id,
        )
        try:
            repo = self._client(credential).get_repo(repo_id)
            commit = self._tip_commit(repo, head)
            committed = commit.commit.committer.date
        except GithubException as e:
            raise TimestampLookupError(
                self.name,
                "get_timestamp",
                e,
                retryable=e.status in _RETRYABLE_STATUSES,
            ) from e
        except requests.exceptions.RequestException as e:
            # connection refused, DNS failure, timeout after PyGithub gives up
            raise TimestampLookupError(
                self.name, "get_timestamp", e, retryable=True
            ) from e
        return _to_epoch_millis(committed)
