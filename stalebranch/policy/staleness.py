"""Build policy that suppresses automatic builds of branches with old tips."""

from __future__ import annotations

import logging
import time
import warnings
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel

from stalebranch.policy.threshold import Threshold, TimeUnit
from stalebranch.scm.base import CredentialResolver, RevisionTimestampProvider
from stalebranch.scm.models import SYSTEM, HeadReference, Revision, SourceDescriptor

logger = logging.getLogger(__name__)

Reason = Literal["not-a-branch", "disabled", "no-matching-credential", "stale", "fresh"]


def _wall_clock_millis() -> int:
    return time.time_ns() // 1_000_000


class StalenessDecision(BaseModel):
    """Outcome of a staleness evaluation, with the facts that produced it."""

    automatic: bool
    reason: Reason
    matched_credential: str | None = None
    commit_age_millis: int | None = None


class StalenessPolicy:
    """Skips automatic builds of branches whose last commit is too old.

    Only branch heads are filtered; tags and change requests always pass.
    A disabled threshold lets every head through without touching the
    remote.

    Once enabled, the policy answers False for every branch, stale or not.
    Only a stale tip short-circuits; the "no credential matched" and
    "matched but fresh" paths fall through to False as well. Use
    evaluate() to tell these cases apart.
    """

    DISPLAY_NAME = "Skip automatic build on last commit age"

    def __init__(
        self,
        at_most_days: str | None = None,
        *,
        resolver: CredentialResolver | None = None,
        timestamps: RevisionTimestampProvider | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._threshold = Threshold.from_days(at_most_days)
        self._resolver = resolver
        self._timestamps = timestamps
        self._clock = clock or _wall_clock_millis

    @classmethod
    def for_duration(
        cls,
        unit: TimeUnit,
        amount: int | float | None,
        *,
        resolver: CredentialResolver | None = None,
        timestamps: RevisionTimestampProvider | None = None,
        clock: Callable[[], int] | None = None,
    ) -> StalenessPolicy:
        """Build a policy from a unit and amount; None or negative disables it."""
        policy = cls(resolver=resolver, timestamps=timestamps, clock=clock)
        policy._threshold = Threshold.of(unit, amount)
        return policy

    @property
    def threshold(self) -> Threshold:
        return self._threshold

    @property
    def at_most_days(self) -> str:
        return self._threshold.days

    @property
    def at_most_millis(self) -> int:
        return self._threshold.millis

    def at_most(self, unit: TimeUnit) -> int | None:
        return self._threshold.in_unit(unit)

    def evaluate(
        self,
        source: SourceDescriptor,
        head: HeadReference,
        current_revision: Revision,
        last_built_revision: Revision | None = None,
        last_seen_revision: Revision | None = None,
        listener: logging.Logger | None = None,
    ) -> StalenessDecision:
        """Evaluate ``head`` and explain the outcome.

        The revision arguments are accepted for the caller's convenience;
        the remote is always queried by head, not by revision.

        Raises:
            TimestampLookupError: propagated from the timestamp provider.
        """
        log = listener or logger

        if not head.is_branch:
            log.debug("%s %s is not a branch, not filtering", head.kind, head.name)
            return StalenessDecision(automatic=True, reason="not-a-branch")

        if not self._threshold.enabled:
            log.debug("Commit age filter disabled for %s", head.name)
            return StalenessDecision(automatic=True, reason="disabled")

        if self._resolver is None or self._timestamps is None:
            raise ValueError(
                "An enabled staleness policy needs a credential resolver "
                "and a timestamp provider"
            )

        credentials = self._resolver.lookup(SYSTEM, ())
        credentials_id = source.credentials_id
        remote = source.remote

        matched: str | None = None
        age: int | None = None
        for credential in credentials:
            if credential.id != credentials_id:
                continue
            matched = credential.id
            timestamp = self._timestamps.get_timestamp(remote, credential, head)
            age = self._clock() - timestamp
            log.debug(
                "Tip of %s on %s is %d ms old (limit %d ms)",
                head.name, remote, age, self._threshold.millis,
            )
            if age > self._threshold.millis:
                log.info(
                    "Skipping automatic build of %s: last commit is older than %s day(s)",
                    head.name, self._threshold.days,
                )
                return StalenessDecision(
                    automatic=False,
                    reason="stale",
                    matched_credential=matched,
                    commit_age_millis=age,
                )

        if matched is None:
            log.warning(
                "No stored credential matches %r for %s; not building %s",
                credentials_id, remote, head.name,
            )
            return StalenessDecision(automatic=False, reason="no-matching-credential")

        return StalenessDecision(
            automatic=False,
            reason="fresh",
            matched_credential=matched,
            commit_age_millis=age,
        )

    def decide(
        self,
        source: SourceDescriptor,
        head: HeadReference,
        current_revision: Revision,
        last_built_revision: Revision | None = None,
        last_seen_revision: Revision | None = None,
        listener: logging.Logger | None = None,
    ) -> bool:
        """Return True if ``current_revision`` of ``head`` should build automatically."""
        return self.evaluate(
            source,
            head,
            current_revision,
            last_built_revision,
            last_seen_revision,
            listener,
        ).automatic

    def decide_with_previous(
        self,
        source: SourceDescriptor,
        head: HeadReference,
        current_revision: Revision,
        previous_revision: Revision | None = None,
        listener: logging.Logger | None = None,
    ) -> bool:
        """Deprecated: use decide() with explicit last built/seen revisions."""
        warnings.warn(
            "decide_with_previous() is deprecated, use decide()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.decide(
            source,
            head,
            current_revision,
            previous_revision,
            previous_revision,
            listener,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(at_most_days={self.at_most_days!r})"
