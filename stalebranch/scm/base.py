"""Abstract collaborator interfaces consumed by the staleness policy."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from stalebranch.scm.models import Credential, HeadReference, Principal


class CredentialResolver(ABC):
    """Looks up stored credentials visible to a principal."""

    @abstractmethod
    def lookup(
        self, principal: Principal, domain_filters: Sequence[str] = ()
    ) -> list[Credential]:
        """Return the credentials visible to ``principal``, in store order.

        Args:
            principal: Identity the lookup runs as.
            domain_filters: Restrict results to these domains (empty for none).

        Returns an empty list when nothing matches; never raises for that case.
        """
        ...


class RevisionTimestampProvider(ABC):
    """Reads the commit time of a head's current tip on a remote."""

    @abstractmethod
    def get_timestamp(
        self, remote: str, credential: Credential, head: HeadReference
    ) -> int:
        """Return the tip commit time of ``head`` in epoch milliseconds.

        Args:
            remote: Remote repository URL.
            credential: Credential to authenticate with.
            head: Head whose tip is inspected.

        Raises:
            TimestampLookupError: remote unreachable, credential rejected,
                or the head does not exist.
        """
        ...
