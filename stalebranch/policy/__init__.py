"""Build policies and their thresholds."""

from stalebranch.config.models import StalebranchConfig
from stalebranch.credentials import InMemoryCredentialStore, credentials_from_config
from stalebranch.policy.staleness import StalenessDecision, StalenessPolicy
from stalebranch.policy.threshold import Threshold, ThresholdConfigError, TimeUnit
from stalebranch.scm import create_timestamp_provider


def create_policy(
    config: StalebranchConfig, max_age_days: str | None = None
) -> StalenessPolicy:
    """Create a staleness policy wired to the configured credentials and VCS.

    ``max_age_days`` overrides config.staleness.max_age_days when given.
    """
    days = max_age_days if max_age_days is not None else config.staleness.max_age_days
    store = InMemoryCredentialStore(credentials_from_config(config.credentials))
    return StalenessPolicy(
        days,
        resolver=store,
        timestamps=create_timestamp_provider(config.vcs),
    )


__all__ = [
    "StalenessDecision",
    "StalenessPolicy",
    "Threshold",
    "ThresholdConfigError",
    "TimeUnit",
    "create_policy",
]
