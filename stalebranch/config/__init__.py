from .loader import load_config
from .models import (
    CredentialEntry,
    StalebranchConfig,
    StalenessConfig,
    VCSConfig,
)

__all__ = [
    "CredentialEntry",
    "StalebranchConfig",
    "StalenessConfig",
    "VCSConfig",
    "load_config",
]
