"""Locate, read and validate stalebranch.yaml."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from stalebranch.policy.threshold import Threshold, ThresholdConfigError

from .models import StalebranchConfig

CONFIG_ENV = "STALEBRANCH_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    """Search order: --config, $STALEBRANCH_CONFIG, project-local, user-global."""
    paths = []
    if cli_path:
        paths.append(Path(cli_path))
    if os.environ.get(CONFIG_ENV):
        paths.append(Path(os.environ[CONFIG_ENV]))
    paths.append(Path("./stalebranch.yaml"))
    paths.append(Path.home() / ".stalebranch" / "config.yaml")
    return paths


def _parse(path: Path) -> StalebranchConfig | None:
    """Parse one config file. None if the file is empty."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping at top level")
    try:
        cfg = StalebranchConfig.model_validate(_expand_env_vars(raw))
        # Reject a bad day count here rather than on the first check
        Threshold.from_days(cfg.staleness.max_age_days)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e
    except ThresholdConfigError as e:
        raise ValueError(f"Invalid staleness.max_age_days in {path}: {e}") from e
    return cfg


def load_config(cli_path: str | None = None) -> StalebranchConfig:
    """Return the first non-empty config found, or defaults."""
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        cfg = _parse(path)
        if cfg is not None:
            return cfg
    return StalebranchConfig()


def _expand_env_vars(obj: object) -> object:
    """Expand ${VAR} and ${VAR:-fallback} in every string of a parsed document."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1)) or (m.group(2) or ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `stalebranch config init`
DEFAULT_CONFIG_TEMPLATE = """\
# stalebranch.yaml

# Staleness filter
staleness:
  # Branches whose last commit is older than this many days are not built
  # automatically. Leave blank to disable.
  max_age_days: "7"

# VCS Provider
vcs:
  provider: "github"           # only github is supported
  # base_url: "https://github.example.com/api/v3"

# Stored credentials, matched against a source's credentials id
credentials:
  - id: "github-token"
    token_env: "GITHUB_TOKEN"
    description: "Default GitHub token"
    scope: "system"            # system | user

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
