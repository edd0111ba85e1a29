"""YAML configuration loader with environment variable overrides.

Configuration is layered, later layers win:

  1. ``config/config.yaml``  - static defaults (scopes, tables, column names)
  2. ``.env`` file            - local developer overrides
  3. environment variables    - deploy-time values (``PGKB_*``)

Only settings that were actually provided through ``.env`` or the
environment override the YAML file; pydantic defaults fill in gaps last.

    base      = {"store": {"algorithm": "l2", "document_scope": {"tenant": "a"}}}
    overrides = {"store": {"algorithm": "cosine"}}
    result    = {"store": {"algorithm": "cosine", "document_scope": {"tenant": "a"}}}
"""

from pathlib import Path
from typing import Any

import yaml

from pgkb.config.settings import Settings

# Settings field -> (section, key) in the YAML document.
_FIELD_LOCATIONS: dict[str, tuple[str, str]] = {
    "database_url": ("database", "url"),
    "pool_min_size": ("database", "pool_min_size"),
    "pool_max_size": ("database", "pool_max_size"),
    "distance_algorithm": ("store", "algorithm"),
    "document_table": ("store", "document_table"),
    "embedding_table": ("store", "embedding_table"),
    "vector_dimension": ("store", "vector_dimension"),
    "log_level": ("logging", "level"),
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict[str, Any]:
    """Load YAML config and merge environment-based Settings on top.

    Args:
        path: Path to the YAML configuration file.  A missing file is
              treated as empty.
        settings: Settings instance to merge; read from the environment
                  when omitted.

    Returns:
        Fully resolved configuration dictionary with ``database``,
        ``store`` and ``logging`` sections.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()

    defaults: dict[str, Any] = {}
    env_overrides: dict[str, Any] = {}
    for field, (section, key) in _FIELD_LOCATIONS.items():
        target = env_overrides if field in settings.model_fields_set else defaults
        target.setdefault(section, {})[key] = getattr(settings, field)

    _deep_merge(yaml_config, env_overrides)
    _fill_missing(yaml_config, defaults)
    yaml_config.setdefault("store", {}).setdefault("document_scope", {})
    yaml_config["store"].setdefault("embedding_scope", {})
    yaml_config["store"].setdefault("embedding_columns", {})
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _fill_missing(base: dict, defaults: dict) -> None:
    """Recursively copy keys from defaults that base does not define."""
    for key, value in defaults.items():
        if key not in base or base[key] is None:
            base[key] = value
        elif isinstance(base[key], dict) and isinstance(value, dict):
            _fill_missing(base[key], value)
