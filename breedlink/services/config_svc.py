# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML files and env vars
#  - Caches composed config
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from breedlink.helpers.dto.config_dto import ArangoConfig, EngineConfig

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================
# Operational parameters that are not exposed in config.yaml or
# environment variables.

# Breeder dashboard shows this many most recent received applications
INTERNAL_DASHBOARD_RECENT_COUNT = 5

# Upper bound for any list page
INTERNAL_MAX_PAGE_SIZE = 100

# Whitelist of user-configurable keys (YAML and BREEDLINK_* env vars)
ALLOWED_ENV_KEYS = {
    "arango_hosts",
    "arango_username",
    "arango_password",
    "arango_db_name",
    "log_level",
    "activity_log_view_limit",
    "default_page_size",
}


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env),
    caches the result, and provides reload capability.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        self._overrides = overrides
        self._config: dict[str, Any] | None = None
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose(self._overrides)
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("arango_db_name")
            'breedlink'
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        self._logger.info("Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def make_arango_config(self) -> ArangoConfig:
        cfg = self.get_config()
        return ArangoConfig(
            hosts=str(cfg["arango_hosts"]),
            username=str(cfg["arango_username"]),
            password=str(cfg["arango_password"]),
            db_name=str(cfg["arango_db_name"]),
        )

    def make_engine_config(self) -> EngineConfig:
        """
        Build the EngineConfig for domain services.

        Combines user-configurable page sizes with internal constants.
        """
        cfg = self.get_config()
        page_size = max(1, min(int(cfg["default_page_size"]), INTERNAL_MAX_PAGE_SIZE))
        return EngineConfig(
            default_page_size=page_size,
            activity_log_view_limit=max(1, int(cfg["activity_log_view_limit"])),
            dashboard_recent_count=INTERNAL_DASHBOARD_RECENT_COUNT,
            max_page_size=INTERNAL_MAX_PAGE_SIZE,
        )

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/breedlink/config.yaml  (if present)
          3) ./config/config.yaml
          4) $CONFIG_PATH (if set)
          5) overrides dict passed in
          6) Environment variables (BREEDLINK_*)

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/breedlink/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if overrides:
            self._deep_merge(cfg, overrides)

        self._apply_env_overrides(cfg)

        self._logger.debug("compose() loaded config; keys: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for USER-CONFIGURABLE settings only."""
        return {
            # ArangoDB connection
            "arango_hosts": "http://localhost:8529",
            "arango_username": "breedlink",
            "arango_password": "breedlink_password",
            "arango_db_name": "breedlink",
            # Logging
            "log_level": "INFO",
            # Listing defaults
            "activity_log_view_limit": 50,
            "default_page_size": 20,
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(data, dict):
            self._logger.warning(f"Ignoring config file {path}: top level is not a mapping")
            return {}
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides for the user-configurable keys only.

        Supported formats:
          BREEDLINK_ARANGO_HOSTS=http://arangodb:8529
          BREEDLINK_ARANGO_PASSWORD=secret
          BREEDLINK_LOG_LEVEL=DEBUG
          BREEDLINK_DEFAULT_PAGE_SIZE=50
        """
        for k, v in os.environ.items():
            if not k.startswith("BREEDLINK_"):
                continue

            key = k[len("BREEDLINK_") :].lower()
            if key not in ALLOWED_ENV_KEYS:
                self._logger.debug(f"Ignoring environment override for internal key: {key}")
                continue

            val: Any
            if v.lower() in ("true", "false"):
                val = v.lower() == "true"
            elif v.isdigit():
                val = int(v)
            else:
                val = v
            cfg[key] = val
