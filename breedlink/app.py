"""
Application composition root and dependency injection container.

This module defines the Application class, which owns configuration, the
database handle and every domain service of the Breedlink engine.

Architecture:
- Application owns: config, db, services
- All configuration values are instance attributes (no module-level config globals)
- Services are registered via register_service() during start()
- Access services via: application.get_service("name") or application.services["name"]
- Do NOT construct services directly outside of this class
"""

from __future__ import annotations

import logging
from typing import Any

from breedlink.components.platform import ensure_schema
from breedlink.helpers.logging_helper import configure_logging
from breedlink.persistence.db import Database
from breedlink.services.config_svc import ConfigService
from breedlink.services.domain import AdminService, AdopterService, BreederService, ConsistencyService
from breedlink.services.domain._breeder_mapping import FileUrlResolver

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  Application Class - Composition Root & DI Container
# ----------------------------------------------------------------------
class Application:
    """
    Application composition root and dependency injection container.

    Configuration Access:
    - Raw config is PRIVATE (_config) and used only internally in Application
    - To access config outside app.py, use: application.get_service("config").get_config()
    """

    def __init__(
        self,
        config_service: ConfigService | None = None,
        db: Database | None = None,
        resolve_file_url: FileUrlResolver | None = None,
    ):
        """
        Initialize application with configuration.

        The database connection is opened in start() unless one is injected.

        Args:
            config_service: Config source (defaults to a fresh ConfigService)
            db: Pre-built Database (tests, embedding callers)
            resolve_file_url: Optional file key -> URL resolver for admin views
        """
        self._config_service = config_service or ConfigService()
        self._config = self._config_service.get_config()

        self.log_level: str = str(self._config.get("log_level", "INFO"))
        self.arango = self._config_service.make_arango_config()
        self.engine_config = self._config_service.make_engine_config()

        self.db: Database | None = db
        self.resolve_file_url = resolve_file_url

        # Services container (DI registry)
        self.services: dict[str, Any] = {}
        self._running = False

    def register_service(self, name: str, service: Any) -> None:
        """
        Register a service in the DI container.

        Args:
            name: Service name for lookup
            service: Service instance
        """
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """
        Get a service from the DI container.

        Raises:
            KeyError: If service not found
        """
        if name not in self.services:
            raise KeyError(f"Service '{name}' not found. Available services: {list(self.services.keys())}")
        return self.services[name]

    def start(self, bootstrap_schema: bool = True) -> None:
        """
        Start the application.

        1. Configure logging
        2. Connect to ArangoDB (unless a Database was injected)
        3. Ensure collections and unique indexes exist
        4. Register services
        """
        if self._running:
            logger.warning("[Application] Already running")
            return

        configure_logging(self.log_level)
        logger.info("[Application] Starting Breedlink...")

        if self.db is None:
            logger.info(f"[Application] Connecting to ArangoDB at {self.arango.hosts} (db={self.arango.db_name})")
            self.db = Database.connect(
                hosts=self.arango.hosts,
                username=self.arango.username,
                password=self.arango.password,
                db_name=self.arango.db_name,
            )

        if bootstrap_schema:
            ensure_schema(self.db.db)
            logger.info("[Application] Schema verified")

        self.register_service("config", self._config_service)
        self.register_service("adopter", AdopterService(self.db, self.engine_config))
        self.register_service("breeder", BreederService(self.db, self.engine_config))
        self.register_service("admin", AdminService(self.db, self.engine_config, self.resolve_file_url))
        self.register_service("consistency", ConsistencyService(self.db))

        self._running = True
        logger.info(f"[Application] Started with services: {sorted(self.services)}")

    def stop(self) -> None:
        """Drop registered services. The connection pool is released with the client."""
        if not self._running:
            return
        logger.info("[Application] Stopping...")
        self.services.clear()
        self._running = False

    def is_running(self) -> bool:
        return self._running
