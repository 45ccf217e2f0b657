"""ArangoDB client factory for Breedlink.

Connection pooling handled automatically by python-arango client.
Thread-safe within a single process; concurrent request handlers share one pool.
"""

from __future__ import annotations

from typing import Any

from arango import ArangoClient
from arango.aql import AQL
from arango.collection import StandardCollection
from arango.database import StandardDatabase
from arango.exceptions import ArangoServerError

# ArangoDB server error number for a unique index violation
ARANGO_UNIQUE_CONSTRAINT_VIOLATED = 1210

# =============================================================================
# JSON Serialization Boundary
# =============================================================================
# bind_vars must be JSON-serializable. Timestamps are plain int milliseconds.
#
# - JSON primitives and dict/list containers pass through
# - Tuples become lists
# - Anything else (DTOs, custom objects) raises TypeError with a path
# =============================================================================

_JSON_PRIMITIVES = (str, int, float, bool, type(None))


def _jsonify_for_arango(obj: Any, *, _path: str = "$") -> Any:
    """Recursively normalize bind_vars to JSON-serializable primitives.

    Args:
        obj: Any object to convert
        _path: Internal path tracking for error messages (e.g., "$.entry.applied_at")

    Returns:
        JSON-serializable equivalent of obj

    Raises:
        TypeError: If obj contains non-serializable types (with path context)
    """
    if isinstance(obj, _JSON_PRIMITIVES):
        return obj

    if isinstance(obj, dict):
        return {str(k): _jsonify_for_arango(v, _path=f"{_path}.{k}") for k, v in obj.items()}
    if isinstance(obj, list | tuple):
        return [_jsonify_for_arango(v, _path=f"{_path}[{i}]") for i, v in enumerate(obj)]

    raise TypeError(
        f"Object at {_path} not JSON-serializable for Arango: {type(obj).__name__}. "
        f"Convert to primitive before passing to persistence layer."
    )


def is_unique_violation(exc: Exception) -> bool:
    """True if exc is a server error caused by a unique index violation."""
    return isinstance(exc, ArangoServerError) and exc.error_code == ARANGO_UNIQUE_CONSTRAINT_VIOLATED


class _SafeAQL:
    """Wrapper around AQL that sanitizes bind_vars before execution.

    Only intercepts execute(); everything else delegates to the underlying AQL.
    """

    def __init__(self, aql: AQL) -> None:
        self._aql = aql

    def execute(
        self,
        query: str,
        bind_vars: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Execute AQL query with sanitized bind_vars."""
        safe_bind_vars = _jsonify_for_arango(bind_vars or {})
        return self._aql.execute(query, bind_vars=safe_bind_vars, **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._aql, name)


class SafeDatabase:
    """Drop-in wrapper around StandardDatabase with safe AQL execution.

    Only overrides `.aql` and `.collection()`; all other attributes proxy
    to the underlying database.
    """

    def __init__(self, db: StandardDatabase) -> None:
        self._db = db
        self._safe_aql = _SafeAQL(db.aql)

    @property
    def aql(self) -> _SafeAQL:
        return self._safe_aql

    def collection(self, name: str) -> StandardCollection:
        """Get a collection by name. Explicitly typed for mypy compatibility."""
        return self._db.collection(name)  # type: ignore[return-value]

    def __getattr__(self, name: str) -> Any:
        return getattr(self._db, name)


# Both StandardDatabase and SafeDatabase are acceptable to operations classes.
DatabaseLike = StandardDatabase | SafeDatabase


def create_arango_client(
    hosts: str = "http://localhost:8529",
    username: str = "breedlink",
    password: str = "breedlink_password",
    db_name: str = "breedlink",
) -> SafeDatabase:
    """Create ArangoDB client and return database handle with safe serialization.

    Args:
        hosts: ArangoDB server URL(s)
        username: Database username
        password: Database password
        db_name: Database name

    Returns:
        SafeDatabase instance (wraps StandardDatabase with safe serialization)

    Raises:
        ServerConnectionError: If cannot connect to ArangoDB service
    """
    client = ArangoClient(hosts=hosts)
    db = client.db(db_name, username=username, password=password)
    return SafeDatabase(db)
