"""ArangoDB schema bootstrap component.

Schema initialization (collections, indexes) - separated from persistence layer.
All operations are idempotent (safe to run multiple times).

The two unique indexes here are what make duplicate prevention hold under
concurrent writers:
- adoption_applications.pending_pair (unique, sparse): one pending
  application per (adopter, breeder)
- breeder_reviews [adopter_id, breeder_id] (unique): one review per pair
"""

import logging

from arango.exceptions import CollectionCreateError, IndexCreateError

from breedlink.persistence.arango_client import DatabaseLike

logger = logging.getLogger(__name__)

DOCUMENT_COLLECTIONS = [
    "breeders",
    "adopters",
    "admins",
    "adoption_applications",
    "breeder_reviews",
    "available_pets",
]


def ensure_schema(db: DatabaseLike) -> None:
    """Ensure all collections and indexes exist.

    Idempotent - safe to call on every startup.
    Creates missing collections/indexes but does NOT alter existing ones.

    Args:
        db: ArangoDB database handle
    """
    _create_collections(db)
    _create_indexes(db)


def _create_collections(db: DatabaseLike) -> None:
    for collection_name in DOCUMENT_COLLECTIONS:
        if not db.has_collection(collection_name):
            try:
                db.create_collection(collection_name)
                logger.info(f"[arango_bootstrap] Created collection {collection_name}")
            except CollectionCreateError:
                pass  # Collection already exists (race condition)


def _create_indexes(db: DatabaseLike) -> None:
    """Create uniqueness and lookup indexes."""
    # Duplicate pending application guard
    _ensure_index(db, "adoption_applications", ["pending_pair"], unique=True, sparse=True)
    # Breeder-side listings and ledger counts
    _ensure_index(db, "adoption_applications", ["breeder_id", "status"])
    _ensure_index(db, "adoption_applications", ["adopter_id", "applied_at"])

    # One review per (adopter, breeder)
    _ensure_index(db, "breeder_reviews", ["adopter_id", "breeder_id"], unique=True)
    _ensure_index(db, "breeder_reviews", ["breeder_id", "is_visible"])
    _ensure_index(db, "breeder_reviews", ["is_reported", "is_visible"])

    _ensure_index(db, "breeders", ["verification.status"])
    _ensure_index(db, "breeders", ["status"])
    _ensure_index(db, "adopters", ["account_status"])
    _ensure_index(db, "available_pets", ["breeder_id", "status"])


def _ensure_index(
    db: DatabaseLike,
    collection: str,
    fields: list[str],
    unique: bool = False,
    sparse: bool = False,
) -> None:
    """Create a persistent index if it doesn't exist.

    ArangoDB returns the existing index for an identical definition, so a
    failure here is a real problem (e.g. existing duplicates blocking a
    unique index) and is raised.

    Args:
        db: Database handle
        collection: Collection name
        fields: Fields to index
        unique: Whether index is unique
        sparse: Whether to only index non-null values
    """
    coll = db.collection(collection)
    try:
        coll.add_persistent_index(fields=fields, unique=unique, sparse=sparse)
    except IndexCreateError as e:
        logger.error(f"[arango_bootstrap] Failed to create index {collection}{fields}: {e}")
        raise
