"""
In-memory stand-in for breedlink.persistence.db.Database.

Mirrors the operation classes attribute by attribute (same method names,
signatures and return shapes) so components, workflows and services can be
exercised without an ArangoDB server. Every call holds one lock, which
gives each method the same single-document atomicity the AQL UPDATEs have.
The unique indexes created by the bootstrap are emulated by raising the
same ConflictError codes the persistence layer translates 1210 into.
"""

from __future__ import annotations

import copy
import threading
from typing import Any
from unittest.mock import MagicMock

from breedlink.helpers.exceptions import ConflictError
from breedlink.helpers.time_helper import now_ms

ALL_PERMISSIONS = {
    "can_manage_users": True,
    "can_manage_breeders": True,
    "can_manage_reports": True,
    "can_view_statistics": True,
    "can_manage_admins": True,
}


class _Store:
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.collections: dict[str, dict[str, dict[str, Any]]] = {
            "breeders": {},
            "adopters": {},
            "admins": {},
            "adoption_applications": {},
            "breeder_reviews": {},
            "available_pets": {},
        }

    def docs(self, name: str) -> dict[str, dict[str, Any]]:
        return self.collections[name]


def _page(items: list[dict[str, Any]], skip: int, limit: int) -> list[dict[str, Any]]:
    return [copy.deepcopy(i) for i in items[skip : skip + limit]]


def _keyword_match(doc: dict[str, Any], keyword: str | None) -> bool:
    if not keyword or not keyword.strip():
        return True
    needle = keyword.strip().lower()
    return needle in (doc.get("name") or "").lower() or needle in (doc.get("email") or "").lower()


class MemoryApplications:
    def __init__(self, store: _Store) -> None:
        self._store = store
        self._docs = store.docs("adoption_applications")

    def insert_application(self, doc: dict[str, Any]) -> str:
        with self._store.lock:
            pair = doc.get("pending_pair")
            if pair is not None and any(d.get("pending_pair") == pair for d in self._docs.values()):
                raise ConflictError(
                    "A pending application to this breeder already exists",
                    code="application_already_pending",
                )
            self._docs[doc["_key"]] = copy.deepcopy(doc)
            return doc["_key"]

    def get_application(self, application_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(application_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find_pending_application(self, adopter_id: str, breeder_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            pair = f"{adopter_id}:{breeder_id}"
            for doc in self._docs.values():
                if doc.get("pending_pair") == pair:
                    return copy.deepcopy(doc)
            return None

    def compare_and_set_status(
        self,
        application_id: str,
        expected_status: str,
        new_status: str,
        notes: str | None = None,
    ) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(application_id)
            if doc is None or doc["status"] != expected_status:
                return None
            ts = now_ms()
            doc.update(
                {
                    "status": new_status,
                    "pending_pair": None,
                    "completed_counted": False if new_status == "adoption_approved" else doc.get("completed_counted"),
                    "processed_at": ts,
                    "breeder_notes": notes if notes is not None else doc.get("breeder_notes"),
                    "updated_at": ts,
                }
            )
            return copy.deepcopy(doc)

    def count_completed_adoption(self, application_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(application_id)
            if doc is None or doc["status"] != "adoption_approved" or doc.get("completed_counted") is not False:
                return None
            doc["completed_counted"] = True
            breeder = self._store.docs("breeders").get(doc["breeder_id"])
            if breeder is None:
                return {"breeder_id": doc["breeder_id"], "completed_adoptions": None}
            stats = breeder.setdefault("stats", {})
            stats["completed_adoptions"] = int(stats.get("completed_adoptions") or 0) + 1
            return {"breeder_id": doc["breeder_id"], "completed_adoptions": stats["completed_adoptions"]}

    def settle_completed_counts(self, breeder_id: str) -> int:
        with self._store.lock:
            settled = 0
            for doc in self._docs.values():
                if (
                    doc["breeder_id"] == breeder_id
                    and doc["status"] == "adoption_approved"
                    and doc.get("completed_counted") is False
                ):
                    doc["completed_counted"] = True
                    settled += 1
            return settled

    def _matching(
        self,
        breeder_id: str | None,
        status: str | None,
        applied_from: int | None,
        applied_to: int | None,
    ) -> list[dict[str, Any]]:
        return [
            d
            for d in self._docs.values()
            if (not breeder_id or d["breeder_id"] == breeder_id)
            and (not status or d["status"] == status)
            and (applied_from is None or (d.get("applied_at") or 0) >= applied_from)
            and (applied_to is None or (d.get("applied_at") or 0) <= applied_to)
        ]

    def list_applications(
        self,
        breeder_id: str | None = None,
        status: str | None = None,
        applied_from: int | None = None,
        applied_to: int | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        with self._store.lock:
            items = sorted(self._matching(breeder_id, status, applied_from, applied_to), key=lambda d: d["_key"])
            items.sort(key=lambda d: d.get("applied_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_applications(
        self,
        breeder_id: str | None = None,
        status: str | None = None,
        applied_from: int | None = None,
        applied_to: int | None = None,
    ) -> int:
        with self._store.lock:
            return len(self._matching(breeder_id, status, applied_from, applied_to))

    def list_for_adopter(self, adopter_id: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        with self._store.lock:
            items = [d for d in self._docs.values() if d["adopter_id"] == adopter_id]
            items.sort(key=lambda d: d.get("applied_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_for_adopter(self, adopter_id: str) -> int:
        with self._store.lock:
            return sum(1 for d in self._docs.values() if d["adopter_id"] == adopter_id)

    def has_application_with_status(self, adopter_id: str, breeder_id: str, statuses: list[str]) -> bool:
        with self._store.lock:
            return any(
                d["adopter_id"] == adopter_id and d["breeder_id"] == breeder_id and d["status"] in statuses
                for d in self._docs.values()
            )

    def count_by_status(self, breeder_id: str | None = None) -> dict[str, int]:
        with self._store.lock:
            counts: dict[str, int] = {}
            for d in self._docs.values():
                if breeder_id and d["breeder_id"] != breeder_id:
                    continue
                counts[d["status"]] = counts.get(d["status"], 0) + 1
            return counts


class MemoryBreeders:
    def __init__(self, store: _Store) -> None:
        self._store = store
        self._docs = store.docs("breeders")

    def _stats(self, doc: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(doc.get("stats"), dict):
            doc["stats"] = {}
        return doc["stats"]

    def get_breeder(self, breeder_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            return copy.deepcopy(doc) if doc is not None else None

    def set_account_status(self, breeder_id: str, status: str) -> bool:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return False
            doc["status"] = status
            return True

    def count_breeders(
        self,
        status: str | None = None,
        verification_status: str | None = None,
        keyword: str | None = None,
    ) -> int:
        with self._store.lock:
            return sum(
                1
                for d in self._docs.values()
                if (not status or d.get("status") == status)
                and (not verification_status or _verification_status(d) == verification_status)
                and _keyword_match(d, keyword)
            )

    def search_breeders(
        self,
        status: str | None = None,
        keyword: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        with self._store.lock:
            items = [
                {
                    "_key": d["_key"],
                    "name": d.get("name"),
                    "email": d.get("email"),
                    "status": d.get("status"),
                    "stats": d.get("stats"),
                }
                for d in self._docs.values()
                if (not status or d.get("status") == status) and _keyword_match(d, keyword)
            ]
            items.sort(key=lambda d: (d["name"] or "", d["_key"]))
            return _page(items, skip, limit)

    def transition_verification(
        self,
        breeder_id: str,
        expected_statuses: list[str],
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None or _verification_status(doc) not in expected_statuses:
                return None
            verification = dict(doc.get("verification") or {})
            verification.update(copy.deepcopy(fields))
            doc["verification"] = verification
            return copy.deepcopy(verification)

    def list_by_verification_status(self, status: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        with self._store.lock:
            items = [d for d in self._docs.values() if _verification_status(d) == status]
            items.sort(key=lambda d: ((d.get("verification") or {}).get("submitted_at") or 0, d["_key"]))
            return [
                {"_key": d["_key"], "name": d.get("name"), "email": d.get("email"), "verification": d.get("verification")}
                for d in _page(items, skip, limit)
            ]

    def set_completed_adoptions(self, breeder_id: str, value: int) -> bool:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return False
            self._stats(doc)["completed_adoptions"] = value
            return True

    def set_review_stats(self, breeder_id: str, average_rating: float, total_reviews: int) -> bool:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return False
            stats = self._stats(doc)
            stats["average_rating"] = average_rating
            stats["total_reviews"] = total_reviews
            return True

    def increment_profile_views(self, breeder_id: str) -> None:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is not None:
                stats = self._stats(doc)
                stats["profile_views"] = int(stats.get("profile_views") or 0) + 1

    def project_received_application(self, breeder_id: str, entry: dict[str, Any]) -> bool | None:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return None
            entries = doc.setdefault("received_applications", [])
            for existing in entries:
                if existing["application_id"] == entry["application_id"]:
                    existing.update(copy.deepcopy(entry))
                    return False
            entries.append(copy.deepcopy(entry))
            stats = self._stats(doc)
            stats["total_applications"] = int(stats.get("total_applications") or 0) + 1
            return True

    def get_received_application(self, breeder_id: str, application_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(breeder_id) or {}
            for entry in doc.get("received_applications") or []:
                if entry["application_id"] == application_id:
                    return copy.deepcopy(entry)
            return None

    def _received(self, breeder_id: str, status: str | None) -> list[dict[str, Any]]:
        doc = self._docs.get(breeder_id) or {}
        return [e for e in doc.get("received_applications") or [] if not status or e.get("status") == status]

    def list_received_applications(
        self,
        breeder_id: str,
        status: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        with self._store.lock:
            items = sorted(self._received(breeder_id, status), key=lambda e: e.get("applied_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_received_applications(self, breeder_id: str, status: str | None = None) -> int:
        with self._store.lock:
            return len(self._received(breeder_id, status))

    def push_report(self, breeder_id: str, report: dict[str, Any]) -> bool:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return False
            doc.setdefault("reports", []).append(copy.deepcopy(report))
            return True

    def get_report(self, breeder_id: str, report_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return None
            for report in doc.get("reports") or []:
                if report["report_id"] == report_id:
                    return {**copy.deepcopy(report), "breeder_id": doc["_key"], "breeder_name": doc.get("name")}
            return None

    def transition_report(
        self,
        breeder_id: str,
        report_id: str,
        expected_status: str,
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(breeder_id)
            if doc is None:
                return None
            for report in doc.get("reports") or []:
                if report["report_id"] == report_id and report["status"] == expected_status:
                    report.update(copy.deepcopy(fields))
                    return {**copy.deepcopy(report), "breeder_id": doc["_key"], "breeder_name": doc.get("name")}
            return None

    def _reports(self, status: str | None) -> list[dict[str, Any]]:
        items = []
        for doc in self._docs.values():
            for report in doc.get("reports") or []:
                if (status and report["status"] == status) or (not status and report["status"] != "dismissed"):
                    items.append({**report, "breeder_id": doc["_key"], "breeder_name": doc.get("name")})
        return items

    def list_reports(self, status: str | None = None, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        with self._store.lock:
            items = sorted(self._reports(status), key=lambda r: r.get("reported_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_reports(self, status: str | None = None) -> int:
        with self._store.lock:
            return len(self._reports(status))

    def count_reports_by_status(self) -> dict[str, int]:
        with self._store.lock:
            counts: dict[str, int] = {}
            for doc in self._docs.values():
                for report in doc.get("reports") or []:
                    counts[report["status"]] = counts.get(report["status"], 0) + 1
            return counts


class MemoryAdopters:
    def __init__(self, store: _Store) -> None:
        self._store = store
        self._docs = store.docs("adopters")

    def get_adopter(self, adopter_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(adopter_id)
            return copy.deepcopy(doc) if doc is not None else None

    def set_account_status(self, adopter_id: str, status: str) -> bool:
        with self._store.lock:
            doc = self._docs.get(adopter_id)
            if doc is None:
                return False
            doc["account_status"] = status
            return True

    def count_adopters(self, status: str | None = None, keyword: str | None = None) -> int:
        with self._store.lock:
            return sum(
                1
                for d in self._docs.values()
                if (not status or d.get("account_status") == status) and _keyword_match(d, keyword)
            )

    def search_adopters(
        self,
        status: str | None = None,
        keyword: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        with self._store.lock:
            items = [
                {
                    "_key": d["_key"],
                    "name": d.get("name"),
                    "email": d.get("email"),
                    "account_status": d.get("account_status"),
                }
                for d in self._docs.values()
                if (not status or d.get("account_status") == status) and _keyword_match(d, keyword)
            ]
            items.sort(key=lambda d: (d["name"] or "", d["_key"]))
            return _page(items, skip, limit)

    def add_favorite(self, adopter_id: str, entry: dict[str, Any]) -> bool:
        with self._store.lock:
            doc = self._docs.get(adopter_id)
            if doc is None:
                return False
            favorites = doc.setdefault("favorite_breeder_list", [])
            if any(f["favorite_breeder_id"] == entry["favorite_breeder_id"] for f in favorites):
                return False
            favorites.append(copy.deepcopy(entry))
            return True

    def remove_favorite(self, adopter_id: str, breeder_id: str) -> bool:
        with self._store.lock:
            doc = self._docs.get(adopter_id)
            if doc is None:
                return False
            favorites = doc.get("favorite_breeder_list") or []
            kept = [f for f in favorites if f["favorite_breeder_id"] != breeder_id]
            if len(kept) == len(favorites):
                return False
            doc["favorite_breeder_list"] = kept
            return True

    def list_favorites(self, adopter_id: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        with self._store.lock:
            doc = self._docs.get(adopter_id) or {}
            items = sorted(doc.get("favorite_breeder_list") or [], key=lambda f: f.get("added_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_favorites(self, adopter_id: str) -> int:
        with self._store.lock:
            doc = self._docs.get(adopter_id) or {}
            return len(doc.get("favorite_breeder_list") or [])


class MemoryAdmins:
    def __init__(self, store: _Store) -> None:
        self._store = store
        self._docs = store.docs("admins")

    def get_admin(self, admin_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(admin_id)
            if doc is None:
                return None
            return {k: copy.deepcopy(v) for k, v in doc.items() if k != "activity_logs"}

    def append_activity_log(self, admin_id: str, entry: dict[str, Any]) -> bool:
        with self._store.lock:
            doc = self._docs.get(admin_id)
            if doc is None:
                return False
            doc.setdefault("activity_logs", []).append(copy.deepcopy(entry))
            return True

    def list_activity_logs(self, admin_id: str, limit: int = 50) -> list[dict[str, Any]]:
        with self._store.lock:
            doc = self._docs.get(admin_id) or {}
            # Stable sort keeps append order for equal timestamps, reversed for newest first
            items = list(reversed(doc.get("activity_logs") or []))
            items.sort(key=lambda e: e.get("performed_at") or 0, reverse=True)
            return _page(items, 0, limit)


class MemoryReviews:
    def __init__(self, store: _Store) -> None:
        self._store = store
        self._docs = store.docs("breeder_reviews")

    def insert_review(self, doc: dict[str, Any]) -> str:
        with self._store.lock:
            if any(
                d["adopter_id"] == doc["adopter_id"] and d["breeder_id"] == doc["breeder_id"] for d in self._docs.values()
            ):
                raise ConflictError(
                    "This breeder has already been reviewed by the adopter",
                    code="review_already_exists",
                )
            self._docs[doc["_key"]] = copy.deepcopy(doc)
            return doc["_key"]

    def get_review(self, review_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(review_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find_review(self, adopter_id: str, breeder_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            for doc in self._docs.values():
                if doc["adopter_id"] == adopter_id and doc["breeder_id"] == breeder_id:
                    return copy.deepcopy(doc)
            return None

    def hide_review(self, review_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(review_id)
            if doc is None or doc.get("is_visible") is not True:
                return None
            doc["is_visible"] = False
            doc["hidden_at"] = now_ms()
            return copy.deepcopy(doc)

    def flag_review(self, review_id: str, reporter_id: str, reason: str, description: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(review_id)
            if doc is None or doc.get("is_reported") is True:
                return None
            doc.update(
                {
                    "is_reported": True,
                    "reported_by": reporter_id,
                    "report_reason": reason,
                    "report_description": description,
                    "reported_at": now_ms(),
                }
            )
            return copy.deepcopy(doc)

    def clear_report_flag(self, review_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(review_id)
            if doc is None or doc.get("is_reported") is not True:
                return None
            doc["is_reported"] = False
            return copy.deepcopy(doc)

    def visible_rating_summary(self, breeder_id: str) -> tuple[int, int]:
        with self._store.lock:
            ratings = [
                int(d["rating"])
                for d in self._docs.values()
                if d["breeder_id"] == breeder_id and d.get("is_visible") is True
            ]
            return (len(ratings), sum(ratings))

    def _visible(self, breeder_id: str | None) -> list[dict[str, Any]]:
        return [
            d
            for d in self._docs.values()
            if d.get("is_visible") is True and (not breeder_id or d["breeder_id"] == breeder_id)
        ]

    def list_visible_for_breeder(self, breeder_id: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        with self._store.lock:
            items = sorted(self._visible(breeder_id), key=lambda d: d.get("written_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_visible(self, breeder_id: str | None = None) -> int:
        with self._store.lock:
            return len(self._visible(breeder_id))

    def _reported(self) -> list[dict[str, Any]]:
        return [d for d in self._docs.values() if d.get("is_reported") is True and d.get("is_visible") is True]

    def list_reported(self, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        with self._store.lock:
            items = sorted(self._reported(), key=lambda d: d.get("reported_at") or 0, reverse=True)
            return _page(items, skip, limit)

    def count_reported(self) -> int:
        with self._store.lock:
            return len(self._reported())


class MemoryPets:
    def __init__(self, store: _Store) -> None:
        self._store = store
        self._docs = store.docs("available_pets")

    def get_pet(self, pet_id: str) -> dict[str, Any] | None:
        with self._store.lock:
            doc = self._docs.get(pet_id)
            return copy.deepcopy(doc) if doc is not None else None


def _verification_status(breeder: dict[str, Any]) -> str:
    return (breeder.get("verification") or {}).get("status") or "pending"


class MemoryDatabase:
    """Database look-alike with seed helpers for tests."""

    def __init__(self) -> None:
        self._store = _Store()
        # Raw handle; only the schema bootstrap touches it
        self.db = MagicMock(name="arango_db")

        self.breeders = MemoryBreeders(self._store)
        self.adopters = MemoryAdopters(self._store)
        self.admins = MemoryAdmins(self._store)
        self.adoption_applications = MemoryApplications(self._store)
        self.breeder_reviews = MemoryReviews(self._store)
        self.available_pets = MemoryPets(self._store)

    def raw(self, collection: str, key: str) -> dict[str, Any]:
        """Stored document as-is (for assertions on fields no read exposes)."""
        return self._store.docs(collection)[key]

    # ------------------------------------------------------------------
    # Seed helpers
    # ------------------------------------------------------------------

    def add_breeder(
        self,
        key: str,
        name: str = "Happy Paws Kennel",
        status: str = "active",
        verification_status: str | None = "approved",
        city: str = "Seoul",
        district: str = "Gangnam",
        **extra: Any,
    ) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "_key": key,
            "name": name,
            "email": f"{key}@breeders.example",
            "status": status,
            "profile_image": f"profiles/{key}.jpg",
            "profile": {"location": {"city": city, "district": district}},
            "stats": {
                "total_applications": 0,
                "completed_adoptions": 0,
                "average_rating": 0.0,
                "total_reviews": 0,
                "profile_views": 0,
            },
            "received_applications": [],
            "reports": [],
        }
        if verification_status is not None:
            doc["verification"] = {"status": verification_status, "plan": "basic", "documents": []}
        doc.update(extra)
        self._store.docs("breeders")[key] = doc
        return doc

    def add_adopter(self, key: str, name: str = "Jamie Kim", account_status: str = "active", **extra: Any) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "_key": key,
            "name": name,
            "email": f"{key}@adopters.example",
            "account_status": account_status,
            "favorite_breeder_list": [],
        }
        doc.update(extra)
        self._store.docs("adopters")[key] = doc
        return doc

    def add_admin(
        self,
        key: str,
        permissions: dict[str, bool] | None = None,
        status: str = "active",
        name: str = "Ops Admin",
    ) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "_key": key,
            "name": name,
            "status": status,
            "permissions": dict(ALL_PERMISSIONS if permissions is None else permissions),
            "activity_logs": [],
        }
        self._store.docs("admins")[key] = doc
        return doc

    def add_pet(self, key: str, breeder_id: str, name: str = "Mochi", status: str = "available") -> dict[str, Any]:
        doc = {"_key": key, "breeder_id": breeder_id, "name": name, "status": status}
        self._store.docs("available_pets")[key] = doc
        return doc

    def add_application(
        self,
        key: str,
        adopter_id: str,
        breeder_id: str,
        status: str = "consultation_pending",
        applied_at: int = 1_700_000_000_000,
        project: bool = True,
    ) -> dict[str, Any]:
        """Insert a ledger record directly, optionally with its breeder view entry."""
        doc: dict[str, Any] = {
            "_key": key,
            "breeder_id": breeder_id,
            "adopter_id": adopter_id,
            "adopter_name": "Jamie Kim",
            "pet_id": None,
            "pet_name": None,
            "status": status,
            "form_answers": {},
            "applied_at": applied_at,
            "processed_at": None,
            "breeder_notes": None,
            "pending_pair": f"{adopter_id}:{breeder_id}" if status == "consultation_pending" else None,
        }
        self._store.docs("adoption_applications")[key] = doc
        if project:
            self.breeders.project_received_application(
                breeder_id,
                {
                    "application_id": key,
                    "adopter_id": adopter_id,
                    "adopter_name": doc["adopter_name"],
                    "pet_id": None,
                    "pet_name": None,
                    "status": status,
                    "applied_at": applied_at,
                    "processed_at": None,
                },
            )
        return doc

    def add_review(
        self,
        key: str,
        adopter_id: str,
        breeder_id: str,
        rating: int,
        is_visible: bool = True,
        is_reported: bool = False,
        written_at: int = 1_700_000_000_000,
    ) -> dict[str, Any]:
        doc = {
            "_key": key,
            "breeder_id": breeder_id,
            "adopter_id": adopter_id,
            "adopter_name": "Jamie Kim",
            "type": "consultation",
            "rating": rating,
            "content": "Friendly and transparent about health checks.",
            "written_at": written_at,
            "is_visible": is_visible,
            "is_reported": is_reported,
        }
        self._store.docs("breeder_reviews")[key] = doc
        return doc
