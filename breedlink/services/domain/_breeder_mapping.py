"""DTO mapping functions for breeder-facing and admin-facing reads.

Converts raw breeder documents to typed DTOs for service responses. Kept
separate from components to maintain clean layer boundaries.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from breedlink.components.consistency import format_location
from breedlink.helpers.dto.admin_dto import PendingVerification
from breedlink.helpers.dto.breeder_dto import BreederStats, PublicBreederProfile
from breedlink.helpers.dto.moderation_dto import VerificationInfo

FileUrlResolver = Callable[[str], str]


def map_pending_verification(
    breeder: dict[str, Any],
    resolve_file_url: FileUrlResolver | None = None,
) -> PendingVerification:
    """
    Convert a breeder document to the admin verification view.

    Document file names are resolved to URLs at read time only; stored
    documents keep the file key.
    """
    verification = VerificationInfo.from_doc(breeder.get("verification"))
    refs = [d.file_name for d in verification.documents]
    if resolve_file_url is not None:
        refs = [resolve_file_url(name) for name in refs]
    return PendingVerification(
        breeder_id=breeder["_key"],
        breeder_name=breeder.get("name", ""),
        email=breeder.get("email"),
        status=verification.status,
        plan=verification.plan,
        submitted_at=verification.submitted_at,
        document_refs=refs,
        submitted_by_email=verification.submitted_by_email,
    )


def map_public_profile(breeder: dict[str, Any]) -> PublicBreederProfile:
    return PublicBreederProfile(
        breeder_id=breeder["_key"],
        name=breeder.get("name", ""),
        profile_image=breeder.get("profile_image"),
        location=format_location(breeder),
        stats=BreederStats.from_doc(breeder.get("stats")),
    )
