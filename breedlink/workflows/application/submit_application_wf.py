"""Submit adoption application workflow."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from breedlink.components.application import project_application, validate_form_answers
from breedlink.components.consistency import check_no_duplicate_pending_application
from breedlink.helpers.dto.application_dto import CONSULTATION_PENDING, SubmitApplicationResult
from breedlink.helpers.exceptions import ValidationError
from breedlink.helpers.time_helper import now_ms
from breedlink.persistence.database.applications_aql import pending_pair_key

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

PET_AVAILABLE = "available"


def submit_application_workflow(
    db: Database,
    adopter_id: str,
    breeder_id: str,
    form_answers: dict[str, Any],
    privacy_consent: bool,
    pet_id: str | None = None,
) -> SubmitApplicationResult:
    """
    Submit a consultation/adoption application from an adopter to a breeder.

    Steps:
    1. Validate adopter, breeder, pet, consent and form answers
    2. Reject a second pending application for the pair
    3. Insert the ledger record (unique pending_pair index closes the race)
    4. Project into the breeder's received_applications

    Args:
        db: Database instance
        adopter_id: Applying adopter
        breeder_id: Target breeder
        form_answers: Application form answers
        privacy_consent: Adopter agreed to personal data collection
        pet_id: Optional specific pet the application is about

    Returns:
        SubmitApplicationResult with the new application id

    Raises:
        ValidationError: A precondition failed
        ConflictError: code "application_already_pending"
        ProjectionError: Ledger saved, breeder view not updated
    """
    adopter = db.adopters.get_adopter(adopter_id)
    if adopter is None:
        raise ValidationError(f"Adopter not found: {adopter_id}", code="adopter_not_found")
    if adopter.get("account_status", "active") != "active":
        raise ValidationError("Adopter account is not active", code="adopter_inactive")

    breeder = db.breeders.get_breeder(breeder_id)
    if breeder is None:
        raise ValidationError(f"Breeder not found: {breeder_id}", code="breeder_not_found")

    pet_name = None
    if pet_id:
        pet = db.available_pets.get_pet(pet_id)
        if pet is None or pet.get("breeder_id") != breeder_id:
            raise ValidationError(f"Pet {pet_id} not found for breeder {breeder_id}", code="pet_not_found")
        if pet.get("status") != PET_AVAILABLE:
            raise ValidationError(f"Pet {pet_id} is not available for adoption", code="pet_not_available")
        pet_name = pet.get("name")

    if privacy_consent is not True:
        raise ValidationError("Consent to personal data collection is required", code="privacy_consent_required")

    answers = validate_form_answers(form_answers)

    check_no_duplicate_pending_application(db, adopter_id, breeder_id)

    ts = now_ms()
    application_id = uuid.uuid4().hex
    application = {
        "_key": application_id,
        "breeder_id": breeder_id,
        "adopter_id": adopter_id,
        "adopter_name": adopter.get("name"),
        "adopter_email": adopter.get("email"),
        "pet_id": pet_id,
        "pet_name": pet_name,
        "status": CONSULTATION_PENDING,
        "form_answers": answers,
        "applied_at": ts,
        "processed_at": None,
        "breeder_notes": None,
        "pending_pair": pending_pair_key(adopter_id, breeder_id),
        "updated_at": ts,
    }
    db.adoption_applications.insert_application(application)
    logger.info(f"[submit_application_wf] {adopter_id} applied to {breeder_id} as {application_id}")

    project_application(db, application)

    return SubmitApplicationResult(application_id=application_id, status=CONSULTATION_PENDING)
