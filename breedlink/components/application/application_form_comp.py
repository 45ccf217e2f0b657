"""Adoption application form validation.

The standard questions are required; breeders may add custom questions, so
unknown keys are kept as extra answers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from breedlink.helpers.exceptions import ValidationError

LONG_ANSWER_MAX_LENGTH = 1500


class ApplicationFormAnswers(BaseModel):
    """Standard adoption application questions."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    self_introduction: str = Field(min_length=1, max_length=LONG_ANSWER_MAX_LENGTH)
    family_members: str = Field(min_length=1)
    all_family_consent: bool
    allergy_test_info: str = Field(min_length=1)
    time_away_from_home: str = Field(min_length=1)
    living_space_description: str = Field(min_length=1, max_length=LONG_ANSWER_MAX_LENGTH)
    previous_pet_experience: str = Field(min_length=1, max_length=LONG_ANSWER_MAX_LENGTH)


def validate_form_answers(answers: dict[str, Any]) -> dict[str, Any]:
    """
    Validate raw form answers.

    Args:
        answers: Answers as submitted by the adopter

    Returns:
        Normalized answers (standard fields plus any custom answers)

    Raises:
        ValidationError: First failing field, e.g. "self_introduction: String should have at most 1500 characters"
    """
    try:
        form = ApplicationFormAnswers.model_validate(answers)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(part) for part in first.get("loc", ())) or "form_answers"
        raise ValidationError(f"{field_path}: {first.get('msg', 'invalid value')}", code="invalid_form_answers") from e
    return form.model_dump()
