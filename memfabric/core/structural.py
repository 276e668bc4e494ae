import logging
from collections.abc import Mapping
from typing import Any
from pydantic import BaseModel, ValidationError
from memfabric.models import MemoryEntryEnvelope, ValidationResult
from memfabric.core.errors import from_pydantic, unknown_variant_error

logger = logging.getLogger(__name__)

def validate_structure(candidate: Any) -> ValidationResult:
    """Check the entry envelope without looking inside `content`.

    Required fields, uuid `id`, known `type` and `status`, non-empty
    `project`/`branch`, ISO-8601 `timestamp`, map-shaped `content`. Every
    violation is reported. An unrecognised `type` is reported as a single
    UnknownVariantError; all other problems are StructuralErrors.
    """
    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump(by_alias=True, exclude_unset=True)

    try:
        envelope = MemoryEntryEnvelope.model_validate(candidate)
    except ValidationError as e:
        errors = []
        for error in from_pydantic(e, "StructuralError"):
            if error.path == ["type"] and error.code == "INVALID_ENUM":
                value = candidate.get("type") if isinstance(candidate, Mapping) else None
                error = unknown_variant_error(value)
            errors.append(error)
        logger.debug(f"Envelope rejected with {len(errors)} error(s)")
        return ValidationResult.fail(errors)

    return ValidationResult.ok(envelope)
