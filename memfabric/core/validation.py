import logging
from typing import Any, List
from memfabric.config import DEFAULT_LIMITS, ValidationLimits
from memfabric.models import EntryError, ValidationResult
from memfabric.core.structural import validate_structure
from memfabric.core.dispatch import dispatch
from memfabric.core.field_validators import (
    validate_project_name, validate_branch_name, validate_content_size, validate_embedding,
)

logger = logging.getLogger(__name__)

def validate_typed(candidate: Any) -> ValidationResult:
    """Structural check, then content-schema dispatch. Stops at the first failing phase."""
    structure = validate_structure(candidate)
    if not structure.success:
        return structure
    return dispatch(structure.data)

def validate_memory_entry(candidate: Any, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationResult:
    """Full validation of a candidate memory entry.

    Phase 1 (fail-fast): structure, then content schema; the first failing
    phase's errors are returned alone. Phase 2 (collect-all): project, branch,
    content size and, when present, embedding checks; all of their errors are
    merged in that order.
    """
    typed = validate_typed(candidate)
    if not typed.success:
        logger.debug(f"Entry rejected before field checks: {[e.code for e in typed.errors]}")
        return typed

    entry = typed.data
    checks = [
        validate_project_name(entry.project, limits),
        validate_branch_name(entry.branch, limits),
        validate_content_size(entry.content.model_dump(by_alias=True, exclude_unset=True), limits),
    ]
    if entry.embedding is not None:
        checks.append(validate_embedding(entry.embedding, limits))

    errors: List[EntryError] = []
    for result in checks:
        errors.extend(result.errors or [])

    if errors:
        logger.debug(f"{entry.type} {entry.id} failed field checks: {[e.code for e in errors]}")
        return ValidationResult.fail(errors)

    logger.debug(f"{entry.type} {entry.id} accepted")
    return ValidationResult.ok(entry)
