import logging
from typing import Dict, Type
from pydantic import BaseModel, ValidationError
from memfabric.models import (
    ENTRY_TYPES, MemoryEntryEnvelope, ValidationResult,
    TaskState, CommitDelta, ReasoningEntry, SummaryCheckpoint, BranchMeta,
)
from memfabric.core.errors import from_pydantic, unknown_variant_error

logger = logging.getLogger(__name__)

# One typed entry model per discriminant; its `content` field is the variant schema.
ENTRY_MODELS: Dict[str, Type[MemoryEntryEnvelope]] = {
    "TaskState": TaskState,
    "CommitDelta": CommitDelta,
    "ReasoningEntry": ReasoningEntry,
    "SummaryCheckpoint": SummaryCheckpoint,
    "BranchMeta": BranchMeta,
}

_unhandled = set(ENTRY_TYPES).symmetric_difference(ENTRY_MODELS)
if _unhandled:
    raise RuntimeError(f"Dispatch table does not match EntryType: {sorted(_unhandled)}")

def content_schema(entry_type: str) -> Type[BaseModel]:
    """Content model for a discriminant. Raises KeyError for unknown types."""
    return ENTRY_MODELS[entry_type].model_fields["content"].annotation

def dispatch(envelope: MemoryEntryEnvelope) -> ValidationResult:
    """Validate `content` against the schema selected by `envelope.type`.

    Returns the typed entry, or every content violation with a path rooted at
    "content". Unknown discriminants yield one UnknownVariantError and no
    content validation.
    """
    entry_model = ENTRY_MODELS.get(envelope.type)
    if entry_model is None:
        return ValidationResult.fail([unknown_variant_error(envelope.type)])

    try:
        entry = entry_model.model_validate(envelope.model_dump(by_alias=True, exclude_unset=True))
    except ValidationError as e:
        errors = from_pydantic(e, "ContentSchemaError")
        logger.debug(f"{envelope.type} content rejected with {len(errors)} error(s)")
        return ValidationResult.fail(errors)

    return ValidationResult.ok(entry)
