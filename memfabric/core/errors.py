from typing import Any, Dict, List, Sequence
from pydantic import ValidationError
from memfabric.models import ENTRY_TYPES, EntryError, ErrorKind

_RANGE_TYPES = {"greater_than", "greater_than_equal", "less_than", "less_than_equal"}

_CODE_MAP = {
    "missing": "REQUIRED",
    "literal_error": "INVALID_ENUM",
    "enum": "INVALID_ENUM",
    "string_too_short": "TOO_SHORT",
    "too_short": "TOO_SHORT",
    "string_too_long": "TOO_LONG",
    "too_long": "TOO_LONG",
    "invalid_format": "INVALID_FORMAT",
}

def error_code(pydantic_type: str) -> str:
    """Map a pydantic error type onto the protocol's error code vocabulary."""
    if pydantic_type in _CODE_MAP:
        return _CODE_MAP[pydantic_type]
    if pydantic_type in _RANGE_TYPES:
        return "OUT_OF_RANGE"
    if pydantic_type.endswith("_type"):
        return "INVALID_TYPE"
    return pydantic_type.upper()

def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)

def from_pydantic(exc: ValidationError, kind: ErrorKind, prefix: Sequence[str] = ()) -> List[EntryError]:
    """Translate every error pydantic collected, in pydantic's (field) order."""
    errors = []
    for err in exc.errors(include_url=False):
        context: Dict[str, Any] = {key: _plain(value) for key, value in (err.get("ctx") or {}).items()}
        # For `missing` the input is the parent object, not the offending value.
        if err["type"] != "missing":
            context["received"] = type(err["input"]).__name__
        errors.append(EntryError(
            kind=kind,
            code=error_code(err["type"]),
            message=err["msg"],
            path=[*prefix, *(str(part) for part in err["loc"])],
            context=context or None,
        ))
    return errors

def unknown_variant_error(value: Any) -> EntryError:
    return EntryError(
        kind="UnknownVariantError",
        code="UNKNOWN_VARIANT",
        message=f"Unknown memory entry type: {value}",
        path=["type"],
        context={"received": _plain(value), "expected": list(ENTRY_TYPES)},
    )
