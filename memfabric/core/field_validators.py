"""Independent attribute checks run once an entry is structurally valid.

Each validator reports every rule its input breaks, never just the first.
Limits are passed in explicitly; the module holds no state.
"""
import json
import math
import re
from typing import Any, List
from memfabric.config import DEFAULT_LIMITS, ValidationLimits
from memfabric.models import EntryError, ValidationResult

def _result(value: Any, errors: List[EntryError]) -> ValidationResult:
    if errors:
        return ValidationResult.fail(errors)
    return ValidationResult.ok(value)

def validate_project_name(name: str, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationResult:
    if not isinstance(name, str):
        return ValidationResult.fail([EntryError(
            kind="ProjectNameError", code="INVALID_TYPE", message="Project name must be a string")])

    errors = []
    if len(name) < limits.project_min_length:
        errors.append(EntryError(
            kind="ProjectNameError", code="TOO_SHORT",
            message=f"Project name must be at least {limits.project_min_length} character(s)",
            context={"length": len(name), "min": limits.project_min_length}))
    if len(name) > limits.project_max_length:
        errors.append(EntryError(
            kind="ProjectNameError", code="TOO_LONG",
            message=f"Project name must be at most {limits.project_max_length} characters",
            context={"length": len(name), "max": limits.project_max_length}))
    if not re.fullmatch(limits.project_pattern, name):
        errors.append(EntryError(
            kind="ProjectNameError", code="INVALID_FORMAT",
            message="Project name can only contain letters, numbers, underscores, and hyphens",
            context={"pattern": limits.project_pattern}))
    return _result(name, errors)

def validate_branch_name(name: str, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationResult:
    if not isinstance(name, str):
        return ValidationResult.fail([EntryError(
            kind="BranchNameError", code="INVALID_TYPE", message="Branch name must be a string")])

    errors = []
    if len(name) < limits.branch_min_length:
        errors.append(EntryError(
            kind="BranchNameError", code="TOO_SHORT",
            message=f"Branch name must be at least {limits.branch_min_length} character(s)",
            context={"length": len(name), "min": limits.branch_min_length}))
    if len(name) > limits.branch_max_length:
        errors.append(EntryError(
            kind="BranchNameError", code="TOO_LONG",
            message=f"Branch name must be at most {limits.branch_max_length} characters",
            context={"length": len(name), "max": limits.branch_max_length}))
    if not re.fullmatch(limits.branch_pattern, name):
        errors.append(EntryError(
            kind="BranchNameError", code="INVALID_FORMAT",
            message="Branch name contains invalid characters",
            context={"pattern": limits.branch_pattern}))
    if name.startswith("/") or name.endswith("/"):
        errors.append(EntryError(
            kind="BranchNameError", code="INVALID_SLASH_POSITION",
            message="Branch name cannot start or end with a slash"))
    if "//" in name:
        errors.append(EntryError(
            kind="BranchNameError", code="CONSECUTIVE_SLASHES",
            message="Branch name cannot contain consecutive slashes"))
    return _result(name, errors)

def validate_content_size(content: Any, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationResult:
    try:
        serialized = json.dumps(content, ensure_ascii=False, separators=(",", ":"))
        # surrogatepass: a lone surrogate counts as 3 bytes, like a U+FFFD replacement
        size = len(serialized.encode("utf-8", errors="surrogatepass"))
    except (TypeError, ValueError) as e:
        return ValidationResult.fail([EntryError(
            kind="ContentSizeError", code="CONTENT_NOT_SERIALIZABLE",
            message=f"Content cannot be serialized to JSON: {e}")])

    errors = []
    if size > limits.max_content_bytes:
        errors.append(EntryError(
            kind="ContentSizeError", code="CONTENT_TOO_LARGE",
            message=f"Content size ({size} bytes) exceeds maximum allowed size ({limits.max_content_bytes} bytes)",
            context={"size": size, "max": limits.max_content_bytes}))
    # Only a bare string payload is length-checked; strings nested inside a map are not.
    if isinstance(content, str) and len(content) > limits.max_string_length:
        errors.append(EntryError(
            kind="ContentSizeError", code="STRING_TOO_LONG",
            message=f"String length ({len(content)}) exceeds maximum allowed length ({limits.max_string_length})",
            context={"length": len(content), "max": limits.max_string_length}))
    return _result(content, errors)

def validate_embedding(embedding: Any, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationResult:
    if not isinstance(embedding, (list, tuple)):
        return ValidationResult.fail([EntryError(
            kind="EmbeddingError", code="INVALID_TYPE",
            message="Embedding must be an array of numbers")])

    errors = []
    if len(embedding) == 0:
        errors.append(EntryError(
            kind="EmbeddingError", code="EMPTY_EMBEDDING", message="Embedding cannot be empty"))
    if len(embedding) not in limits.embedding_dimensions:
        supported = ", ".join(str(d) for d in limits.embedding_dimensions)
        errors.append(EntryError(
            kind="EmbeddingError", code="INVALID_DIMENSION",
            message=f"Embedding dimension ({len(embedding)}) is not supported. Supported dimensions: {supported}",
            context={"dimension": len(embedding), "supported": list(limits.embedding_dimensions)}))
    for index, value in enumerate(embedding):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or (
                isinstance(value, float) and not math.isfinite(value)):
            errors.append(EntryError(
                kind="EmbeddingError", code="INVALID_VALUE",
                message=f"Embedding value at index {index} is not a valid number",
                path=[str(index)]))
    return _result(embedding, errors)
