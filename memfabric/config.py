import os
from dataclasses import dataclass
from typing import Optional, Tuple

def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value

LOG_LEVEL_DEFAULT = _env("MEMFABRIC_LOG_LEVEL", "WARNING")

@dataclass(frozen=True)
class ValidationLimits:
    """Constant tables shared by every validator. Built once, passed in explicitly."""
    project_pattern: str = r"[A-Za-z0-9_-]+"
    project_min_length: int = 1
    project_max_length: int = 100
    branch_pattern: str = r"[A-Za-z0-9/_-]+"
    branch_min_length: int = 1
    branch_max_length: int = 250
    max_content_bytes: int = 1024 * 1024
    max_string_length: int = 100_000
    embedding_dimensions: Tuple[int, ...] = (384, 512, 768, 1024, 1536)

DEFAULT_LIMITS = ValidationLimits()

def load_limits() -> ValidationLimits:
    """Build limits from MEMFABRIC_* environment variables, falling back to defaults."""
    dims = _env("MEMFABRIC_EMBEDDING_DIMENSIONS")
    return ValidationLimits(
        max_content_bytes=int(_env("MEMFABRIC_MAX_CONTENT_BYTES", str(DEFAULT_LIMITS.max_content_bytes))),
        max_string_length=int(_env("MEMFABRIC_MAX_STRING_LENGTH", str(DEFAULT_LIMITS.max_string_length))),
        embedding_dimensions=(
            tuple(int(d) for d in dims.split(",") if d.strip()) if dims else DEFAULT_LIMITS.embedding_dimensions
        ),
    )
