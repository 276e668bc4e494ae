from typing import Any, Dict, List
from mcp.server.fastmcp import FastMCP
from memfabric.config import load_limits
from memfabric.models import ENTRY_TYPES
from memfabric.core.dispatch import ENTRY_MODELS, content_schema
from memfabric.core.validation import validate_memory_entry, validate_typed

mcp = FastMCP("memfabric")

LIMITS = load_limits()

@mcp.tool()
def mem_validate(entry: Dict[str, Any], structure_only: bool = False) -> Dict:
    """Validate a memory entry; returns {success, data} or {success, errors}."""
    if structure_only:
        return validate_typed(entry).to_wire()
    return validate_memory_entry(entry, LIMITS).to_wire()

@mcp.tool()
def mem_types() -> List[str]:
    """List the memory entry types."""
    return list(ENTRY_TYPES)

@mcp.tool()
def mem_schema(type: str) -> Dict:
    """JSON Schema of the content for a memory entry type."""
    if type not in ENTRY_MODELS:
        return {"status": "error", "error_code": "UNKNOWN_VARIANT", "message": f"Unknown memory entry type: {type}"}
    return content_schema(type).model_json_schema(by_alias=True)

if __name__ == "__main__":
    mcp.run()
