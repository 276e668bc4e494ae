"""Value types exchanged with the context-storage service.

The service itself (store, retrieve, search, archive, checkpoint) lives
outside this package; these models only fix the shape of its requests
and replies.
"""
from typing import Optional, Dict, Any, Literal
from pydantic import Field, model_validator
from memfabric.models import WireModel, EntryType, IsoInstant, parse_instant

VERSION = "0.1.0"
PROTOCOL_VERSION = "1.0.0"

class DateRange(WireModel):
    start: IsoInstant
    end: IsoInstant

    @model_validator(mode="after")
    def check_order(self):
        if parse_instant(self.start) > parse_instant(self.end):
            raise ValueError("dateRange.start must not be after dateRange.end")
        return self

class MemoryQueryOptions(WireModel):
    limit: Optional[int] = Field(default=None, ge=1)
    offset: Optional[int] = Field(default=None, ge=0)
    type: Optional[EntryType] = None
    project: Optional[str] = None
    branch: Optional[str] = None
    date_range: Optional[DateRange] = None
    semantic_query: Optional[str] = None
    semantic_threshold: Optional[float] = Field(default=None, ge=0, le=1)
    include_archived: bool = False
    sort_by: Literal['timestamp', 'relevance'] = 'timestamp'
    sort_order: Literal['asc', 'desc'] = 'desc'

class ArchiveOptions(WireModel):
    older_than: IsoInstant
    project: Optional[str] = None
    branch: Optional[str] = None
    dry_run: bool = False

class MemoryStats(WireModel):
    total_entries: int = Field(ge=0)
    entries_by_type: Dict[str, int] = {}
    storage_size: int = Field(ge=0) # bytes
    average_entry_size: float = Field(ge=0)
    oldest_entry: Optional[IsoInstant] = None
    newest_entry: Optional[IsoInstant] = None
    most_active_project: Optional[str] = None
    most_active_branch: Optional[str] = None

class MemoryOperationResult(WireModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
