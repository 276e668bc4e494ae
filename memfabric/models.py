from typing import Optional, List, Dict, Any, Union, Literal, Tuple, get_args
from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictFloat
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
import datetime
import re

# --- Discriminants & enums ---

EntryType = Literal['TaskState', 'CommitDelta', 'ReasoningEntry', 'SummaryCheckpoint', 'BranchMeta']
EntryStatus = Literal['draft', 'verified', 'archived']
FileAction = Literal['added', 'modified', 'deleted', 'renamed']
Environment = Literal['development', 'staging', 'production']

ENTRY_TYPES: Tuple[str, ...] = get_args(EntryType)
ENTRY_STATUSES: Tuple[str, ...] = get_args(EntryStatus)

# --- Primitive field rules ---

_UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_INSTANT_RE = re.compile(r"([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})(\.[0-9]+)?(Z|([+-])([0-9]{2}):([0-9]{2}))")

def parse_instant(value: str) -> datetime.datetime:
    """Parse an ISO-8601 instant (a zone designator is mandatory). Raises ValueError."""
    match = _INSTANT_RE.fullmatch(value)
    if not match:
        raise ValueError(f"Not an ISO-8601 instant: {value!r}")
    base = datetime.datetime.strptime(match.group(1), "%Y-%m-%dT%H:%M:%S")
    if match.group(2):
        base = base.replace(microsecond=int((match.group(2)[1:] + "000000")[:6]))
    if match.group(3) == "Z":
        return base.replace(tzinfo=datetime.timezone.utc)
    hours, minutes = int(match.group(5)), int(match.group(6))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid UTC offset in {value!r}")
    offset = datetime.timedelta(hours=hours, minutes=minutes)
    if match.group(4) == "-":
        offset = -offset
    return base.replace(tzinfo=datetime.timezone(offset))

def _check_uuid(value: str) -> str:
    if not _UUID_RE.fullmatch(value):
        raise PydanticCustomError("invalid_format", "Invalid uuid")
    return value

def _check_instant(value: str) -> str:
    try:
        parse_instant(value)
    except ValueError:
        raise PydanticCustomError("invalid_format", "Invalid ISO-8601 datetime")
    return value

# Kept as the caller's string so a validated entry re-validates to the same value.
UuidStr = Annotated[str, AfterValidator(_check_uuid)]
IsoInstant = Annotated[str, AfterValidator(_check_instant)]

class WireModel(BaseModel):
    # Wire keys are camelCase (taskId, activeFiles, ...); unknown keys are dropped.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# --- Content variants ---

class TaskStateContent(WireModel):
    description: str
    goals: List[str]
    progress: StrictFloat = Field(ge=0, le=100)
    context: Dict[str, Any]
    active_files: List[str]
    working_directory: str
    dependencies: Optional[List[str]] = None
    blockers: Optional[List[str]] = None

class CommitAuthor(WireModel):
    name: str
    email: str

class FileChange(WireModel):
    path: str
    action: FileAction
    lines_added: Optional[StrictFloat] = None
    lines_deleted: Optional[StrictFloat] = None

class SemanticChanges(WireModel):
    functions: Optional[List[str]] = None
    classes: Optional[List[str]] = None
    imports: Optional[List[str]] = None
    configs: Optional[List[str]] = None

class CommitDeltaContent(WireModel):
    commit_hash: str
    message: str
    author: CommitAuthor
    files: List[FileChange]
    semantic: Optional[SemanticChanges] = None

class CodeRef(WireModel):
    file: str
    lines: Optional[Tuple[StrictFloat, StrictFloat]] = None # [start, end]
    content: Optional[str] = None

class ReasoningEntryContent(WireModel):
    thread_id: str
    model: str
    query: str
    response: str
    reasoning: Optional[str] = None
    code_refs: Optional[List[CodeRef]] = None
    actions: Optional[List[str]] = None

class Period(WireModel):
    start: IsoInstant
    end: IsoInstant

class SummaryCheckpointContent(WireModel):
    period: Period
    summary: str
    achievements: List[str]
    decisions: List[str]
    technical_debt: Optional[List[str]] = None
    metrics: Optional[Dict[str, StrictFloat]] = None
    compressed_entries: Optional[List[str]] = None # ids of entries folded into this checkpoint

class BranchMetaContent(WireModel):
    purpose: str
    parent_branch: str
    child_branches: Optional[List[str]] = None
    created_at: IsoInstant
    merge_target: Optional[IsoInstant] = None
    feature_flags: Optional[List[str]] = None
    environment: Optional[Environment] = None
    related_branches: Optional[List[str]] = None

# --- Entries ---

class MemoryEntryEnvelope(WireModel):
    """Variant-independent shape of a memory entry; `content` is any map here."""
    id: UuidStr
    type: EntryType
    project: str = Field(min_length=1)
    task_id: Optional[str] = None
    branch: str = Field(min_length=1)
    timestamp: IsoInstant
    status: EntryStatus # opaque here: transition legality is not checked
    content: Dict[str, Any]
    metadata: Optional[Dict[str, Any]] = None
    embedding: Optional[List[Any]] = None # element checks belong to the embedding validator
    tags: Optional[List[str]] = None

class TaskState(MemoryEntryEnvelope):
    type: Literal['TaskState']
    content: TaskStateContent

class CommitDelta(MemoryEntryEnvelope):
    type: Literal['CommitDelta']
    content: CommitDeltaContent

class ReasoningEntry(MemoryEntryEnvelope):
    type: Literal['ReasoningEntry']
    content: ReasoningEntryContent

class SummaryCheckpoint(MemoryEntryEnvelope):
    type: Literal['SummaryCheckpoint']
    content: SummaryCheckpointContent

class BranchMeta(MemoryEntryEnvelope):
    type: Literal['BranchMeta']
    content: BranchMetaContent

MemoryEntry = Union[TaskState, CommitDelta, ReasoningEntry, SummaryCheckpoint, BranchMeta]

# --- Validation results ---

ErrorKind = Literal[
    'StructuralError',
    'UnknownVariantError',
    'ContentSchemaError',
    'ProjectNameError',
    'BranchNameError',
    'ContentSizeError',
    'EmbeddingError',
]

class EntryError(BaseModel):
    kind: ErrorKind
    code: str
    message: str
    path: List[str] = []
    context: Optional[Dict[str, Any]] = None

class ValidationResult(BaseModel):
    """Outcome of any validator: `data` on success, a non-empty `errors` list otherwise."""
    success: bool
    data: Optional[Any] = None
    errors: Optional[List[EntryError]] = None

    @classmethod
    def ok(cls, data: Any) -> "ValidationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, errors: List[EntryError]) -> "ValidationResult":
        return cls(success=False, errors=list(errors))

    def to_wire(self) -> Dict[str, Any]:
        """Render as the JSON wire shape: {success, data?} or {success, errors?}."""
        out: Dict[str, Any] = {"success": self.success}
        if self.success:
            data = self.data
            if isinstance(data, BaseModel):
                data = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
            out["data"] = data
        else:
            out["errors"] = [e.model_dump(mode="json", exclude_none=True) for e in self.errors or []]
        return out
