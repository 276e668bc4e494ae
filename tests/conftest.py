import copy
import pytest

ENTRY_ID = "123e4567-e89b-12d3-a456-426614174000"

CONTENTS = {
    "TaskState": {
        "description": "Implement entry validation",
        "goals": ["collect every violation"],
        "progress": 40,
        "context": {"phase": 2, "notes": ["structural first"]},
        "activeFiles": ["memfabric/models.py"],
        "workingDirectory": "/repo",
    },
    "CommitDelta": {
        "commitHash": "a1b2c3d4",
        "message": "Add field validators",
        "author": {"name": "Dev", "email": "dev@example.com"},
        "files": [{"path": "memfabric/core/field_validators.py", "action": "added", "linesAdded": 120}],
        "semantic": {"functions": ["validate_embedding"]},
    },
    "ReasoningEntry": {
        "threadId": "thread-1",
        "model": "gpt-4",
        "query": "Why collect all errors?",
        "response": "So callers fix everything in one round trip.",
        "codeRefs": [{"file": "memfabric/core/validation.py", "lines": [10, 20]}],
        "actions": ["document phases"],
    },
    "SummaryCheckpoint": {
        "period": {"start": "2024-05-01T00:00:00Z", "end": "2024-05-07T23:59:59Z"},
        "summary": "First week of the validation engine",
        "achievements": ["validators"],
        "decisions": ["pydantic models"],
        "metrics": {"commits": 12, "coverage": 0.91},
    },
    "BranchMeta": {
        "purpose": "Validation engine",
        "parentBranch": "main",
        "createdAt": "2024-05-01T09:00:00+02:00",
        "environment": "development",
    },
}

@pytest.fixture
def make_entry():
    def _make(entry_type="TaskState", **overrides):
        entry = {
            "id": ENTRY_ID,
            "type": entry_type,
            "project": "memory-fabric",
            "taskId": None,
            "branch": "feature/validation",
            "timestamp": "2024-05-01T12:00:00Z",
            "status": "draft",
            "content": copy.deepcopy(CONTENTS.get(entry_type, CONTENTS["TaskState"])),
        }
        entry.update(overrides)
        return entry
    return _make

@pytest.fixture
def all_types():
    return list(CONTENTS)
