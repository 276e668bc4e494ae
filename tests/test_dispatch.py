from memfabric.models import (
    ENTRY_TYPES, WireModel, MemoryEntryEnvelope,
    TaskState, CommitDelta, ReasoningEntry, SummaryCheckpoint, BranchMeta, CommitDeltaContent,
)
from memfabric.core.dispatch import ENTRY_MODELS, content_schema, dispatch
from memfabric.core.structural import validate_structure

def _envelope(entry):
    res = validate_structure(entry)
    assert res.success, res.errors
    return res.data

def test_every_discriminant_has_a_schema():
    assert set(ENTRY_MODELS) == set(ENTRY_TYPES)
    for entry_type in ENTRY_TYPES:
        schema = content_schema(entry_type)
        assert issubclass(schema, WireModel)
    assert content_schema("CommitDelta") is CommitDeltaContent

def test_dispatch_selects_typed_model(make_entry):
    expected = {
        "TaskState": TaskState,
        "CommitDelta": CommitDelta,
        "ReasoningEntry": ReasoningEntry,
        "SummaryCheckpoint": SummaryCheckpoint,
        "BranchMeta": BranchMeta,
    }
    for entry_type, model in expected.items():
        res = dispatch(_envelope(make_entry(entry_type)))
        assert res.success is True, res.errors
        assert type(res.data) is model

def test_missing_task_state_fields_all_reported(make_entry):
    res = dispatch(_envelope(make_entry(content={"description": "d"})))
    assert res.success is False
    assert all(e.kind == "ContentSchemaError" and e.code == "REQUIRED" for e in res.errors)
    assert sorted(e.path[1] for e in res.errors) == sorted(
        ["goals", "progress", "context", "activeFiles", "workingDirectory"])
    assert all(e.path[0] == "content" for e in res.errors)

def test_progress_bounds(make_entry):
    entry = make_entry()
    entry["content"]["progress"] = -1
    res = dispatch(_envelope(entry))
    assert [(e.path, e.code) for e in res.errors] == [(["content", "progress"], "OUT_OF_RANGE")]
    assert res.errors[0].context["ge"] == 0

def test_numeric_strings_are_rejected(make_entry):
    entry = make_entry()
    entry["content"]["progress"] = "50"
    res = dispatch(_envelope(entry))
    assert [(e.path, e.code) for e in res.errors] == [(["content", "progress"], "INVALID_TYPE")]

def test_commit_delta_nested_errors(make_entry):
    entry = make_entry("CommitDelta")
    entry["content"]["files"].append({"path": "x.py", "action": "copied"})
    entry["content"]["author"] = {"name": "Dev"}
    res = dispatch(_envelope(entry))
    found = {tuple(e.path): e.code for e in res.errors}
    assert found == {
        ("content", "author", "email"): "REQUIRED",
        ("content", "files", "1", "action"): "INVALID_ENUM",
    }

def test_reasoning_code_ref_lines_pair(make_entry):
    entry = make_entry("ReasoningEntry")
    entry["content"]["codeRefs"][0]["lines"] = [1]
    res = dispatch(_envelope(entry))
    assert res.success is False
    assert all(e.path[:4] == ["content", "codeRefs", "0", "lines"] for e in res.errors)

def test_reasoning_lines_round_trip(make_entry):
    res = dispatch(_envelope(make_entry("ReasoningEntry")))
    assert res.data.content.code_refs[0].lines == (10.0, 20.0)
    assert res.data.content.model == "gpt-4"

def test_summary_checkpoint_rules(make_entry):
    entry = make_entry("SummaryCheckpoint")
    entry["content"]["metrics"]["commits"] = "12"
    entry["content"]["period"]["end"] = "next week"
    res = dispatch(_envelope(entry))
    found = {tuple(e.path): e.code for e in res.errors}
    assert found == {
        ("content", "period", "end"): "INVALID_FORMAT",
        ("content", "metrics", "commits"): "INVALID_TYPE",
    }

def test_summary_checkpoint_metrics_optional(make_entry):
    entry = make_entry("SummaryCheckpoint")
    del entry["content"]["metrics"]
    assert dispatch(_envelope(entry)).success is True

def test_branch_meta_rules(make_entry):
    entry = make_entry("BranchMeta")
    entry["content"]["environment"] = "qa"
    entry["content"]["createdAt"] = "2024-05-01"
    entry["content"]["mergeTarget"] = "2024-06-01T00:00:00Z"
    res = dispatch(_envelope(entry))
    found = {tuple(e.path): e.code for e in res.errors}
    assert found == {
        ("content", "createdAt"): "INVALID_FORMAT",
        ("content", "environment"): "INVALID_ENUM",
    }

def test_content_of_another_variant_is_rejected(make_entry):
    entry = make_entry("TaskState")
    entry["content"] = make_entry("CommitDelta")["content"]
    res = dispatch(_envelope(entry))
    assert res.success is False
    assert ["content", "description"] in [e.path for e in res.errors]
    assert all(e.kind == "ContentSchemaError" for e in res.errors)

def test_unknown_discriminant_skips_content_validation():
    envelope = MemoryEntryEnvelope.model_construct(type="Journal", content={"anything": 1})
    res = dispatch(envelope)
    assert res.success is False
    assert len(res.errors) == 1
    assert res.errors[0].kind == "UnknownVariantError"
    assert res.errors[0].context["received"] == "Journal"

def test_dispatch_does_not_mutate_envelope(make_entry):
    envelope = _envelope(make_entry())
    before = envelope.model_dump()
    dispatch(envelope)
    assert envelope.model_dump() == before
