import pytest

from evidence_ledger.internal_core import EvidenceRegistry, NotFoundError, UnauthorizedError
from evidence_ledger.internal_core.audit import log_event


def test_registry_operations_are_audited_in_order() -> None:
    registry = EvidenceRegistry()
    registry.submit("alice", "evidence-1", "d", "h", "image", "https://example.com/a.png")
    registry.update("alice", "evidence-1", "d2", "https://example.com/b.png")
    with pytest.raises(UnauthorizedError):
        registry.update("bob", "evidence-1", "x", "y")
    registry.verify_evidence_hash("evidence-1", "h")
    registry.verify_evidence_hash("evidence-1", "nope")

    events = registry.audit_events(evidence_id="evidence-1")

    assert [event.type for event in events] == [
        "EVIDENCE_SUBMITTED",
        "EVIDENCE_UPDATED",
        "UPDATE_REJECTED",
        "HASH_VERIFIED",
        "HASH_MISMATCH",
    ]
    assert events[0].caller == "alice"
    assert events[2].caller == "bob"
    assert events[2].code == "ERR-UNAUTHORIZED"
    assert events[3].caller is None


def test_rejected_lookups_are_audited_without_creating_records() -> None:
    registry = EvidenceRegistry()

    with pytest.raises(NotFoundError):
        registry.verify_evidence_hash("missing", "h")

    events = registry.audit_events()
    assert len(events) == 1
    assert events[0].type == "VERIFY_REJECTED"
    assert events[0].code == "ERR-NOT-FOUND"
    assert registry.get_evidence_details("missing") is None


def test_audit_detail_is_single_line_and_truncated() -> None:
    registry = EvidenceRegistry(audit_detail_max_chars=20)

    log_event(registry, "EVIDENCE_SUBMITTED", "evidence-1", "OK", "line one\nline two " + "x" * 50)

    detail = registry.audit_events()[0].detail
    assert "\n" not in detail
    assert detail.startswith("line one line two")
    assert len(detail) == 21


def test_audit_trail_is_bounded() -> None:
    registry = EvidenceRegistry(audit_max_events=3)
    for i in range(5):
        registry.submit("alice", f"evidence-{i}", "d", "h", "image", "u")

    events = registry.audit_events()
    assert [event.evidence_id for event in events] == ["evidence-2", "evidence-3", "evidence-4"]
    assert len(registry) == 5


def test_audit_can_be_disabled() -> None:
    registry = EvidenceRegistry(audit_enabled=False)
    registry.submit("alice", "evidence-1", "d", "h", "image", "u")

    assert registry.audit_events() == []
