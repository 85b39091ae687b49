from __future__ import annotations

import datetime as _dt
from typing import TYPE_CHECKING, Optional

from .contracts import AuditEvent, AuditEventType, CallerIdentity

if TYPE_CHECKING:
    from .registry import EvidenceRegistry


def _ts_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat()


def _sanitize_detail(detail: str, max_chars: int = 200) -> str:
    # Descriptions and URLs are caller-controlled; keep audit lines short and single-line.
    detail = (detail or "").replace("\r", " ").replace("\n", " ").strip()
    if len(detail) > max_chars:
        detail = detail[:max_chars] + "…"
    return detail


def log_event(
    registry: "EvidenceRegistry",
    event_type: AuditEventType,
    evidence_id: str,
    code: str,
    detail: str,
    caller: Optional[CallerIdentity] = None,
) -> None:
    if not registry.audit_enabled:
        return
    event = AuditEvent(
        ts_iso=_ts_iso(),
        evidence_id=str(evidence_id),
        type=event_type,
        code=code,
        detail=_sanitize_detail(detail, registry.audit_detail_max_chars),
        caller=None if caller is None else str(caller),
    )
    registry.append_audit_event(event)
