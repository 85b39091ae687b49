from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Hashable, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

# Supplied by the authentication collaborator; only equality and hashing are used.
CallerIdentity = Hashable

# Opaque digest value; compared for exact equality only.
ContentHash = Any


@dataclass(frozen=True)
class EvidenceRecord:
    evidence_id: str
    submitter: CallerIdentity
    description: str
    content_hash: ContentHash
    evidence_type: str
    url: str
    submission_date: datetime


@dataclass(frozen=True)
class UserEvidenceIndex:
    submitter: CallerIdentity
    evidence_ids: Tuple[str, ...]


AuditEventType = Literal[
    "EVIDENCE_SUBMITTED",
    "EVIDENCE_UPDATED",
    "HASH_VERIFIED",
    "HASH_MISMATCH",
    "SUBMIT_REJECTED",
    "UPDATE_REJECTED",
    "VERIFY_REJECTED",
]


class AuditEvent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ts_iso: str
    evidence_id: str
    type: AuditEventType
    code: str
    detail: str
    caller: Optional[str] = None
