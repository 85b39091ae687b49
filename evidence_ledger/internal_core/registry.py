from __future__ import annotations

"""
In-memory evidence registry.

Design intent:
- Keep records and the per-submitter index behind one lock so that every
  operation is observed as a single step.
- Hand out frozen snapshots only; callers never hold a mutable view.
- Treat caller identities and content hashes as opaque values.
"""

import dataclasses
import logging
from collections import deque
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, Deque, Dict, List, Optional

from .audit import log_event
from .contracts import (
    AuditEvent,
    CallerIdentity,
    ContentHash,
    EvidenceRecord,
    UserEvidenceIndex,
)
from .errors import AlreadyExistsError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _hash_matches(stored: ContentHash, candidate: ContentHash) -> bool:
    # Exact comparison: "0xAB" != "0xab", b"ab" != "ab", 1 != True.
    return type(stored) is type(candidate) and stored == candidate


class EvidenceRegistry:
    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        audit_enabled: bool = True,
        audit_max_events: int = 10000,
        audit_detail_max_chars: int = 200,
    ):
        self._clock = clock or _utc_now
        self._lock = RLock()
        self._records: Dict[str, EvidenceRecord] = {}
        self._user_index: Dict[CallerIdentity, List[str]] = {}
        self._audit_events: Deque[AuditEvent] = deque(maxlen=audit_max_events)
        self.audit_enabled = audit_enabled
        self.audit_detail_max_chars = audit_detail_max_chars

    def submit(
        self,
        caller: CallerIdentity,
        evidence_id: str,
        description: str,
        content_hash: ContentHash,
        evidence_type: str,
        url: str,
    ) -> str:
        with self._lock:
            if evidence_id in self._records:
                log_event(
                    self,
                    "SUBMIT_REJECTED",
                    evidence_id,
                    AlreadyExistsError.code,
                    "evidence id already registered",
                    caller=caller,
                )
                logger.warning(
                    "evidence_submit_rejected evidence_id=%s caller=%s code=%s",
                    evidence_id,
                    caller,
                    AlreadyExistsError.code,
                )
                raise AlreadyExistsError(
                    f"Evidence already exists: {evidence_id}", evidence_id
                )

            record = EvidenceRecord(
                evidence_id=evidence_id,
                submitter=caller,
                description=description,
                content_hash=content_hash,
                evidence_type=evidence_type,
                url=url,
                submission_date=self._clock(),
            )
            # Index lookup first: an unhashable caller must fail before any write.
            submitter_ids = self._user_index.setdefault(caller, [])
            self._records[evidence_id] = record
            submitter_ids.append(evidence_id)
            log_event(
                self,
                "EVIDENCE_SUBMITTED",
                evidence_id,
                "OK",
                f"type={evidence_type} url={url}",
                caller=caller,
            )

        logger.info(
            "evidence_submitted evidence_id=%s caller=%s type=%s",
            evidence_id,
            caller,
            evidence_type,
        )
        return evidence_id

    def update(
        self,
        caller: CallerIdentity,
        evidence_id: str,
        description: str,
        url: str,
    ) -> bool:
        with self._lock:
            record = self._records.get(evidence_id)
            if record is None:
                log_event(
                    self,
                    "UPDATE_REJECTED",
                    evidence_id,
                    NotFoundError.code,
                    "unknown evidence id",
                    caller=caller,
                )
                logger.warning(
                    "evidence_update_rejected evidence_id=%s caller=%s code=%s",
                    evidence_id,
                    caller,
                    NotFoundError.code,
                )
                raise NotFoundError(f"Unknown evidence_id: {evidence_id}", evidence_id)

            if record.submitter != caller:
                log_event(
                    self,
                    "UPDATE_REJECTED",
                    evidence_id,
                    UnauthorizedError.code,
                    "caller is not the submitter",
                    caller=caller,
                )
                logger.warning(
                    "evidence_update_rejected evidence_id=%s caller=%s code=%s",
                    evidence_id,
                    caller,
                    UnauthorizedError.code,
                )
                raise UnauthorizedError(
                    f"Caller may not update evidence: {evidence_id}", evidence_id
                )

            self._records[evidence_id] = dataclasses.replace(
                record, description=description, url=url
            )
            log_event(
                self,
                "EVIDENCE_UPDATED",
                evidence_id,
                "OK",
                f"url={url}",
                caller=caller,
            )

        logger.info("evidence_updated evidence_id=%s caller=%s", evidence_id, caller)
        return True

    def get_evidence_details(self, evidence_id: str) -> Optional[EvidenceRecord]:
        with self._lock:
            return self._records.get(evidence_id)

    def get_user_evidence(self, submitter: CallerIdentity) -> Optional[UserEvidenceIndex]:
        with self._lock:
            evidence_ids = self._user_index.get(submitter)
            if evidence_ids is None:
                return None
            return UserEvidenceIndex(submitter=submitter, evidence_ids=tuple(evidence_ids))

    def verify_evidence_hash(self, evidence_id: str, candidate_hash: ContentHash) -> bool:
        with self._lock:
            record = self._records.get(evidence_id)
            if record is None:
                log_event(
                    self,
                    "VERIFY_REJECTED",
                    evidence_id,
                    NotFoundError.code,
                    "unknown evidence id",
                )
                logger.warning(
                    "evidence_verify_rejected evidence_id=%s code=%s",
                    evidence_id,
                    NotFoundError.code,
                )
                raise NotFoundError(f"Unknown evidence_id: {evidence_id}", evidence_id)

            matched = _hash_matches(record.content_hash, candidate_hash)
            log_event(
                self,
                "HASH_VERIFIED" if matched else "HASH_MISMATCH",
                evidence_id,
                "OK",
                "candidate hash matches" if matched else "candidate hash differs",
            )

        logger.info(
            "evidence_hash_checked evidence_id=%s matched=%s", evidence_id, matched
        )
        return matched

    def append_audit_event(self, event: AuditEvent) -> None:
        with self._lock:
            self._audit_events.append(event)

    def audit_events(self, evidence_id: Optional[str] = None) -> List[AuditEvent]:
        with self._lock:
            events = list(self._audit_events)
        if evidence_id is None:
            return events
        return [event for event in events if event.evidence_id == evidence_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
