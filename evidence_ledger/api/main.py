from __future__ import annotations

"""
HTTP surface for the evidence ledger.

Design intent:
- Resolve caller identity from a trusted request header set by the auth proxy.
- Delegate uniqueness, ownership and hash checks to EvidenceRegistry.
- Return registry error codes alongside HTTP status for client diagnostics.
"""

import logging
from typing import NoReturn

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from evidence_ledger.internal_core import (
    AlreadyExistsError,
    EvidenceRegistry,
    NotFoundError,
    RegistryError,
    UnauthorizedError,
    load_config,
)
from evidence_ledger.internal_core.contracts import AuditEvent, EvidenceRecord


class EvidenceSubmitRequest(BaseModel):
    evidence_id: str = Field(min_length=1, max_length=256)
    description: str
    content_hash: str
    evidence_type: str
    url: str


class EvidenceSubmitResponse(BaseModel):
    evidence_id: str


class EvidenceUpdateRequest(BaseModel):
    description: str
    url: str


class EvidenceUpdateResponse(BaseModel):
    ok: bool


class EvidenceDetailResponse(BaseModel):
    evidence_id: str
    submitter: str
    description: str
    content_hash: str
    evidence_type: str
    url: str
    submission_date: str


class UserEvidenceResponse(BaseModel):
    submitter: str
    evidence_ids: list[str] = Field(default_factory=list)


class HashVerifyRequest(BaseModel):
    content_hash: str


class HashVerifyResponse(BaseModel):
    evidence_id: str
    match: bool


class EvidenceAuditResponse(BaseModel):
    evidence_id: str
    events: list[AuditEvent] = Field(default_factory=list)


app = FastAPI(title="evidence ledger service")
logger = logging.getLogger(__name__)
_CONFIG = load_config()
logger.setLevel(_CONFIG.EVIDENCE_LEDGER_LOG_LEVEL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS: dict[type[RegistryError], int] = {
    AlreadyExistsError: 409,
    NotFoundError: 404,
    UnauthorizedError: 403,
}


def _get_registry() -> EvidenceRegistry:
    existing = getattr(app.state, "evidence_registry", None)
    if isinstance(existing, EvidenceRegistry):
        return existing
    created = EvidenceRegistry(
        audit_enabled=_CONFIG.EVIDENCE_LEDGER_AUDIT_ENABLED,
        audit_max_events=_CONFIG.EVIDENCE_LEDGER_AUDIT_MAX_EVENTS,
        audit_detail_max_chars=_CONFIG.EVIDENCE_LEDGER_AUDIT_DETAIL_MAX_CHARS,
    )
    setattr(app.state, "evidence_registry", created)
    return created


def _caller_identity(request: Request) -> str:
    header = _CONFIG.EVIDENCE_LEDGER_CALLER_HEADER
    caller = (request.headers.get(header) or "").strip()
    if not caller:
        logger.warning("caller_identity_missing header=%s path=%s", header, request.url.path)
        raise HTTPException(status_code=401, detail=f"Missing caller identity header: {header}")
    return caller


def _raise_registry_error(exc: RegistryError) -> NoReturn:
    status_code = _ERROR_STATUS.get(type(exc), 400)
    raise HTTPException(
        status_code=status_code,
        detail={"code": exc.code, "message": exc.message},
    ) from exc


def _record_payload(record: EvidenceRecord) -> EvidenceDetailResponse:
    return EvidenceDetailResponse(
        evidence_id=record.evidence_id,
        submitter=str(record.submitter),
        description=record.description,
        content_hash=str(record.content_hash),
        evidence_type=record.evidence_type,
        url=record.url,
        submission_date=record.submission_date.isoformat(),
    )


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/evidence", response_model=EvidenceSubmitResponse, status_code=201)
def submit_evidence(payload: EvidenceSubmitRequest, request: Request) -> EvidenceSubmitResponse:
    caller = _caller_identity(request)
    try:
        evidence_id = _get_registry().submit(
            caller,
            payload.evidence_id,
            payload.description,
            payload.content_hash,
            payload.evidence_type,
            payload.url,
        )
    except RegistryError as exc:
        _raise_registry_error(exc)
    return EvidenceSubmitResponse(evidence_id=evidence_id)


@app.put("/evidence/{evidence_id}", response_model=EvidenceUpdateResponse)
def update_evidence(
    evidence_id: str,
    payload: EvidenceUpdateRequest,
    request: Request,
) -> EvidenceUpdateResponse:
    caller = _caller_identity(request)
    try:
        ok = _get_registry().update(caller, evidence_id, payload.description, payload.url)
    except RegistryError as exc:
        _raise_registry_error(exc)
    return EvidenceUpdateResponse(ok=ok)


@app.get("/evidence/{evidence_id}", response_model=EvidenceDetailResponse)
def get_evidence_details(evidence_id: str) -> EvidenceDetailResponse:
    record = _get_registry().get_evidence_details(evidence_id)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail={"code": NotFoundError.code, "message": f"Unknown evidence_id: {evidence_id}"},
        )
    return _record_payload(record)


@app.get("/users/{submitter}/evidence", response_model=UserEvidenceResponse)
def get_user_evidence(submitter: str) -> UserEvidenceResponse:
    index = _get_registry().get_user_evidence(submitter)
    if index is None:
        raise HTTPException(
            status_code=404,
            detail={"code": NotFoundError.code, "message": f"No evidence for submitter: {submitter}"},
        )
    return UserEvidenceResponse(submitter=str(index.submitter), evidence_ids=list(index.evidence_ids))


@app.post("/evidence/{evidence_id}/verify", response_model=HashVerifyResponse)
def verify_evidence_hash(evidence_id: str, payload: HashVerifyRequest) -> HashVerifyResponse:
    try:
        matched = _get_registry().verify_evidence_hash(evidence_id, payload.content_hash)
    except RegistryError as exc:
        _raise_registry_error(exc)
    return HashVerifyResponse(evidence_id=evidence_id, match=matched)


@app.get("/evidence/{evidence_id}/audit", response_model=EvidenceAuditResponse)
def get_evidence_audit(evidence_id: str) -> EvidenceAuditResponse:
    registry = _get_registry()
    events = registry.audit_events(evidence_id=evidence_id)
    if not events and registry.get_evidence_details(evidence_id) is None:
        raise HTTPException(
            status_code=404,
            detail={"code": NotFoundError.code, "message": f"Unknown evidence_id: {evidence_id}"},
        )
    return EvidenceAuditResponse(evidence_id=evidence_id, events=events)
