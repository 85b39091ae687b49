from __future__ import annotations

import os
from dataclasses import dataclass


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass(frozen=True)
class RegistryConfig:
    EVIDENCE_LEDGER_LOG_LEVEL: str
    EVIDENCE_LEDGER_CALLER_HEADER: str
    EVIDENCE_LEDGER_AUDIT_ENABLED: bool
    EVIDENCE_LEDGER_AUDIT_MAX_EVENTS: int
    EVIDENCE_LEDGER_AUDIT_DETAIL_MAX_CHARS: int


def load_config() -> RegistryConfig:
    max_events = _getenv_int("EVIDENCE_LEDGER_AUDIT_MAX_EVENTS", 10000)
    detail_max_chars = _getenv_int("EVIDENCE_LEDGER_AUDIT_DETAIL_MAX_CHARS", 200)
    if max_events < 0:
        raise ValueError("EVIDENCE_LEDGER_AUDIT_MAX_EVENTS must be >= 0")
    if detail_max_chars < 1:
        raise ValueError("EVIDENCE_LEDGER_AUDIT_DETAIL_MAX_CHARS must be >= 1")

    return RegistryConfig(
        EVIDENCE_LEDGER_LOG_LEVEL=_getenv_str("EVIDENCE_LEDGER_LOG_LEVEL", "INFO").strip().upper()
        or "INFO",
        EVIDENCE_LEDGER_CALLER_HEADER=_getenv_str(
            "EVIDENCE_LEDGER_CALLER_HEADER", "X-Caller-Identity"
        ).strip()
        or "X-Caller-Identity",
        EVIDENCE_LEDGER_AUDIT_ENABLED=_getenv_bool("EVIDENCE_LEDGER_AUDIT_ENABLED", True),
        EVIDENCE_LEDGER_AUDIT_MAX_EVENTS=max_events,
        EVIDENCE_LEDGER_AUDIT_DETAIL_MAX_CHARS=detail_max_chars,
    )
