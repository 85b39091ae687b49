from __future__ import annotations


class RegistryError(RuntimeError):
    code = "ERR-REGISTRY"

    def __init__(self, message: str, evidence_id: str):
        super().__init__(message)
        self.message = message
        self.evidence_id = evidence_id


class AlreadyExistsError(RegistryError):
    code = "ERR-ALREADY-EXISTS"


class NotFoundError(RegistryError):
    code = "ERR-NOT-FOUND"


class UnauthorizedError(RegistryError):
    code = "ERR-UNAUTHORIZED"
