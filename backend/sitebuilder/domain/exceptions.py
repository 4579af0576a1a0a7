"""
Typed failures raised by the landing engine.

Every error carries a stable ``kind`` the caller can branch on, an HTTP
status used by the API layer, and ``details`` naming the offending
identifier or field.
"""
from typing import Any, Dict


class LandingError(Exception):
    kind = "LandingError"
    status_code = 400
    transient = False

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "details": self.details,
        }


class InvalidBlockType(LandingError):
    kind = "InvalidBlockType"
    status_code = 400


class ContentValidationError(LandingError):
    kind = "ContentValidationError"
    status_code = 422


class BlockNotFound(LandingError):
    kind = "BlockNotFound"
    status_code = 404


class BlockNotDeletable(LandingError):
    kind = "BlockNotDeletable"
    status_code = 409


class ReorderSetMismatch(LandingError):
    kind = "ReorderSetMismatch"
    status_code = 409


class UnsupportedMimeType(LandingError):
    kind = "UnsupportedMimeType"
    status_code = 415


class AssetNotFound(LandingError):
    kind = "AssetNotFound"
    status_code = 404


class DomainAlreadyTaken(LandingError):
    kind = "DomainAlreadyTaken"
    status_code = 409


class DomainImmutableAfterPublish(LandingError):
    kind = "DomainImmutableAfterPublish"
    status_code = 409


class NothingToPublish(LandingError):
    kind = "NothingToPublish"
    status_code = 409


class LandingIncomplete(LandingError):
    kind = "LandingIncomplete"
    status_code = 409


class LandingNotFound(LandingError):
    kind = "LandingNotFound"
    status_code = 404


class HoldingNotFound(LandingError):
    kind = "HoldingNotFound"
    status_code = 404


class InvariantViolation(LandingError):
    kind = "InvariantViolation"
    status_code = 500


class StorageUnavailable(LandingError):
    kind = "StorageUnavailable"
    status_code = 503
    transient = True

    def __init__(self, message: str = "Storage is temporarily unavailable", **details: Any):
        super().__init__(message, **details)
