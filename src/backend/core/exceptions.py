"""
Domain error taxonomy.

Every failure the core reports to a caller is a GroundOpsError carrying a
machine-readable ``kind``, a human-readable message and the HTTP status the
API layer renders it with.
"""

from typing import Any, Dict, Optional


class GroundOpsError(Exception):
    """Base class for all structured domain failures."""

    kind: str = "error"
    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"kind": self.kind, "detail": self.message}
        if self.details:
            body["errors"] = self.details
        return body


class ValidationError(GroundOpsError):
    """Missing or malformed input. The caller fixes it and retries."""

    kind = "validation_error"
    status_code = 400


class NotAuthorizedError(GroundOpsError):
    """The caller's identity may not perform this action on this request."""

    kind = "not_authorized"
    status_code = 403


class NotFoundError(GroundOpsError):
    """Referenced entity does not exist."""

    kind = "not_found"
    status_code = 404


class ClaimConflictError(GroundOpsError):
    """Lost the claim race: the request is no longer open."""

    kind = "claim_conflict"
    status_code = 409


class InvalidTransitionError(GroundOpsError):
    """Status change not allowed from the request's current status."""

    kind = "invalid_transition"
    status_code = 409


class InactiveRequestError(GroundOpsError):
    """Chat is only open while a request is claimed or in progress."""

    kind = "inactive_request"
    status_code = 409


class StoreUnavailableError(GroundOpsError):
    """Persistence layer unreachable. Retryable."""

    kind = "store_unavailable"
    status_code = 503
