# common/exceptions.py

"""
KASA SERVICE ERRORS

Centralized domain errors raised by ledger, cheque and banking services.
The API boundary (common/api.py) maps each kind to an HTTP status.
"""


class KasaServiceError(Exception):
    """Base exception for all bookkeeping service failures."""

    code = "service_error"

    def __init__(self, message: str = "", *, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(KasaServiceError):
    """Raised when a referenced entity does not exist (or is soft-deleted)."""

    code = "not_found"


class BusinessValidationError(KasaServiceError):
    """Raised when a business rule rejects an otherwise well-formed request."""

    code = "validation_error"


class InvalidTransitionError(BusinessValidationError):
    """Raised when a cheque status change is not in the transition table."""

    code = "invalid_transition"

    def __init__(self, *, current: str, requested: str, direction: str):
        self.current = current
        self.requested = requested
        self.direction = direction
        super().__init__(
            f"Invalid status transition from {current} to {requested} for direction {direction}",
            details={"current": current, "requested": requested, "direction": direction},
        )


class ConflictError(KasaServiceError):
    """Raised when the target is already in a terminal state (e.g. paid)."""

    code = "conflict"


class InternalServiceError(KasaServiceError):
    """Raised on unexpected infrastructure failures inside an atomic unit."""

    code = "internal_error"
