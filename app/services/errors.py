"""Domain errors raised by the service layer

Each error carries the HTTP status the API layer answers with and a short
machine-readable code.
"""

from typing import Any, Dict


class ServiceError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 400
    code = "error"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def as_detail(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.extra}


class ValidationFailed(ServiceError):
    """Request rejected before any state was written"""
    code = "validation_failed"


class PastDateError(ValidationFailed):
    code = "past_date"


class InvalidPartySizeError(ValidationFailed):
    code = "invalid_party_size"


class MissingCustomerError(ValidationFailed):
    code = "missing_customer"


class EmptyItemsError(ValidationFailed):
    code = "empty_items"


class InvalidTotalError(ValidationFailed):
    code = "invalid_total"


class MissingPaymentProofError(ValidationFailed):
    code = "missing_payment_proof"


class InvalidPromoCodeError(ValidationFailed):
    code = "invalid_promo_code"


class InsufficientCapacityError(ServiceError):
    """The slot cannot take the requested party"""
    status_code = 409
    code = "insufficient_capacity"

    def __init__(self, available_slots: int):
        super().__init__(
            f"Not enough capacity, {available_slots} slots left",
            available_slots=available_slots,
        )
        self.available_slots = available_slots


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"


class ConflictError(ServiceError):
    status_code = 409
    code = "conflict"


class InvalidStatusTransitionError(ConflictError):
    code = "invalid_status_transition"


class DuplicatePromoCodeError(ConflictError):
    code = "duplicate_promo_code"


class DuplicateCustomerError(ConflictError):
    code = "duplicate_customer"
