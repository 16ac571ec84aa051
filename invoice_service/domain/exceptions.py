"""Invoice Domain Exceptions

Error taxonomy shared by the domain, use cases and adapters.
Each exception carries a stable code that use cases copy into Error results.

Retry policy:
- InvoiceValidationError, InvalidTransitionError, InvoiceNotFoundError,
  NotifierError are terminal signals and never retried by this service
- InfrastructureError (and ConcurrencyConflictError) is the only category
  eligible for caller-driven retry
"""

from typing import Optional
from uuid import UUID


class InvoiceServiceError(Exception):
    """Base class for all invoice service errors"""

    code = "INVOICE_SERVICE_ERROR"

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class InvoiceValidationError(InvoiceServiceError):
    """Malformed input to aggregate construction"""

    code = "VALIDATION_ERROR"


class InvalidTransitionError(InvoiceServiceError):
    """Attempted status change violates the invoice state machine"""

    code = "INVALID_STATUS_TRANSITION"

    @classmethod
    def cannot_mark_as_sending(cls, invoice_id: UUID, current_status: str) -> "InvalidTransitionError":
        return cls(
            f"Cannot mark invoice {invoice_id} as sending. "
            f"Current status is '{current_status}', but must be 'draft'.",
            reason="wrong_status",
        )

    @classmethod
    def cannot_send_without_lines(cls, invoice_id: UUID) -> "InvalidTransitionError":
        return cls(
            f"Cannot mark invoice {invoice_id} as sending. "
            f"Invoice must contain at least one line.",
            reason="no_lines",
        )

    @classmethod
    def cannot_mark_as_delivered(cls, invoice_id: UUID, current_status: str) -> "InvalidTransitionError":
        return cls(
            f"Cannot mark invoice {invoice_id} as sent. "
            f"Current status is '{current_status}', but must be 'sending'.",
            reason="wrong_status",
        )


class InvoiceNotFoundError(InvoiceServiceError):
    """Referenced invoice does not exist"""

    code = "INVOICE_NOT_FOUND"

    def __init__(self, invoice_id: UUID):
        super().__init__(f'Invoice with ID "{invoice_id}" was not found.')
        self.invoice_id = invoice_id


class NotifierError(InvoiceServiceError):
    """The external notification could not be sent"""

    code = "NOTIFICATION_FAILED"


class InfrastructureError(InvoiceServiceError):
    """Storage unavailable or similar transient condition"""

    code = "INFRASTRUCTURE_ERROR"


class ConcurrencyConflictError(InfrastructureError):
    """Another writer committed the same invoice since it was loaded"""

    code = "CONCURRENCY_CONFLICT"

    def __init__(self, invoice_id: UUID, expected_version: int):
        super().__init__(
            f"Invoice {invoice_id} was modified concurrently "
            f"(expected version {expected_version})",
            reason="stale_version",
        )
        self.invoice_id = invoice_id
        self.expected_version = expected_version
