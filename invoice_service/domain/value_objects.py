"""Invoice Value Objects

Immutable, validated scalar wrappers used by the Invoice aggregate.
All constructors go through the classmethod factories, which translate
pydantic validation failures into InvoiceValidationError.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError
from email_validator import EmailNotValidError, validate_email

from invoice_service.domain.exceptions import InvoiceValidationError

# Largest value an INTEGER column holds on every supported backend
MAX_STORED_INT = 2_147_483_647


def _first_error(exc: ValidationError) -> str:
    return exc.errors()[0]["msg"]


class Email(BaseModel):
    """
    Email - Normalized customer email address

    Domain Rules:
    - Trimmed and lower-cased before validation
    - Must be a syntactically valid address (no deliverability check)
    - Equality is value based on the normalized form
    """

    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def from_string(cls, raw: str) -> "Email":
        if not isinstance(raw, str):
            raise InvoiceValidationError("Customer email must be a string.")
        normalized = raw.strip().lower()
        try:
            validate_email(normalized, check_deliverability=False)
        except EmailNotValidError as e:
            raise InvoiceValidationError("Invalid customer email.", reason=str(e)) from e
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value


class Quantity(BaseModel):
    """Strictly positive integer quantity, bounded by the storage column"""

    model_config = ConfigDict(frozen=True)

    value: StrictInt = Field(gt=0, le=MAX_STORED_INT)

    @classmethod
    def of(cls, value: int) -> "Quantity":
        try:
            return cls(value=value)
        except ValidationError as e:
            raise InvoiceValidationError(
                f"Quantity must be a positive integer not above {MAX_STORED_INT}.", reason=_first_error(e)
            ) from e


class UnitPrice(BaseModel):
    """
    Strictly positive integer price in the smallest currency unit

    No fractional precision: prices are whole cents (or equivalent).
    """

    model_config = ConfigDict(frozen=True)

    value: StrictInt = Field(gt=0, le=MAX_STORED_INT)

    @classmethod
    def of(cls, value: int) -> "UnitPrice":
        try:
            return cls(value=value)
        except ValidationError as e:
            raise InvoiceValidationError(
                f"Unit price must be a positive integer not above {MAX_STORED_INT}.", reason=_first_error(e)
            ) from e

    def __mul__(self, quantity: Quantity) -> "Money":
        return Money(amount=self.value * quantity.value)

    __rmul__ = __mul__


class Money(BaseModel):
    """Non-negative integer amount in the smallest currency unit"""

    model_config = ConfigDict(frozen=True)

    amount: StrictInt = Field(ge=0)

    @classmethod
    def zero(cls) -> "Money":
        return cls(amount=0)

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __int__(self) -> int:
        return self.amount
