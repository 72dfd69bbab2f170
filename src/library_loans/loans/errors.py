from dataclasses import dataclass
from enum import Enum


class LoanErrorKind(str, Enum):
    INVALID_IDENTIFICATION = "InvalidIdentification"
    INVALID_USER_TYPE = "InvalidUserType"
    NOT_FOUND = "NotFound"
    INVALID_RECORD = "InvalidRecord"
    STORE_FAILURE = "StoreFailure"


@dataclass(frozen=True)
class LoanFailure:
    """Failed outcome of a loan operation, returned rather than raised."""

    kind: LoanErrorKind
    message: str


class StoreError(Exception):
    """Raised by loan stores when the underlying persistence layer fails."""
