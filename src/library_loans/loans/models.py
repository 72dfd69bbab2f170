from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class UserType(IntEnum):
    AFFILIATE = 1
    EMPLOYEE = 2
    GUEST = 3


USER_TYPE_CODES = frozenset(t.value for t in UserType)


@dataclass(frozen=True)
class LoanRequest:
    isbn: str | None
    user_identification: str | None
    user_type: int | None


@dataclass(frozen=True)
class Loan:
    """A persisted loan. Never mutated after creation."""

    id: str
    isbn: str | None
    user_identification: str | None
    user_type: int | None
    due_date: datetime
