from dataclasses import dataclass
from types import MappingProxyType

from .errors import LoanErrorKind, LoanFailure
from .models import USER_TYPE_CODES, UserType

INVALID_USER_TYPE_MESSAGE = "El valor de 'tipoUsuario' debe ser 1, 2 o 3."


@dataclass(frozen=True)
class LoanPolicy:
    user_type: UserType
    business_day_offset: int
    max_active_loans: int | None = None  # None means unbounded


LOAN_POLICIES = MappingProxyType(
    {
        UserType.AFFILIATE: LoanPolicy(UserType.AFFILIATE, business_day_offset=10),
        UserType.EMPLOYEE: LoanPolicy(UserType.EMPLOYEE, business_day_offset=8),
        UserType.GUEST: LoanPolicy(UserType.GUEST, business_day_offset=7, max_active_loans=1),
    }
)


# User types whose holders may keep only one loan at a time.
SINGLE_LOAN_TYPES = tuple(
    policy.user_type for policy in LOAN_POLICIES.values() if policy.max_active_loans == 1
)


def is_valid_user_type(code) -> bool:
    return isinstance(code, int) and not isinstance(code, bool) and code in USER_TYPE_CODES


def resolve_policy(code) -> LoanPolicy | LoanFailure:
    if not is_valid_user_type(code):
        return LoanFailure(LoanErrorKind.INVALID_USER_TYPE, INVALID_USER_TYPE_MESSAGE)
    return LOAN_POLICIES[UserType(code)]
