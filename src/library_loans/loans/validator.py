from .errors import LoanErrorKind, LoanFailure
from .models import Loan
from .policy import INVALID_USER_TYPE_MESSAGE, is_valid_user_type

MAX_IDENTIFICATION_LENGTH = 10


def is_valid_identification(identification) -> bool:
    return isinstance(identification, str) and 0 < len(identification) <= MAX_IDENTIFICATION_LENGTH


def validate_identification(identification) -> LoanFailure | None:
    if is_valid_identification(identification):
        return None
    shown = identification if identification is not None else ""
    return LoanFailure(
        LoanErrorKind.INVALID_IDENTIFICATION,
        f"El usuario con nombre {shown} es invalido, trate de nuevo",
    )


def validate_request(identification, user_type) -> LoanFailure | None:
    """Structural checks for a loan request; identification is checked first."""
    failure = validate_identification(identification)
    if failure is not None:
        return failure
    if not is_valid_user_type(user_type):
        return LoanFailure(LoanErrorKind.INVALID_USER_TYPE, INVALID_USER_TYPE_MESSAGE)
    return None


def is_valid_record(loan: Loan) -> bool:
    return is_valid_user_type(loan.user_type) and is_valid_identification(loan.user_identification)
