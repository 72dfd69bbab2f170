"""
Tests for loan policies and request validation
"""

from datetime import datetime

import pytest

from library_loans.loans.errors import LoanErrorKind, LoanFailure
from library_loans.loans.models import Loan, UserType
from library_loans.loans.policy import (
    LOAN_POLICIES,
    SINGLE_LOAN_TYPES,
    is_valid_user_type,
    resolve_policy,
)
from library_loans.loans.validator import (
    is_valid_identification,
    is_valid_record,
    validate_identification,
    validate_request,
)


class TestLoanPolicy:
    @pytest.mark.parametrize(
        "code, offset",
        [(1, 10), (2, 8), (3, 7)],
    )
    def test_offsets(self, code, offset):
        policy = resolve_policy(code)
        assert policy.business_day_offset == offset
        assert policy.user_type == code

    def test_only_guests_are_limited_to_one_loan(self):
        assert LOAN_POLICIES[UserType.GUEST].max_active_loans == 1
        assert LOAN_POLICIES[UserType.AFFILIATE].max_active_loans is None
        assert LOAN_POLICIES[UserType.EMPLOYEE].max_active_loans is None
        assert SINGLE_LOAN_TYPES == (UserType.GUEST,)

    @pytest.mark.parametrize("code", [0, 4, -1, 99, None, "1", True])
    def test_unknown_codes_fail(self, code):
        result = resolve_policy(code)
        assert isinstance(result, LoanFailure)
        assert result.kind == LoanErrorKind.INVALID_USER_TYPE
        assert result.message == "El valor de 'tipoUsuario' debe ser 1, 2 o 3."

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            LOAN_POLICIES[UserType.GUEST] = None

    def test_enum_members_are_valid(self):
        assert all(is_valid_user_type(t) for t in UserType)


class TestValidator:
    @pytest.mark.parametrize("identification", ["a", "1234567890", "CC-123"])
    def test_valid_identifications(self, identification):
        assert is_valid_identification(identification)
        assert validate_identification(identification) is None

    @pytest.mark.parametrize("identification", ["", None, "12345678901", 12345])
    def test_invalid_identifications(self, identification):
        failure = validate_identification(identification)
        assert failure.kind == LoanErrorKind.INVALID_IDENTIFICATION

    def test_invalid_identification_message(self):
        failure = validate_identification("12345678901")
        assert failure.message == "El usuario con nombre 12345678901 es invalido, trate de nuevo"

    def test_identification_checked_before_user_type(self):
        failure = validate_request("", 9)
        assert failure.kind == LoanErrorKind.INVALID_IDENTIFICATION

    def test_invalid_user_type(self):
        failure = validate_request("123", 4)
        assert failure.kind == LoanErrorKind.INVALID_USER_TYPE

    def test_valid_request(self):
        assert validate_request("123", 3) is None

    def test_record_validation(self):
        due = datetime(2024, 1, 12)
        assert is_valid_record(Loan("id", "isbn", "123", 1, due))
        assert not is_valid_record(Loan("id", "isbn", "123", 5, due))
        assert not is_valid_record(Loan("id", "isbn", "", 1, due))
        assert not is_valid_record(Loan("id", "isbn", None, 2, due))
        assert not is_valid_record(Loan("id", "isbn", "x" * 11, 3, due))
