"""
Loan issuance engine.

Orchestrates the guest single-loan check, request validation, policy
resolution, due date computation and persistence. Every operation returns
an explicit outcome value; failures are `LoanFailure` instances.

The guest check and the insert are two separate store calls, so two
concurrent requests for the same identification can both pass the check.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from ..core.logging_config import get_logger
from .due_dates import compute_due_date
from .errors import LoanErrorKind, LoanFailure, StoreError
from .models import Loan, LoanRequest
from .policy import SINGLE_LOAN_TYPES, resolve_policy
from .store import LoanStore
from .validator import is_valid_record, validate_request

logger = get_logger("loans.service")

INVALID_RECORD_MESSAGE = (
    "Los campos tipoUsuario, isbn o identificacionUsuario contienen valores no permitidos."
)
STORE_FAILURE_PREFIX = "Ha ocurrido un error al procesar la solicitud: "


@dataclass(frozen=True)
class IssuedLoan:
    id: str
    due_date: datetime


@dataclass(frozen=True)
class ActiveGuestLoan:
    """The user already holds a guest loan; nothing was created."""

    message: str


def new_loan_id() -> str:
    return str(uuid.uuid4())


def _store_failure(exc: StoreError) -> LoanFailure:
    return LoanFailure(LoanErrorKind.STORE_FAILURE, STORE_FAILURE_PREFIX + str(exc))


class LoanIssuanceService:
    def __init__(self, store: LoanStore, clock=datetime.now, id_factory=new_loan_id):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    def _find_single_loan(self, identification) -> Loan | None:
        for user_type in SINGLE_LOAN_TYPES:
            existing = self._store.find_by_identification_and_type(identification, user_type)
            if existing is not None:
                return existing
        return None

    def issue(self, request: LoanRequest) -> IssuedLoan | ActiveGuestLoan | LoanFailure:
        identification = request.user_identification

        # Keyed on the single-loan (guest) type regardless of the type being requested.
        try:
            existing = self._find_single_loan(identification)
        except StoreError as exc:
            logger.exception("Guest loan lookup failed for identification=%s", identification)
            return _store_failure(exc)
        if existing is not None:
            logger.info(
                "Rejected loan for identification=%s: guest loan %s still active",
                identification,
                existing.id,
            )
            return ActiveGuestLoan(
                f"El usuario con identificacion {identification} ya tiene un libro prestado "
                "por lo cual no se le puede realizar otro prestamo"
            )

        failure = validate_request(identification, request.user_type)
        if failure is not None:
            logger.warning(
                "%s: identification=%r type=%r",
                failure.kind.value,
                identification,
                request.user_type,
            )
            return failure

        policy = resolve_policy(request.user_type)
        # Whole seconds, so backends without fractional seconds store it unchanged.
        issued_at = self._clock().replace(microsecond=0)
        loan = Loan(
            id=self._id_factory(),
            isbn=request.isbn,
            user_identification=identification,
            user_type=int(policy.user_type),
            due_date=compute_due_date(issued_at, policy.business_day_offset),
        )
        try:
            self._store.insert(loan)
        except StoreError as exc:
            logger.exception("Failed to persist loan for identification=%s", identification)
            return _store_failure(exc)

        logger.info(
            "Issued loan %s isbn=%s identification=%s type=%s due=%s",
            loan.id,
            loan.isbn,
            identification,
            policy.user_type.name,
            loan.due_date.isoformat(),
        )
        return IssuedLoan(id=loan.id, due_date=loan.due_date)

    def lookup(self, loan_id: str) -> Loan | LoanFailure:
        try:
            loan = self._store.find_by_id(loan_id)
        except StoreError as exc:
            logger.exception("Loan lookup failed for id=%s", loan_id)
            return _store_failure(exc)

        if loan is None:
            logger.info("Loan %s not found", loan_id)
            return LoanFailure(LoanErrorKind.NOT_FOUND, f"El préstamo con ID {loan_id} no existe")

        # Records may have been written by another path.
        if not is_valid_record(loan):
            logger.warning("Stored loan %s failed re-validation", loan_id)
            return LoanFailure(LoanErrorKind.INVALID_RECORD, INVALID_RECORD_MESSAGE)
        return loan
