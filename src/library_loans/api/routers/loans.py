from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.logging_config import get_logger
from ...loans.errors import LoanErrorKind, LoanFailure
from ...loans.service import ActiveGuestLoan, LoanIssuanceService
from ...schemas.loan import LoanCreate, LoanCreated, LoanOut, MessageOut
from ..deps import get_loan_service

logger = get_logger("api.loans")

router = APIRouter()

UNEXPECTED_ERROR_PREFIX = "Ha ocurrido un error al procesar la solicitud: "

STATUS_BY_KIND = {
    LoanErrorKind.INVALID_IDENTIFICATION: 400,
    LoanErrorKind.INVALID_USER_TYPE: 400,
    LoanErrorKind.NOT_FOUND: 404,
    LoanErrorKind.INVALID_RECORD: 400,
    LoanErrorKind.STORE_FAILURE: 500,
}

ERROR_RESPONSES = {
    400: {"model": MessageOut},
    404: {"model": MessageOut},
    500: {"model": MessageOut},
}


def message_response(status_code: int, mensaje: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=MessageOut(mensaje=mensaje).model_dump())


def failure_response(failure: LoanFailure) -> JSONResponse:
    return message_response(STATUS_BY_KIND[failure.kind], failure.message)


@router.post("", response_model=LoanCreated, responses=ERROR_RESPONSES)
def create_loan(payload: LoanCreate, service: LoanIssuanceService = Depends(get_loan_service)):
    try:
        outcome = service.issue(payload.to_request())
    except Exception as exc:
        logger.exception("Unexpected error issuing loan")
        return message_response(500, UNEXPECTED_ERROR_PREFIX + str(exc))

    if isinstance(outcome, LoanFailure):
        return failure_response(outcome)
    if isinstance(outcome, ActiveGuestLoan):
        return message_response(200, outcome.message)
    return LoanCreated(id=outcome.id, fecha_maxima_devolucion=outcome.due_date)


@router.get("/{id_prestamo}", response_model=LoanOut, responses=ERROR_RESPONSES)
def get_loan(id_prestamo: str, service: LoanIssuanceService = Depends(get_loan_service)):
    try:
        outcome = service.lookup(id_prestamo)
    except Exception as exc:
        logger.exception("Unexpected error looking up loan %s", id_prestamo)
        return message_response(500, UNEXPECTED_ERROR_PREFIX + str(exc))

    if isinstance(outcome, LoanFailure):
        return failure_response(outcome)
    return LoanOut(
        id=outcome.id,
        isbn=outcome.isbn,
        identificacion_usuario=outcome.user_identification,
        tipo_usuario=outcome.user_type,
        fecha_maxima_devolucion=outcome.due_date,
    )
