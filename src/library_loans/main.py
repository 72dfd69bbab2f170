from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .api.routers import loans
from .api.routers.loans import UNEXPECTED_ERROR_PREFIX, message_response
from .core.logging_config import get_logger, setup_logging

setup_logging()
logger = get_logger("app")

app = FastAPI(
    title="Library Loans API",
    version="0.1.0",
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("HTTP %s %s -> %s", request.method, request.url.path, response.status_code)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning("Rejected malformed request %s %s: %s", request.method, request.url.path, details)
    return message_response(400, f"La solicitud contiene valores no permitidos: {details}")


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return message_response(500, UNEXPECTED_ERROR_PREFIX + str(exc))


@app.get("/health")
def healthcheck():
    return {"status": "ok"}


app.include_router(loans.router, prefix="/api/prestamo", tags=["prestamo"])
