from functools import lru_cache

from fastapi import Depends

from ..db_connection import get_engine
from ..loans.service import LoanIssuanceService
from ..loans.store import LoanStore, SqlLoanStore, ensure_schema


@lru_cache
def get_store() -> LoanStore:
    engine = get_engine()
    ensure_schema(engine)
    return SqlLoanStore(engine)


def get_loan_service(store: LoanStore = Depends(get_store)) -> LoanIssuanceService:
    return LoanIssuanceService(store)
