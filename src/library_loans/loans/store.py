"""
Loan storage backends.

`SqlLoanStore` persists to the `prestamos` table through a SQLAlchemy engine;
`InMemoryLoanStore` keeps records in a dict and is used for tests and local runs.
Both raise `StoreError` when the backend fails.
"""

import threading
from abc import ABC, abstractmethod

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text, insert, select
from sqlalchemy.dialects import mysql
from sqlalchemy.exc import SQLAlchemyError

from .errors import StoreError
from .models import Loan

metadata = MetaData()

loans_table = Table(
    "prestamos",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("isbn", Text, nullable=True),
    Column("identificacion_usuario", String(255), nullable=True, index=True),
    Column("tipo_usuario", Integer, nullable=True),
    Column(
        "fecha_maxima_devolucion",
        DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql"),
        nullable=False,
    ),
)


def ensure_schema(engine) -> None:
    """Create the loans table if it does not exist yet."""
    try:
        metadata.create_all(engine, checkfirst=True)
    except SQLAlchemyError as exc:
        raise StoreError(str(exc)) from exc


class LoanStore(ABC):
    @abstractmethod
    def find_by_identification_and_type(self, identification, user_type) -> Loan | None:
        """Return any loan held by `identification` that was issued with `user_type`."""

    @abstractmethod
    def find_by_id(self, loan_id: str) -> Loan | None:
        pass

    @abstractmethod
    def insert(self, loan: Loan) -> None:
        pass


class InMemoryLoanStore(LoanStore):
    def __init__(self, loans=()):
        self._loans: dict[str, Loan] = {}
        self._lock = threading.RLock()
        for loan in loans:
            self._loans[loan.id] = loan

    def find_by_identification_and_type(self, identification, user_type) -> Loan | None:
        with self._lock:
            for loan in self._loans.values():
                if loan.user_identification == identification and loan.user_type == user_type:
                    return loan
            return None

    def find_by_id(self, loan_id: str) -> Loan | None:
        with self._lock:
            return self._loans.get(loan_id)

    def insert(self, loan: Loan) -> None:
        with self._lock:
            if loan.id in self._loans:
                raise StoreError(f"Loan id {loan.id} already exists")
            self._loans[loan.id] = loan

    def __len__(self):
        with self._lock:
            return len(self._loans)


def _row_to_loan(row) -> Loan:
    return Loan(
        id=row["id"],
        isbn=row["isbn"],
        user_identification=row["identificacion_usuario"],
        user_type=row["tipo_usuario"],
        due_date=row["fecha_maxima_devolucion"],
    )


class SqlLoanStore(LoanStore):
    def __init__(self, engine):
        self._engine = engine

    def _fetch_one(self, stmt) -> Loan | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return _row_to_loan(row) if row else None

    def find_by_identification_and_type(self, identification, user_type) -> Loan | None:
        stmt = select(loans_table).where(
            loans_table.c.identificacion_usuario == identification,
            loans_table.c.tipo_usuario == int(user_type),
        )
        return self._fetch_one(stmt)

    def find_by_id(self, loan_id: str) -> Loan | None:
        return self._fetch_one(select(loans_table).where(loans_table.c.id == loan_id))

    def insert(self, loan: Loan) -> None:
        stmt = insert(loans_table).values(
            id=loan.id,
            isbn=loan.isbn,
            identificacion_usuario=loan.user_identification,
            tipo_usuario=loan.user_type,
            fecha_maxima_devolucion=loan.due_date,
        )
        try:
            with self._engine.connect() as conn:
                transaction = conn.begin()
                try:
                    conn.execute(stmt)
                    transaction.commit()
                except Exception:
                    transaction.rollback()
                    raise
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
