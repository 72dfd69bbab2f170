from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..loans.models import LoanRequest


class LoanCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    isbn: str | None = None
    identificacion_usuario: str | None = Field(default=None, alias="identificacionUsuario")
    tipo_usuario: int | None = Field(default=None, alias="tipoUsuario")

    def to_request(self) -> LoanRequest:
        return LoanRequest(
            isbn=self.isbn,
            user_identification=self.identificacion_usuario,
            user_type=self.tipo_usuario,
        )


class LoanCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    fecha_maxima_devolucion: datetime = Field(alias="fechaMaximaDevolucion")


class LoanOut(LoanCreated):
    isbn: str | None = None
    identificacion_usuario: str = Field(alias="identificacionUsuario")
    tipo_usuario: int = Field(alias="tipoUsuario")


class MessageOut(BaseModel):
    mensaje: str
