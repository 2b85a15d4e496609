"""
Errores tipados de las capas de persistencia y servicios externos.

Los routers inspeccionan `kind` para decidir el status HTTP; el mensaje técnico
sólo se registra en logs, nunca se devuelve al cliente.
"""
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    TRANSPORT = "transport"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base de errores con clasificación (`kind`)."""

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message or kind.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class StoreError(ServiceError):
    """Error de la base de documentos (Mongo)."""


class UpstreamError(ServiceError):
    """Error al consultar una API HTTP de terceros."""
