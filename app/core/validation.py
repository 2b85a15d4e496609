"""
Validación de cuerpos de petición con modelos Pydantic.

Los errores se entregan como lista de `{msg, param, location}` (400) para que el
frontend pueda mostrarlos campo por campo.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)

# Tipos de error de Pydantic que equivalen a "campo requerido vacío o ausente"
_REQUIRED_TYPES = {"missing", "string_too_short", "too_short"}


def format_errors(
    errors: Iterable[Dict[str, Any]],
    messages: Optional[Mapping[str, str]] = None,
    location: str = "body",
) -> List[Dict[str, Any]]:
    """Convierte `ValidationError.errors()` en la lista de errores de la API."""
    messages = messages or {}
    out: List[Dict[str, Any]] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        # FastAPI antepone "body"/"path"/"query" a la ubicación
        if loc and loc[0] in ("body", "path", "query", "header"):
            where, loc = loc[0], loc[1:]
        else:
            where = location
        param = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        required = err.get("type") in _REQUIRED_TYPES or err.get("input") in ("", None)
        if required and param in messages:
            msg = messages[param]
        out.append({"msg": msg, "param": param, "location": where})
    return out


def validate_body(model: Type[M], payload: Optional[Dict[str, Any]]) -> M:
    """Valida `payload` contra `model`; lanza HTTP 400 con errores por campo.

    Usa `model.required_messages` (si existe) para los mensajes de campos requeridos.
    """
    try:
        return model.model_validate(payload or {})
    except ValidationError as e:
        messages = getattr(model, "required_messages", None)
        raise HTTPException(status_code=400, detail=format_errors(e.errors(), messages))
