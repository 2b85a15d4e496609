"""
Creación y verificación de JWTs de acceso (PyJWT, HS256 por defecto).
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

import jwt

from app.core.config import settings


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret() -> str:
    if not settings.jwt_secret:
        raise RuntimeError("Falta JWT_SECRET en configuración")
    return settings.jwt_secret


def create_access_token(*, user: Dict[str, Any], expires_in_minutes: Optional[int] = None) -> str:
    """
    Genera un JWT válido por ACCESS_TOKEN_EXPIRE_MINUTES.
    Claims: sub(user_id), iat, exp, jti.
    """
    now = _now_utc()
    mins = expires_in_minutes if expires_in_minutes is not None else settings.access_token_expire_minutes
    exp = now + timedelta(minutes=mins)
    payload = {
        "sub": str(user["_id"]),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid4()),
    }
    return jwt.encode(payload, _secret(), algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida firma/expiración. Devuelve payload.
    """
    return jwt.decode(token, key=_secret(), algorithms=[settings.jwt_algorithm])
