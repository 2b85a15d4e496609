"""
Dependencias reutilizables para routers (FastAPI Depends).

- Autenticación: extrae y valida el token de acceso, devuelve el usuario actual.
- Cliente de GitHub construido con configuración explícita.
- Mantener esta capa delgada: sin lógica de negocio.
"""
import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Header, HTTPException
from starlette.status import HTTP_401_UNAUTHORIZED

from app.core.config import settings
from app.core.errors import ErrorKind, StoreError
from app.infrastructure.http.github_client import GithubClient
from app.infrastructure.security.token_service import verify_access_token
from app.repositories import user_repo

_log = logging.getLogger("devconnect.auth")


def _extract_token(authorization: Optional[str], x_auth_token: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return x_auth_token or None


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    x_auth_token: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    token = _extract_token(authorization, x_auth_token)
    if not token:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="No token, authorization denied")
    try:
        payload = verify_access_token(token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Token is not valid")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Token is not valid")

    try:
        u = user_repo.get_user_by_id(user_id)
    except StoreError as e:
        # `sub` con formato inválido cuenta como token inválido; otros fallos suben (500)
        if e.kind is not ErrorKind.MALFORMED:
            raise
        _log.info("Token con sub malformado: %s", e.message)
        u = None
    if not u:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Token is not valid")
    return u


def get_github_client() -> GithubClient:
    return GithubClient(settings.github_config)
