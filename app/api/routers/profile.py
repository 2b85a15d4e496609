"""
Endpoints del perfil de desarrollador (`/profile`).

- API delgada: valida el cuerpo, delega en `services/profile_service.py` y traduce
  errores tipados a HTTP.
- "No encontrado" se responde con 400 (`{"msg": ...}`), no 404; sólo el proxy de
  GitHub usa 404.
- Errores inesperados: se registran y se responde 500 sin detalle.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from app.api.deps import get_current_user, get_github_client
from app.api.schemas.profile import EducationIn, ExperienceIn, ProfileIn
from app.core.errors import ErrorKind, ServiceError, StoreError
from app.core.exceptions import SERVER_ERROR
from app.core.validation import validate_body
from app.infrastructure.http.github_client import GithubClient, GithubProfileNotFound
from app.services import profile_service as service
from app.services.profile_service import ProfileNotFound

router = APIRouter(prefix="/profile", tags=["Profile"])

_log = logging.getLogger("devconnect.profile")


def _server_error(e: Exception) -> HTTPException:
    _log.exception("Profile request failed: %r", e)
    return HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/me", response_model=dict, summary="Perfil del usuario autenticado")
def get_my_profile(user=Depends(get_current_user)):
    try:
        return service.get_my_profile(str(user["_id"]))
    except ProfileNotFound as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise _server_error(e)


@router.post(
    "",
    response_model=dict,
    summary="Crear o actualizar perfil",
    description="Crea el perfil (201) o actualiza sólo los campos enviados (200).",
)
def upsert_profile(
    response: Response,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    user=Depends(get_current_user),
):
    data = validate_body(ProfileIn, payload)
    try:
        profile, created = service.upsert_profile(str(user["_id"]), data)
    except ProfileNotFound as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise _server_error(e)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return profile


@router.get("", response_model=List[dict], summary="Listar todos los perfiles")
def list_profiles():
    try:
        return service.list_profiles()
    except StoreError as e:
        raise _server_error(e)


@router.get("/user/{user_id}", response_model=dict, summary="Perfil por id de usuario")
def get_profile_by_user_id(user_id: str):
    try:
        return service.get_profile_by_user_id(user_id)
    except ProfileNotFound as e:
        _log.info("Perfil inexistente user_id=%s", user_id)
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        if e.kind is ErrorKind.MALFORMED:
            _log.info("user_id malformado user_id=%s: %s", user_id, e.message)
            raise HTTPException(status_code=400, detail="Profile not found")
        raise _server_error(e)


@router.delete("", response_model=dict, summary="Eliminar perfil y cuenta")
def delete_account(user=Depends(get_current_user)):
    try:
        service.delete_account(str(user["_id"]))
    except StoreError as e:
        raise _server_error(e)
    return {"msg": "User Removed"}


@router.put("/experience", response_model=dict, summary="Agregar experiencia")
def add_experience(payload: Optional[Dict[str, Any]] = Body(default=None), user=Depends(get_current_user)):
    data = validate_body(ExperienceIn, payload)
    try:
        return service.add_experience(str(user["_id"]), data)
    except ProfileNotFound as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise _server_error(e)


@router.delete("/experience/{exp_id}", response_model=dict, summary="Eliminar experiencia")
def remove_experience(exp_id: str, user=Depends(get_current_user)):
    try:
        return service.remove_experience(str(user["_id"]), exp_id)
    except ProfileNotFound as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise _server_error(e)


@router.put("/education", response_model=dict, summary="Agregar educación")
def add_education(payload: Optional[Dict[str, Any]] = Body(default=None), user=Depends(get_current_user)):
    data = validate_body(EducationIn, payload)
    try:
        return service.add_education(str(user["_id"]), data)
    except ProfileNotFound as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise _server_error(e)


@router.delete("/education/{edu_id}", response_model=dict, summary="Eliminar educación")
def remove_education(edu_id: str, user=Depends(get_current_user)):
    try:
        return service.remove_education(str(user["_id"]), edu_id)
    except ProfileNotFound as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise _server_error(e)


@router.get("/github/{username}", summary="Repos públicos de GitHub (proxy)")
def github_repos(username: str, client: GithubClient = Depends(get_github_client)):
    try:
        return client.list_repos(username)
    except GithubProfileNotFound:
        raise HTTPException(status_code=404, detail="No Github Profile found")
    except ServiceError as e:
        if e.kind is ErrorKind.TRANSPORT:
            _log.error("GitHub inaccesible username=%s: %s", username, e.message)
            raise HTTPException(status_code=502, detail="Github unavailable")
        raise _server_error(e)
