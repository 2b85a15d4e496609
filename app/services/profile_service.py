"""Servicios de perfil de desarrollador.

Mantiene la API delgada y centraliza:
- armado parcial de campos del perfil (sólo lo enviado se escribe),
- alta (al inicio) y baja (por id) de entradas de experiencia/educación,
- borrado de cuenta (perfil + usuario, sin transacción),
- serialización a JSON (ObjectId -> str).
"""
import logging
from typing import Any, Dict, List, Tuple

from bson import ObjectId

from app.api.schemas.profile import EducationIn, ExperienceIn, ProfileIn
from app.core.errors import ErrorKind, StoreError
from app.repositories import profile_repo, user_repo

_log = logging.getLogger("devconnect.profile")

PROFILE_FIELDS = ("handle", "company", "website", "location", "bio", "status", "githubusername")
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")

NO_PROFILE = "There is no profile for this user"


class ProfileNotFound(StoreError):
    def __init__(self, message: str = NO_PROFILE) -> None:
        super().__init__(ErrorKind.NOT_FOUND, message)


def split_skills(raw: str) -> List[str]:
    """`"a, b ,c"` -> `["a", "b", "c"]`."""
    return [s.strip() for s in raw.split(",")]


def build_profile_fields(payload: ProfileIn) -> Dict[str, Any]:
    """Campos a escribir: sólo valores presentes y no vacíos; `social` agrupado."""
    fields: Dict[str, Any] = {}
    for name in PROFILE_FIELDS:
        value = getattr(payload, name)
        if value:
            fields[name] = value
    if payload.skills is not None:
        fields["skills"] = split_skills(payload.skills)

    social = {name: getattr(payload, name) for name in SOCIAL_FIELDS if getattr(payload, name)}
    if social:
        fields["social"] = social
    return fields


def build_experience(payload: ExperienceIn) -> Dict[str, Any]:
    entry = {
        "_id": ObjectId(),
        "title": payload.title,
        "company": payload.company,
        "location": payload.location,
        "from": payload.from_.isoformat(),
        "to": payload.to.isoformat() if payload.to else None,
        "current": payload.current,
        "description": payload.description,
    }
    return {k: v for k, v in entry.items() if v is not None}


def build_education(payload: EducationIn) -> Dict[str, Any]:
    entry = {
        "_id": ObjectId(),
        "school": payload.school,
        "degree": payload.degree,
        "fieldofstudy": payload.fieldofstudy,
        "from": payload.from_.isoformat(),
        "to": payload.to.isoformat() if payload.to else None,
        "current": payload.current,
        "description": payload.description,
    }
    return {k: v for k, v in entry.items() if v is not None}


def prepend_entry(entries: List[Dict[str, Any]], entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Inserta al inicio (más reciente primero); no muta la lista recibida."""
    out = list(entries)
    out.insert(0, entry)
    return out


def remove_entry(entries: List[Dict[str, Any]], entry_id: str) -> Tuple[List[Dict[str, Any]], bool]:
    """Quita la primera entrada cuyo `_id` coincide; si no hay coincidencia, no cambia nada."""
    out = list(entries)
    for idx, item in enumerate(out):
        if str(item.get("_id")) == entry_id:
            del out[idx]
            return out, True
    return out, False


def to_json(value: Any) -> Any:
    """Convierte ObjectId anidados a str para respuesta JSON."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_json(v) for v in value]
    return value


# --- Casos de uso ---

def get_my_profile(user_id: str) -> Dict[str, Any]:
    profile = profile_repo.find_by_user(user_id)
    if not profile:
        raise ProfileNotFound()
    return to_json(profile_repo.populate_user([profile])[0])


def upsert_profile(user_id: str, payload: ProfileIn) -> Tuple[Dict[str, Any], bool]:
    """Crea o actualiza el perfil del usuario. Devuelve (perfil, creado)."""
    fields = build_profile_fields(payload)
    if profile_repo.find_by_user(user_id):
        updated = profile_repo.update_profile_fields(user_id, fields)
        if not updated:
            # Borrado concurrente entre la lectura y la actualización
            raise ProfileNotFound()
        return to_json(updated), False
    created = profile_repo.insert_profile(user_id, fields)
    _log.info("Perfil creado user=%s", user_id)
    return to_json(created), True


def list_profiles() -> List[Dict[str, Any]]:
    return to_json(profile_repo.populate_user(profile_repo.find_all()))


def get_profile_by_user_id(user_id: str) -> Dict[str, Any]:
    """Perfil público por id de usuario; id malformado -> StoreError(MALFORMED)."""
    profile = profile_repo.find_by_user(user_id)
    if not profile:
        raise ProfileNotFound("Profile not found")
    return to_json(profile_repo.populate_user([profile])[0])


def delete_account(user_id: str) -> None:
    """Borra perfil y luego usuario. Sin compensación si el segundo paso falla."""
    profile_repo.delete_by_user(user_id)
    user_repo.delete_user(user_id)
    _log.info("Cuenta eliminada user=%s", user_id)


def _load_for_entries(user_id: str) -> Dict[str, Any]:
    profile = profile_repo.find_by_user(user_id)
    if not profile:
        raise ProfileNotFound()
    return profile


def _save_entries(profile: Dict[str, Any], field: str, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    saved = profile_repo.save_entries(profile["_id"], field, entries)
    if not saved:
        raise ProfileNotFound()
    return to_json(saved)


def add_experience(user_id: str, payload: ExperienceIn) -> Dict[str, Any]:
    profile = _load_for_entries(user_id)
    entries = prepend_entry(profile.get("experience") or [], build_experience(payload))
    return _save_entries(profile, "experience", entries)


def remove_experience(user_id: str, exp_id: str) -> Dict[str, Any]:
    profile = _load_for_entries(user_id)
    entries, removed = remove_entry(profile.get("experience") or [], exp_id)
    if not removed:
        _log.info("Experiencia no encontrada user=%s exp_id=%s", user_id, exp_id)
        return to_json(profile)
    return _save_entries(profile, "experience", entries)


def add_education(user_id: str, payload: EducationIn) -> Dict[str, Any]:
    profile = _load_for_entries(user_id)
    entries = prepend_entry(profile.get("education") or [], build_education(payload))
    return _save_entries(profile, "education", entries)


def remove_education(user_id: str, edu_id: str) -> Dict[str, Any]:
    profile = _load_for_entries(user_id)
    entries, removed = remove_entry(profile.get("education") or [], edu_id)
    if not removed:
        _log.info("Educación no encontrada user=%s edu_id=%s", user_id, edu_id)
        return to_json(profile)
    return _save_entries(profile, "education", entries)
