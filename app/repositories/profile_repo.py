"""Repo de la colección `profile`.

- `user` se guarda como ObjectId (referencia a `user._id`) y es la llave de búsqueda.
- Entradas de `experience`/`education` llevan su propio `_id` (ObjectId).
- Sella timestamps en ISO-8601 UTC (Z).
"""
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ReturnDocument

from app.infrastructure.db.errors import translate_store_errors
from app.infrastructure.db.mongo import get_db
from app.repositories import user_repo

COLLECTION = "profile"

# Secuencias de entradas embebidas que admiten alta/baja por id
ENTRY_FIELDS = ("experience", "education")


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _flatten_set(fields: Dict[str, Any]) -> Dict[str, Any]:
    """`{"social": {"twitter": x}}` -> `{"social.twitter": x}` para no pisar subcampos."""
    out: Dict[str, Any] = {}
    for k, v in fields.items():
        if isinstance(v, dict):
            for sk, sv in v.items():
                out[f"{k}.{sk}"] = sv
        else:
            out[k] = v
    return out


def find_by_user(user_id: str) -> Optional[Dict[str, Any]]:
    """Perfil por id de usuario (str). Lanza StoreError(MALFORMED) si el id no es ObjectId."""
    with translate_store_errors():
        return get_db()[COLLECTION].find_one({"user": ObjectId(str(user_id))})


def find_all() -> List[Dict[str, Any]]:
    """Todos los perfiles en el orden natural de la colección."""
    with translate_store_errors():
        return list(get_db()[COLLECTION].find({}))


def insert_profile(user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Crea el perfil con defaults y devuelve el documento insertado."""
    now = _now_iso()
    data: Dict[str, Any] = {
        "user": ObjectId(str(user_id)),
        "skills": [],
        "social": {},
        "experience": [],
        "education": [],
        "created_at": now,
    }
    data.update(fields)
    data["updated_at"] = now
    with translate_store_errors():
        res = get_db()[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def update_profile_fields(user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Actualiza sólo los campos provistos ($set) y devuelve el documento resultante."""
    set_ops = _flatten_set(fields)
    set_ops["updated_at"] = _now_iso()
    with translate_store_errors():
        return get_db()[COLLECTION].find_one_and_update(
            {"user": ObjectId(str(user_id))},
            {"$set": set_ops},
            return_document=ReturnDocument.AFTER,
        )


def save_entries(profile_id: ObjectId, field: str, entries: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Reescribe la secuencia completa `experience` o `education` (last-write-wins)."""
    if field not in ENTRY_FIELDS:
        raise ValueError(f"Campo de entradas inválido: {field}")
    with translate_store_errors():
        return get_db()[COLLECTION].find_one_and_update(
            {"_id": profile_id},
            {"$set": {field: entries, "updated_at": _now_iso()}},
            return_document=ReturnDocument.AFTER,
        )


def delete_by_user(user_id: str) -> Optional[Dict[str, Any]]:
    """Elimina el perfil del usuario y devuelve el documento borrado (o None)."""
    with translate_store_errors():
        return get_db()[COLLECTION].find_one_and_delete({"user": ObjectId(str(user_id))})


def populate_user(profiles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reemplaza `user` (ObjectId) por `{_id, name, avatar}` del dueño; None si no existe."""
    owners = user_repo.find_public_by_ids(p.get("user") for p in profiles)
    out: List[Dict[str, Any]] = []
    for p in profiles:
        d = dict(p)
        d["user"] = owners.get(p.get("user"))
        out.append(d)
    return out
