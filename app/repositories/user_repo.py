"""Repo de la colección `user` (sólo lectura para joins/auth y borrado de cuenta)."""
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId

from app.infrastructure.db.errors import translate_store_errors
from app.infrastructure.db.mongo import get_db

COLLECTION = "user"

# Campos públicos que se exponen al "poblar" un perfil
PUBLIC_FIELDS = ("name", "avatar")


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str). Lanza StoreError(MALFORMED) si el id no es ObjectId."""
    with translate_store_errors():
        return get_db()[COLLECTION].find_one({"_id": ObjectId(str(user_id))})


def find_public_by_ids(user_ids: Iterable[ObjectId]) -> Dict[ObjectId, Dict[str, Any]]:
    """Devuelve {_id: {_id, name, avatar}} para los ids pedidos."""
    ids: List[ObjectId] = list({uid for uid in user_ids if uid is not None})
    if not ids:
        return {}
    projection = {f: 1 for f in PUBLIC_FIELDS}
    with translate_store_errors():
        docs = get_db()[COLLECTION].find({"_id": {"$in": ids}}, projection)
        return {d["_id"]: d for d in docs}


def delete_user(user_id: str) -> bool:
    """Elimina el usuario; True si existía."""
    with translate_store_errors():
        res = get_db()[COLLECTION].delete_one({"_id": ObjectId(str(user_id))})
    return res.deleted_count > 0
