"""
Bootstrap de la base Mongo: índices mínimos de `profile` y `user`.
Se ejecuta al inicio de la app. No tumba la app si algo falla; deja warnings.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.repositories.profile_repo import COLLECTION as PROFILE_COLL
from app.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("devconnect.mongo.bootstrap")


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        spec = dict(ix)
        keys = spec.pop("keys")
        try:
            coll.create_index(keys, **spec)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza índices mínimos.

    - Un perfil por usuario: índice único sobre `profile.user`.
    - Email único en `user`.
    """
    _ensure_indexes(
        PROFILE_COLL,
        [
            {"keys": [("user", 1)], "unique": True, "name": "uniq_profile_user"},
        ],
    )
    _ensure_indexes(
        USER_COLL,
        [
            {"keys": [("email", 1)], "unique": True, "sparse": True, "name": "uniq_email"},
        ],
    )
