"""Fixtures compartidas: Mongo en memoria (mongomock), usuario sembrado y TestClient."""
from collections.abc import Callable, Iterator
from typing import Any, Dict

import mongomock
import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import settings
from app.infrastructure.db import mongo
from app.infrastructure.security.token_service import create_access_token
from app.main import create_app


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", "test-secret")


@pytest.fixture
def db() -> Iterator[mongomock.Database]:
    database = mongomock.MongoClient()["devconnector_test"]
    mongo.set_db(database)
    yield database
    mongo.set_db(None)


@pytest.fixture
def app(db) -> FastAPI:
    return create_app()


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    # Startup no reemplaza la BD ya asignada; sólo asegura índices
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db) -> Callable[..., Dict[str, Any]]:
    def _make(name: str = "Ada Lovelace", email: str = "ada@example.com") -> Dict[str, Any]:
        doc = {
            "_id": ObjectId(),
            "name": name,
            "email": email,
            "avatar": f"//www.gravatar.com/avatar/{email}",
        }
        db["user"].insert_one(doc)
        return doc

    return _make


@pytest.fixture
def user(make_user) -> Dict[str, Any]:
    return make_user()


@pytest.fixture
def headers_for() -> Callable[[Dict[str, Any]], Dict[str, str]]:
    def _headers(user_doc: Dict[str, Any]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user=user_doc)}"}

    return _headers


@pytest.fixture
def auth_headers(user, headers_for) -> Dict[str, str]:
    return headers_for(user)
