"""
Tests for ambient pieces: settings, validation formatting, store error
translation, bootstrap indexes, middlewares and health endpoints.
"""
import logging

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from app.core.config import Settings
from app.core.errors import ErrorKind, StoreError
from app.core.validation import format_errors
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.db import mongo
from app.infrastructure.db.errors import translate_store_errors
from app.repositories import profile_repo


class TestSettings:
    @pytest.mark.parametrize(
        "raw, expected",
        [("/api", "/api"), ("api/", "/api"), ("  ", ""), ("/", "/")],
    )
    def test_api_prefix_normalized(self, raw, expected):
        assert Settings(api_prefix=raw).api_prefix_normalized == expected

    def test_github_config_from_settings(self):
        s = Settings(github_client_id="cid", github_client_secret="sec", github_repos_per_page=3)
        cfg = s.github_config
        assert (cfg.client_id, cfg.client_secret, cfg.per_page) == ("cid", "sec", 3)


class TestFormatErrors:
    def test_required_message_overrides_pydantic_text(self):
        errors = [{"type": "missing", "loc": ("body", "status"), "msg": "Field required"}]
        assert format_errors(errors, {"status": "Status is required"}) == [
            {"msg": "Status is required", "param": "status", "location": "body"}
        ]

    def test_other_errors_keep_pydantic_text(self):
        errors = [{"type": "date_from_datetime_parsing", "loc": ("from",), "msg": "Input should be a valid date", "input": "x"}]
        assert format_errors(errors, {"from": "From date is required"})[0]["msg"] == "Input should be a valid date"


class TestStoreErrors:
    def test_invalid_object_id_is_malformed(self, db):
        with pytest.raises(StoreError) as exc:
            profile_repo.find_by_user("not-an-id")
        assert exc.value.kind is ErrorKind.MALFORMED

    def test_connection_failure_is_transport(self):
        with pytest.raises(StoreError) as exc:
            with translate_store_errors():
                raise ServerSelectionTimeoutError("no servers")
        assert exc.value.kind is ErrorKind.TRANSPORT

    def test_other_pymongo_errors_are_internal(self):
        with pytest.raises(StoreError) as exc:
            with translate_store_errors():
                raise OperationFailure("bad op")
        assert exc.value.kind is ErrorKind.INTERNAL


def test_bootstrap_creates_unique_user_index(db):
    ensure_collections()
    info = db["profile"].index_information()
    assert info["uniq_profile_user"]["unique"] is True
    assert set(info) == {"_id_", "uniq_profile_user"}
    assert "uniq_email" in db["user"].index_information()


class TestAppPlumbing:
    def test_ping_and_health(self, client):
        assert client.get("/api/ping").json() == {"message": "pong"}
        assert client.get("/api/health").json() == {"ok": True, "db": True}

    def test_no_debug_route(self, client):
        assert client.get("/api/_debug/status").status_code == 404

    def test_request_id_is_propagated(self, client):
        resp = client.get("/api/ping", headers={"X-Request-Id": "abc123"})
        assert resp.headers["X-Request-Id"] == "abc123"

    def test_error_body_carries_request_id(self, client):
        resp = client.get("/api/profile/me", headers={"X-Request-Id": "rid-1"})
        assert resp.status_code == 401
        assert resp.json()["request_id"] == "rid-1"

    def test_store_failure_is_opaque_500(self, client, monkeypatch):
        def boom():
            raise StoreError(ErrorKind.TRANSPORT, "connection reset by peer")

        monkeypatch.setattr(profile_repo, "find_all", boom)
        resp = client.get("/api/profile")
        assert resp.status_code == 500
        assert resp.json()["msg"] == "Server Error"
        assert "connection" not in resp.text

    def test_store_failure_is_logged_with_traceback(self, client, monkeypatch, caplog):
        def boom():
            raise StoreError(ErrorKind.INTERNAL, "bad op")

        monkeypatch.setattr(profile_repo, "find_all", boom)
        with caplog.at_level(logging.ERROR, logger="devconnect.profile"):
            client.get("/api/profile")
        records = [r for r in caplog.records if r.name == "devconnect.profile"]
        assert records and records[0].exc_info is not None


def test_shutdown_releases_database(app):
    with TestClient(app):
        assert mongo.db_ready()
    assert not mongo.db_ready()
