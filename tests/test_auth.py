import pytest

from conftest import ALICE, EXPIRED, RESOURCES
from models.db import engine
from models.user import UserSession
from utils.auth import lookup_session


@pytest.mark.parametrize("path", sorted(RESOURCES))
def test_missing_authorization_header_is_rejected(client, path):
    response = client.get(path)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}


@pytest.mark.parametrize(
    "header",
    ["test_token_alice", "Token test_token_alice", "Bearer", "bearer-test_token_alice"],
)
def test_malformed_authorization_header_is_rejected(client, header):
    response = client.get("/api/tasks", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_unknown_token_is_rejected(client):
    response = client.get("/api/tasks", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.parametrize("path", sorted(RESOURCES))
def test_expired_session_is_rejected_on_every_route(client, path, db_session):
    # The row is still in the store, it just expired
    assert db_session.query(UserSession).filter_by(token="test_token_expired").count() == 1

    assert client.get(path, headers=EXPIRED).status_code == 401
    response = client.post(path, json=RESOURCES[path], headers=EXPIRED)
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_expired_session_does_not_persist_anything(client):
    client.post("/api/tasks", json=RESOURCES["/api/tasks"], headers=EXPIRED)
    assert client.get("/api/tasks", headers=ALICE).json() == []


def test_lookup_session(db_session):
    assert lookup_session(db_session, "test_token_alice").user_id == "user_1"
    assert lookup_session(db_session, "test_token_expired") is None
    assert lookup_session(db_session, "missing") is None


def test_health_does_not_need_a_token(client):
    assert client.get("/health").status_code == 200
    assert client.get("/").json() == {"message": "Wellness Tracker API running"}


def test_session_store_failure_is_a_json_server_error(client):
    UserSession.__table__.drop(bind=engine)

    response = client.get("/api/tasks", headers=ALICE)
    assert response.status_code == 500
    assert response.json()["error"].startswith("Internal server error: ")
    assert "sessions" in response.json()["error"]
