from types import SimpleNamespace

import pytest

from evalhub.errors import Forbidden
from evalhub.services.access import authorize_role, authorize_role_change, authorize_self_or_admin
from tests.helpers import criteria, create_evaluation

ADMIN = SimpleNamespace(id=1, role="Admin")
ALICE = SimpleNamespace(id=2, role="User")
BOB = SimpleNamespace(id=3, role="User")


def test_authorize_role():
    authorize_role(ADMIN, "Admin")
    with pytest.raises(Forbidden) as exc:
        authorize_role(ALICE, "Admin")
    assert exc.value.message == "Access denied: Admin only"


def test_authorize_self_or_admin():
    authorize_self_or_admin(ADMIN, BOB.id)
    authorize_self_or_admin(ALICE, ALICE.id)
    with pytest.raises(Forbidden):
        authorize_self_or_admin(ALICE, BOB.id)


def test_authorize_role_change():
    authorize_role_change(ALICE, ALICE, None)
    authorize_role_change(ALICE, ALICE, "User")
    authorize_role_change(ADMIN, ALICE, "Admin")
    with pytest.raises(Forbidden):
        authorize_role_change(ALICE, ALICE, "Admin")


def test_member_cannot_use_admin_routes(client, member, member_headers):
    assert client.get("/api/users", headers=member_headers).status_code == 403
    assert client.post("/api/departments", headers=member_headers, json={"name": "Ops"}).status_code == 403
    assert client.get("/api/evaluations/export", headers=member_headers).status_code == 403
    assert client.get("/api/user-data", headers=member_headers).status_code == 403


def test_member_create_evaluation_is_forbidden_regardless_of_body(client, member, member_headers):
    valid = client.post("/api/evaluations", headers=member_headers, json={
        "userId": member.id, "evaluationNumber": 1, "criteria": criteria(5),
    })
    invalid = client.post("/api/evaluations", headers=member_headers, json={"evaluationNumber": 9})

    assert valid.status_code == 403
    assert valid.json() == {"success": False, "message": "Access denied: Admin only"}
    assert invalid.status_code == 403


def test_self_or_admin_on_accounts(client, member, other_member, member_headers, admin_headers):
    assert client.get(f"/api/users/{member.id}", headers=member_headers).status_code == 200
    assert client.get(f"/api/users/{other_member.id}", headers=member_headers).status_code == 403
    assert client.get(f"/api/users/{other_member.id}", headers=admin_headers).status_code == 200


def test_self_or_admin_on_evaluations(client, db, admin, member, other_member, member_headers, admin_headers):
    own = create_evaluation(db, member, admin, 1)
    foreign = create_evaluation(db, other_member, admin, 1)

    assert client.get(f"/api/evaluations/{own.id}", headers=member_headers).status_code == 200
    assert client.get(f"/api/evaluations/{foreign.id}", headers=member_headers).status_code == 403
    assert client.get(f"/api/evaluations/{foreign.id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/evaluations/user/{other_member.id}", headers=member_headers).status_code == 403


def test_unauthenticated_requests(client):
    for path in ("/api/departments", "/api/evaluations", "/api/users/1", "/api/user-data/1"):
        assert client.get(path).status_code == 401
