from datetime import timedelta

from jose import jwt

from evalhub.config import settings
from evalhub.models.user import User
from evalhub.services.auth import create_access_token, decode_token, verify_password
from tests.helpers import DEFAULT_PASSWORD, auth_headers, criteria


def test_register_returns_account_and_token(client, department):
    r = client.post("/api/auth/register", json={
        "email": "New.Person@Example.com",
        "password": "secret123",
        "firstName": "New",
        "lastName": "Person",
        "departmentId": department.id,
    })
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["email"] == "new.person@example.com"
    assert data["role"] == "User"
    assert data["department"] == {"kind": "resolved", "id": department.id, "name": "Engineering"}
    assert data["evaluationAverageScore"] is None
    assert data["token"]
    assert "password" not in data
    assert "passwordHash" not in data

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == data["id"]


def test_register_stores_salted_hash(client, db, department):
    client.post("/api/auth/register", json={
        "email": "hash@example.com", "password": "secret123", "departmentId": department.id,
    })
    user = db.query(User).filter(User.email == "hash@example.com").one()
    assert user.password_hash != "secret123"
    assert verify_password("secret123", user.password_hash)


def test_register_user_requires_department(client):
    r = client.post("/api/auth/register", json={"email": "x@example.com", "password": "secret123"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Department ID is required for User role"}


def test_register_duplicate_email(client, member, department):
    r = client.post("/api/auth/register", json={
        "email": "MEMBER@example.com", "password": "secret123", "departmentId": department.id,
    })
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"


def test_register_rejects_invalid_email(client, department):
    r = client.post("/api/auth/register", json={
        "email": "not-an-email", "password": "secret123", "departmentId": department.id,
    })
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_register_admin_can_be_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "allow_admin_registration", False)
    r = client.post("/api/auth/register", json={
        "email": "boss@example.com", "password": "secret123", "role": "Admin",
    })
    assert r.status_code == 403


def test_login(client, member):
    r = client.post("/api/auth/login", json={"email": "Member@Example.com", "password": DEFAULT_PASSWORD})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["id"] == member.id
    assert decode_token(data["token"]) == member.id


def test_login_failures_are_indistinguishable(client, member):
    wrong_password = client.post("/api/auth/login", json={"email": "member@example.com", "password": "nope123"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "nope123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"success": False, "message": "Invalid credentials"}


def test_token_carries_only_account_id(member):
    token = create_access_token(member.id)
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    assert set(payload) == {"sub", "exp"}
    assert payload["sub"] == str(member.id)


def test_me_requires_token(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["message"] == "Not authorized to access this route"


def test_me_rejects_bad_tokens(client, member):
    expired = create_access_token(member.id, expires_delta=timedelta(seconds=-5))
    forged = jwt.encode({"sub": str(member.id)}, "another-secret", algorithm="HS256")

    for token in (expired, forged, "garbage"):
        r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401


def test_me_with_deleted_account(client, db, member):
    headers = auth_headers(member)
    db.delete(member)
    db.commit()

    r = client.get("/api/auth/me", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


def test_role_is_read_from_storage(client, db, member):
    headers = auth_headers(member)
    assert client.get("/api/users", headers=headers).status_code == 403

    member.role = "Admin"
    db.commit()
    assert client.get("/api/users", headers=headers).status_code == 200


def test_change_password(client, member, member_headers):
    r = client.post("/api/auth/change-password", headers=member_headers, json={
        "oldPassword": DEFAULT_PASSWORD, "newPassword": "brandnew1", "confirmPassword": "brandnew1",
    })
    assert r.status_code == 200

    old = client.post("/api/auth/login", json={"email": "member@example.com", "password": DEFAULT_PASSWORD})
    new = client.post("/api/auth/login", json={"email": "member@example.com", "password": "brandnew1"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_checks(client, member_headers):
    mismatch = client.post("/api/auth/change-password", headers=member_headers, json={
        "oldPassword": DEFAULT_PASSWORD, "newPassword": "brandnew1", "confirmPassword": "brandnew2",
    })
    wrong_old = client.post("/api/auth/change-password", headers=member_headers, json={
        "oldPassword": "wrong-old", "newPassword": "brandnew1", "confirmPassword": "brandnew1",
    })
    assert mismatch.status_code == 400
    assert mismatch.json()["message"] == "Passwords do not match"
    assert wrong_old.status_code == 400
    assert wrong_old.json()["message"] == "Incorrect old password"


def test_deleted_account_id_is_not_reused(client, department, admin_headers):
    gone = client.post("/api/auth/register", json={
        "email": "gone@example.com", "password": "secret123", "departmentId": department.id,
    }).json()["data"]
    stale_headers = {"Authorization": f"Bearer {gone['token']}"}
    client.post("/api/evaluations", headers=admin_headers, json={
        "userId": gone["id"], "evaluationNumber": 1, "criteria": criteria(6),
    })
    assert client.delete(f"/api/users/{gone['id']}", headers=stale_headers).status_code == 200

    new = client.post("/api/auth/register", json={
        "email": "new@example.com", "password": "secret123", "departmentId": department.id,
    }).json()["data"]

    assert new["id"] != gone["id"]
    r = client.get("/api/auth/me", headers=stale_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"

    own = client.get(f"/api/evaluations/user/{new['id']}", headers=admin_headers).json()
    assert own["count"] == 0


def test_password_hashing_runs_in_threadpool(client, department, monkeypatch):
    import evalhub.routers.auth as auth_router

    calls = []
    real = auth_router.run_in_threadpool

    async def recording(func, *args, **kwargs):
        calls.append(func.__name__)
        return await real(func, *args, **kwargs)

    monkeypatch.setattr(auth_router, "run_in_threadpool", recording)
    client.post("/api/auth/register", json={
        "email": "pool@example.com", "password": "secret123", "departmentId": department.id,
    })
    client.post("/api/auth/login", json={"email": "pool@example.com", "password": "secret123"})

    assert calls == ["create_user", "authenticate_user"]
