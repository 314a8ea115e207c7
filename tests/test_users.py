from evalhub.models.user import User
from tests.helpers import DEFAULT_PASSWORD, create_department, create_user


def test_list_users_filters(client, db, admin, member, other_member, admin_headers):
    finance = create_department(db, "Finance")
    create_user(db, "fin@example.com", department=finance)

    everyone = client.get("/api/users", headers=admin_headers).json()
    assert everyone["count"] == 4

    engineering = client.get(
        "/api/users", headers=admin_headers, params={"departmentId": member.department_id}
    ).json()
    assert {u["email"] for u in engineering["data"]} == {"member@example.com", "other@example.com"}

    past_year = client.get("/api/users", headers=admin_headers, params={"year": 1999}).json()
    assert past_year["count"] == 0


def test_admin_creates_user(client, department, admin_headers):
    r = client.post("/api/users", headers=admin_headers, json={
        "email": "created@example.com",
        "password": "secret123",
        "firstName": "Created",
        "academicDegree": "MSc",
        "averageScore": 88.5,
        "departmentId": department.id,
    })
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["academicDegree"] == "MSc"
    assert data["averageScore"] == 88.5
    assert data["evaluationAverageScore"] is None


def test_create_user_unknown_department(client, admin_headers):
    r = client.post("/api/users", headers=admin_headers, json={
        "email": "lost@example.com", "password": "secret123", "departmentId": 999,
    })
    assert r.status_code == 404


def test_member_updates_own_profile(client, member, member_headers):
    r = client.put(f"/api/users/{member.id}", headers=member_headers, json={
        "firstName": "Updated", "evaluationAverageScore": 10,
    })
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["firstName"] == "Updated"
    assert data["evaluationAverageScore"] is None


def test_member_cannot_change_own_role(client, member, member_headers):
    r = client.put(f"/api/users/{member.id}", headers=member_headers, json={"role": "Admin"})
    assert r.status_code == 403

    unchanged = client.put(f"/api/users/{member.id}", headers=member_headers, json={"role": "User"})
    assert unchanged.status_code == 200


def test_admin_changes_role(client, member, admin_headers):
    r = client.put(f"/api/users/{member.id}", headers=admin_headers, json={"role": "Admin"})
    assert r.status_code == 200
    assert r.json()["data"]["role"] == "Admin"


def test_update_email_duplicate(client, member, other_member, member_headers):
    r = client.put(f"/api/users/{member.id}", headers=member_headers, json={"email": "other@example.com"})
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"


def test_update_password_rehashes(client, member, member_headers):
    r = client.put(f"/api/users/{member.id}", headers=member_headers, json={"password": "changed99"})
    assert r.status_code == 200

    assert client.post("/api/auth/login", json={
        "email": "member@example.com", "password": DEFAULT_PASSWORD,
    }).status_code == 401
    assert client.post("/api/auth/login", json={
        "email": "member@example.com", "password": "changed99",
    }).status_code == 200


def test_department_reference_variants(client, db, admin, member, admin_headers):
    orphan = create_user(db, "orphan@example.com")
    orphan.department_id = 999
    db.commit()

    resolved = client.get(f"/api/users/{member.id}", headers=admin_headers).json()["data"]
    unresolved = client.get(f"/api/users/{orphan.id}", headers=admin_headers).json()["data"]
    unassigned = client.get(f"/api/users/{admin.id}", headers=admin_headers).json()["data"]

    assert resolved["department"] == {"kind": "resolved", "id": member.department_id, "name": "Engineering"}
    assert unresolved["department"] == {"kind": "unresolved", "id": 999}
    assert unassigned["department"] is None


def test_delete_user(client, db, member, member_headers, admin_headers):
    member_id = member.id
    r = client.delete(f"/api/users/{member_id}", headers=member_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "User deleted successfully"

    db.expire_all()
    assert db.get(User, member_id) is None
    assert client.get(f"/api/users/{member_id}", headers=admin_headers).status_code == 404


def test_get_missing_user(client, admin_headers):
    r = client.get("/api/users/999", headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "User not found"}
