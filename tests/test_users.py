import pytest

from admin_gateway.models.auth_account import AuthAccount
from admin_gateway.models.user import User
from conftest import ADMIN_UID, STUDENT_EMAIL, STUDENT_UID


def create_user(client, headers, **body):
    payload = {"email": "new.user@example.com", "password": "secret123"}
    payload.update(body)
    return client.post("/admin/createUser", json=payload, headers=headers)


@pytest.mark.parametrize(
    "role,expected",
    [("Admin", True), ("ADMIN", True), (" admin ", False), ("student", False), (None, False)],
)
def test_create_user_derives_admin_flag(client, db, admin_headers, role, expected):
    body = {"role": role} if role is not None else {}
    r = create_user(client, admin_headers, **body)
    assert r.status_code == 200, r.text
    data = r.json()["data"]

    user = db.get(User, data["uid"])
    assert user.is_admin is expected


def test_create_user_provisions_account_and_document(client, db, admin_headers):
    r = create_user(client, admin_headers, displayName="New User", phone="+91 98765 43210")
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["email"] == "new.user@example.com"
    assert data["credentials"] == {"email": "new.user@example.com", "password": "secret123"}

    account = db.get(AuthAccount, data["uid"])
    assert account.disabled is False
    assert account.hashed_password != "secret123"

    user = db.get(User, data["uid"])
    assert user.display_name == "New User"
    assert user.phone == "+91 98765 43210"
    assert user.status == "active"
    assert user.total_courses_enrolled == 0

    r = client.post("/auth/login", json={"email": "new.user@example.com", "password": "secret123"})
    assert r.status_code == 200


@pytest.mark.parametrize(
    "body,field",
    [
        ({"password": "secret123"}, "email"),
        ({"email": "x@example.com"}, "password"),
        ({"email": "x@example.com", "password": ""}, "password"),
        ({"email": "", "password": "secret123"}, "email"),
    ],
)
def test_create_user_bad_request(client, db, admin_headers, body, field):
    r = client.post("/admin/createUser", json=body, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert field in r.json()["error"]
    assert db.query(AuthAccount).count() == 2


def test_create_user_echoes_raw_email(client, db, admin_headers):
    r = create_user(client, admin_headers, email="Mixed.Case@Example.COM")
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["credentials"]["email"] == "Mixed.Case@Example.COM"
    assert data["email"] == "mixed.case@example.com"
    assert db.get(User, data["uid"]).email == "mixed.case@example.com"


def test_create_user_accepts_local_domains(client, admin_headers):
    r = create_user(client, admin_headers, email="ops@school.local")
    assert r.status_code == 200, r.text

    r = client.post("/auth/login", json={"email": "ops@school.local", "password": "secret123"})
    assert r.status_code == 200


def test_create_user_malformed_email_surfaces_provider_error(client, db, admin_headers):
    r = create_user(client, admin_headers, email="not-an-email")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "The email address is improperly formatted."}
    assert db.query(AuthAccount).count() == 2
    assert db.query(User).count() == 2


def test_create_user_duplicate_email_surfaces_provider_error(client, db, admin_headers):
    r = create_user(client, admin_headers, email=STUDENT_EMAIL)
    assert r.status_code == 500
    assert r.json() == {
        "success": False,
        "error": "The email address is already in use by another account.",
    }
    assert db.query(User).count() == 2


def test_create_user_short_password_surfaces_provider_error(client, db, admin_headers):
    r = create_user(client, admin_headers, password="abc")
    assert r.status_code == 500
    assert "at least 6 characters" in r.json()["error"]
    assert db.query(AuthAccount).count() == 2


def test_toggle_user_disable_then_enable(client, db, admin_headers):
    r = client.post(
        "/admin/toggleUser",
        json={"uid": STUDENT_UID, "action": "disable"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"success": True}

    db.expire_all()
    assert db.get(AuthAccount, STUDENT_UID).disabled is True
    assert db.get(User, STUDENT_UID).status == "inactive"

    r = client.post("/auth/login", json={"email": STUDENT_EMAIL, "password": "password123"})
    assert r.status_code == 401
    assert r.json()["error"] == "User account is disabled"

    r = client.post(
        "/admin/toggleUser",
        json={"uid": STUDENT_UID, "action": "enable"},
        headers=admin_headers,
    )
    assert r.status_code == 200

    db.expire_all()
    assert db.get(AuthAccount, STUDENT_UID).disabled is False
    assert db.get(User, STUDENT_UID).status == "active"


@pytest.mark.parametrize(
    "body",
    [
        {"uid": STUDENT_UID},
        {"action": "disable"},
        {"uid": "", "action": "disable"},
        {"uid": STUDENT_UID, "action": "suspend"},
    ],
)
def test_toggle_user_bad_request(client, admin_headers, body):
    r = client.post("/admin/toggleUser", json=body, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_toggle_unknown_user_is_internal_error(client, admin_headers):
    r = client.post(
        "/admin/toggleUser",
        json={"uid": "ghost", "action": "disable"},
        headers=admin_headers,
    )
    assert r.status_code == 500
    assert "ghost" in r.json()["error"]


def test_list_users_newest_first_with_pagination(client, admin_headers):
    first = create_user(client, admin_headers, email="a@example.com").json()["data"]["uid"]
    second = create_user(client, admin_headers, email="b@example.com").json()["data"]["uid"]

    r = client.get("/admin/users", headers=admin_headers)
    assert r.status_code == 200
    uids = [u["uid"] for u in r.json()["data"]]
    assert uids == [second, first, STUDENT_UID, ADMIN_UID]

    r = client.get("/admin/users?limit=2&offset=1", headers=admin_headers)
    assert [u["uid"] for u in r.json()["data"]] == [first, STUDENT_UID]


def test_list_users_uses_camel_case_and_hides_credentials(client, admin_headers):
    r = client.get("/admin/users", headers=admin_headers)
    row = next(u for u in r.json()["data"] if u["uid"] == ADMIN_UID)
    assert row["isAdmin"] is True
    assert row["totalCoursesEnrolled"] == 0
    assert "createdAt" in row
    assert "hashedPassword" not in row
    assert "hashed_password" not in row


@pytest.mark.parametrize("query", ["limit=0", "offset=-1", "limit=abc"])
def test_list_users_rejects_bad_paging(client, admin_headers, query):
    r = client.get(f"/admin/users?{query}", headers=admin_headers)
    assert r.status_code == 400


def test_toggle_user_stamps_updated_at(client, db, admin_headers):
    db.expire_all()
    user_before = db.get(User, STUDENT_UID).updated_at
    account_before = db.get(AuthAccount, STUDENT_UID).updated_at

    r = client.post(
        "/admin/toggleUser",
        json={"uid": STUDENT_UID, "action": "disable"},
        headers=admin_headers,
    )
    assert r.status_code == 200

    db.expire_all()
    assert db.get(User, STUDENT_UID).updated_at > user_before
    assert db.get(AuthAccount, STUDENT_UID).updated_at > account_before
