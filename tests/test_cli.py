import pytest

from admin_gateway.cli import create_admin, grant_admin, main
from admin_gateway.core.identity import UserNotFoundError
from admin_gateway.models.auth_account import AuthAccount
from admin_gateway.models.user import User
from conftest import STUDENT_EMAIL, STUDENT_UID


def test_create_admin_creates_account_and_document(db):
    user = create_admin(db, "ops@example.com", "ops-password", "Ops")

    db.expire_all()
    account = db.get(AuthAccount, user.uid)
    assert account.custom_claims == {"isAdmin": True}
    doc = db.get(User, user.uid)
    assert doc.is_admin is True
    assert doc.display_name == "Ops"
    assert doc.status == "active"


def test_create_admin_promotes_existing_account(db):
    user = create_admin(db, STUDENT_EMAIL, "ignored-password")
    assert user.uid == STUDENT_UID
    assert db.query(AuthAccount).filter(AuthAccount.email == STUDENT_EMAIL).count() == 1

    db.expire_all()
    assert db.get(User, STUDENT_UID).is_admin is True


def test_grant_admin(db):
    grant_admin(db, STUDENT_EMAIL)
    db.expire_all()
    assert db.get(User, STUDENT_UID).is_admin is True
    assert db.get(AuthAccount, STUDENT_UID).custom_claims == {"isAdmin": True}


def test_grant_admin_unknown_email(db):
    with pytest.raises(UserNotFoundError):
        grant_admin(db, "nobody@example.com")


def test_main_exit_codes(db):
    assert main(["grant-admin", "--email", STUDENT_EMAIL]) == 0
    assert main(["grant-admin", "--email", "nobody@example.com"]) == 1
    assert main(["create-admin", "--email", "", "--password", ""]) == 2
    assert main(["init-db"]) == 0

    db.expire_all()
    assert db.get(User, STUDENT_UID).is_admin is True
