"""
Operator commands.

    admin-gateway init-db
    admin-gateway create-admin --email a@b.c --password secret [--name "Ops"]
    admin-gateway grant-admin --email a@b.c

``create-admin`` reads ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME when the
flags are omitted.
"""
import argparse
import logging
import os
import sys

from sqlalchemy.orm import Session

from admin_gateway.core.identity import IdentityError, IdentityProvider, UserNotFoundError
from admin_gateway.db.documents import utcnow
from admin_gateway.db.init_db import init_db
from admin_gateway.db.session import SessionLocal
from admin_gateway.models.user import USER_ACTIVE, User

logger = logging.getLogger("admin_gateway.cli")

ADMIN_CLAIMS = {"isAdmin": True}


def _promote(db: Session, identity: IdentityProvider, uid: str, display_name: str | None) -> User:
    account = identity.set_custom_user_claims(uid, ADMIN_CLAIMS)
    user = db.get(User, uid)
    if user is None:
        user = User(
            uid=uid,
            email=account.email,
            display_name=display_name or account.display_name or "",
            status=USER_ACTIVE,
            total_courses_enrolled=0,
        )
        db.add(user)
    user.is_admin = True
    user.updated_at = utcnow()
    return user


def create_admin(db: Session, email: str, password: str, display_name: str = "Administrator") -> User:
    """Create an admin account, or promote the existing account for ``email``."""
    identity = IdentityProvider(db)
    try:
        account = identity.get_user_by_email(email)
        logger.info("account %s already exists, promoting", account.uid)
    except UserNotFoundError:
        account = identity.create_user(email, password, display_name=display_name)
    user = _promote(db, identity, account.uid, display_name)
    db.commit()
    return user


def grant_admin(db: Session, email: str) -> User:
    identity = IdentityProvider(db)
    account = identity.get_user_by_email(email)
    user = _promote(db, identity, account.uid, None)
    db.commit()
    return user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="admin-gateway")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create database tables")

    p = sub.add_parser("create-admin", help="create (or promote) an admin account")
    p.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))
    p.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    p.add_argument("--name", default=os.getenv("ADMIN_NAME", "Administrator"))

    p = sub.add_parser("grant-admin", help="give an existing account admin rights")
    p.add_argument("--email", required=True)

    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    init_db()
    if args.command == "init-db":
        logger.info("tables created")
        return 0

    if args.command == "create-admin" and not (args.email and args.password):
        logger.error("--email and --password (or ADMIN_EMAIL / ADMIN_PASSWORD) are required")
        return 2

    db = SessionLocal()
    try:
        if args.command == "create-admin":
            user = create_admin(db, args.email, args.password, args.name)
        else:
            user = grant_admin(db, args.email)
        logger.info("admin ready: uid=%s email=%s", user.uid, user.email)
    except IdentityError as exc:
        db.rollback()
        logger.error("%s: %s", exc.code, exc.message)
        return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
