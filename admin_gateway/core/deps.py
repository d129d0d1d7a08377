from fastapi import Depends
from sqlalchemy.orm import Session

from admin_gateway.core.identity import IdentityProvider
from admin_gateway.db.session import SessionLocal


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_identity(db: Session = Depends(get_db)) -> IdentityProvider:
    return IdentityProvider(db)
