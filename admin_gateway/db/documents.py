"""
Document-store primitives on top of the ORM.

Each model is a collection keyed by a single string primary key. Updates and
counter adjustments are issued as single UPDATE statements so concurrent
requests never lose an increment.
"""
import secrets
import string
from datetime import datetime, timezone

from sqlalchemy import inspect, update
from sqlalchemy.orm import Session

_AUTO_ID_ALPHABET = string.ascii_letters + string.digits
AUTO_ID_LENGTH = 20


class DocumentNotFound(Exception):
    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"No document to update: {collection}/{doc_id}")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_document_id() -> str:
    return "".join(secrets.choice(_AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))


def _key_column(model):
    return inspect(model).primary_key[0]


def update_document(db: Session, model, doc_id: str, **values) -> None:
    """Apply a partial update and stamp updated_at; raise if nothing matched."""
    values.setdefault("updated_at", utcnow())
    result = db.execute(
        update(model)
        .where(_key_column(model) == doc_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise DocumentNotFound(model.__tablename__, doc_id)


def increment(
    db: Session, model, doc_id: str, field: str, delta: int, missing_ok: bool = False
) -> bool:
    """Atomically add ``delta`` to a numeric field. Returns False if skipped."""
    column = getattr(model, field)
    try:
        update_document(db, model, doc_id, **{field: column + delta})
    except DocumentNotFound:
        if not missing_ok:
            raise
        return False
    return True
