from admin_gateway.db.base import Base
from admin_gateway.db.session import engine


def init_db(bind=None) -> None:
    Base.metadata.create_all(bind=bind or engine)
