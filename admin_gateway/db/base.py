from admin_gateway.db.base_class import Base

# import models so SQLAlchemy registers them on Base.metadata
from admin_gateway.models import auth_account, course, enrollment, user  # noqa: F401
