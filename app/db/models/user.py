from sqlalchemy import Column, String
from app.db.base import Base


class User(Base):
    """
    Job seeker mirrored from the identity provider.

    The primary key is the provider's user id, so rows are created lazily
    on first authenticated request or by the user.created webhook.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    image = Column(String, nullable=False)
    resume = Column(String, default="", nullable=False)
