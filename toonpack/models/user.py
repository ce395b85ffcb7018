"""
User Model

Accounts mirrored from the identity provider.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String, Text

from toonpack.database import Base


class UserRole(str, Enum):
    """User role values."""
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    User model.

    Rows are upserted from the identity provider's ``open_id`` on each
    authenticated request; there is no local sign-up.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    open_id = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    login_method = Column(String(64), nullable=True)
    role = Column(String(20), default=UserRole.USER.value, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_signed_in = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.id} open_id={self.open_id}>"
