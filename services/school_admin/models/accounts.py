# services/school_admin/models/accounts.py
from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.sql import func

from shared.auth import Role
from shared.db import Base


class UserAccount(Base):
    """Login identity. Teacher and student rows share their id with one of these."""

    __tablename__ = "user_accounts"

    id = Column(String(36), primary_key=True)
    username = Column(String(20), unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(Enum(Role, name="account_role"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
