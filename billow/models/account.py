"""
SQLAlchemy model for user accounts.
"""
from sqlalchemy import Column, Integer, String

from billow.database import Base


class AccountModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)  # bcrypt hash
