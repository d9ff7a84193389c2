"""
SQLAlchemy model for receipt persistence.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text

from billow.database import Base


class ReceiptModel(Base):
    __tablename__ = "receipts"
    __table_args__ = (
        Index("ix_receipts_user_created", "user_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    filename = Column(String, nullable=False)
    text = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)
