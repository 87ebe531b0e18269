from decimal import Decimal
from typing import Optional

from sqlalchemy import DECIMAL, Column, ForeignKey, Integer, String

from .base import Base


class UserDb(Base):
    """
    Forum user. The table belongs to the forum, this job only reads it.
    """

    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True)
    username: str = Column(String(100), nullable=False, unique=True)
    # Wallet balance, stored in the "money" column by the forum extension.
    balance: Optional[Decimal] = Column("money", DECIMAL(15, 2), nullable=True)


class GroupUserDb(Base):
    """
    Group membership of a user. Only rows of the promotion group are ever
    inserted or deleted by this job.
    """

    __tablename__ = "group_user"

    user_id: int = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    group_id: int = Column(Integer, primary_key=True)
