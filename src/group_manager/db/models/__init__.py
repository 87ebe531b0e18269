from .base import Base
from .users import GroupUserDb, UserDb

__all__ = ["Base", "GroupUserDb", "UserDb"]
