from typing import Any, Dict, Optional, Set

from sqlalchemy import Table, func, inspect, select
from sqlalchemy.orm import declarative_base

from group_manager.types.db_session import DbSession


class AugmentedBase:
    __tablename__: str
    __table__: Table

    def to_dict(self, exclude: Optional[Set[str]] = None) -> Dict[str, Any]:
        exclude_set = exclude if exclude is not None else set()
        insp = inspect(self)

        # Keys are column names, which can differ from the attribute names.
        return {
            attr.columns[0].name: getattr(self, attr.key)
            for attr in insp.mapper.column_attrs
            if attr.columns[0].name not in exclude_set
            and attr.key not in insp.unloaded
        }

    @classmethod
    def count(cls, session: DbSession) -> int:
        return session.execute(
            select(func.count()).select_from(cls.__table__)
        ).scalar_one()


Base = declarative_base(cls=AugmentedBase)
