from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy import func, or_, select

from group_manager.db.models import UserDb
from group_manager.types.db_session import DbSession


def count_users(session: DbSession) -> int:
    return UserDb.count(session)


def count_users_with_balance_at_least(
    session: DbSession, min_balance: Decimal
) -> int:
    """
    Counts users with a balance greater than or equal to `min_balance`.
    """
    select_stmt = select(func.count(UserDb.id)).where(UserDb.balance >= min_balance)
    return session.execute(select_stmt).scalar_one()


def count_users_with_balance_below(session: DbSession, max_balance: Decimal) -> int:
    """
    Counts users with a balance strictly below `max_balance`, users without
    a balance included.
    """
    select_stmt = select(func.count(UserDb.id)).where(
        or_(UserDb.balance < max_balance, UserDb.balance.is_(None))
    )
    return session.execute(select_stmt).scalar_one()


def get_balance_aggregates(
    session: DbSession,
) -> Tuple[Optional[Decimal], Optional[Decimal]]:
    """
    :return: The average and highest known balances. Both are None if no user
             has a balance.
    """
    select_stmt = select(func.avg(UserDb.balance), func.max(UserDb.balance)).where(
        UserDb.balance.is_not(None)
    )
    average, highest = session.execute(select_stmt).one()

    return (
        None if average is None else Decimal(str(average)),
        None if highest is None else Decimal(str(highest)),
    )
