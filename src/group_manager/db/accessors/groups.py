from decimal import Decimal
from typing import List

from sqlalchemy import and_, delete, exists, func, insert, or_, select
from sqlalchemy.sql import Select

from group_manager.db.models import GroupUserDb, UserDb
from group_manager.types.db_session import DbSession
from group_manager.types.reconciliation import UserCandidate


def make_promotion_candidates_query(group_id: int, min_balance: Decimal) -> Select:
    """
    Users with a balance of at least `min_balance` that are not members of the group.

    Anti-join: the membership table is left-joined on both the user and the group,
    users without a matching row are kept. NULL balances never match.
    """
    return (
        select(UserDb.id, UserDb.username, UserDb.balance.label("balance"))
        .outerjoin(
            GroupUserDb,
            and_(GroupUserDb.user_id == UserDb.id, GroupUserDb.group_id == group_id),
        )
        .where(UserDb.balance >= min_balance)
        .where(GroupUserDb.user_id.is_(None))
        .order_by(UserDb.id)
    )


def make_demotion_candidates_query(group_id: int, max_balance: Decimal) -> Select:
    """
    Members of the group whose balance is strictly below `max_balance` or unknown.
    """
    return (
        select(UserDb.id, UserDb.username, UserDb.balance.label("balance"))
        .join(GroupUserDb, GroupUserDb.user_id == UserDb.id)
        .where(GroupUserDb.group_id == group_id)
        .where(or_(UserDb.balance < max_balance, UserDb.balance.is_(None)))
        .order_by(UserDb.id)
    )


def _to_candidates(rows) -> List[UserCandidate]:
    return [
        UserCandidate(id=row.id, username=row.username, balance=row.balance)
        for row in rows
    ]


def get_promotion_candidates(
    session: DbSession, group_id: int, min_balance: Decimal
) -> List[UserCandidate]:
    select_stmt = make_promotion_candidates_query(
        group_id=group_id, min_balance=min_balance
    )
    return _to_candidates(session.execute(select_stmt).all())


def get_demotion_candidates(
    session: DbSession, group_id: int, max_balance: Decimal
) -> List[UserCandidate]:
    select_stmt = make_demotion_candidates_query(
        group_id=group_id, max_balance=max_balance
    )
    return _to_candidates(session.execute(select_stmt).all())


def is_group_member(session: DbSession, user_id: int, group_id: int) -> bool:
    exists_stmt = select(
        exists().where(
            (GroupUserDb.user_id == user_id) & (GroupUserDb.group_id == group_id)
        )
    )
    return bool(session.execute(exists_stmt).scalar())


def insert_group_member(session: DbSession, user_id: int, group_id: int) -> None:
    session.execute(insert(GroupUserDb).values(user_id=user_id, group_id=group_id))


def delete_group_member(session: DbSession, user_id: int, group_id: int) -> int:
    """
    Removes a user from a group.

    :return: The number of deleted rows, 0 if the user was not a member.
    """
    delete_stmt = delete(GroupUserDb).where(
        (GroupUserDb.user_id == user_id) & (GroupUserDb.group_id == group_id)
    )
    return session.execute(delete_stmt).rowcount


def count_group_members(session: DbSession, group_id: int) -> int:
    select_stmt = (
        select(func.count())
        .select_from(UserDb)
        .join(GroupUserDb, GroupUserDb.user_id == UserDb.id)
        .where(GroupUserDb.group_id == group_id)
    )
    return session.execute(select_stmt).scalar_one()
