from decimal import Decimal

from forum_test_helpers import add_users, make_user

from group_manager.db.accessors.users import (
    count_users,
    count_users_with_balance_at_least,
    count_users_with_balance_below,
    get_balance_aggregates,
)
from group_manager.db.models import UserDb
from group_manager.types.db_session import DbSessionFactory


def test_user_balance_counts(session_factory: DbSessionFactory):
    add_users(
        session_factory,
        make_user(1, "alice", "500"),
        make_user(2, "bob", "100"),
        make_user(3, "carol", "99"),
        make_user(4, "dave", None),
    )

    with session_factory() as session:
        assert count_users(session) == 4
        assert count_users_with_balance_at_least(session, Decimal(500)) == 1
        # Strictly below, users without a balance included
        assert count_users_with_balance_below(session, Decimal(100)) == 2


def test_get_balance_aggregates(session_factory: DbSessionFactory):
    add_users(
        session_factory,
        make_user(1, "alice", "300"),
        make_user(2, "bob", "100"),
        make_user(3, "carol", None),
    )

    with session_factory() as session:
        average, highest = get_balance_aggregates(session)

    assert average == Decimal(200)
    assert highest == Decimal(300)


def test_get_balance_aggregates_no_balance(session_factory: DbSessionFactory):
    add_users(session_factory, make_user(1, "alice", None))

    with session_factory() as session:
        assert get_balance_aggregates(session) == (None, None)


def test_user_to_dict(session_factory: DbSessionFactory):
    add_users(session_factory, make_user(1, "alice", "12.5"))

    with session_factory() as session:
        user = session.get(UserDb, 1)
        assert user is not None
        assert user.to_dict() == {
            "id": 1,
            "username": "alice",
            "money": Decimal("12.50"),
        }
        assert user.to_dict(exclude={"money"}) == {"id": 1, "username": "alice"}
