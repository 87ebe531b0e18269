import logging
import os
import sys
from decimal import Decimal

import pytest
from configmanager import Config

import group_manager.config
from group_manager.db.connection import make_engine, make_session_factory
from group_manager.db.models import Base
from group_manager.jobs.reconciler import Reconciler
from group_manager.types.db_session import DbSessionFactory
from group_manager.types.thresholds import Thresholds

# Add the helpers to the PYTHONPATH.
sys.path.append(os.path.join(os.path.dirname(__file__), "helpers"))

from forum_test_helpers import BASIC_GROUP_ID, VIP_GROUP_ID  # noqa: E402


@pytest.fixture
def mock_config() -> Config:
    config: Config = Config(group_manager.config.get_defaults())

    # Tests run against an in-memory SQLite database instead of the forum database.
    config.database.url.value = "sqlite://"

    # We set the global variable directly instead of patching it, mocker.patch
    # does not work well with configmanager Config objects.
    group_manager.config.app_config = config
    return config


@pytest.fixture
def session_factory(mock_config: Config) -> DbSessionFactory:
    engine = make_engine(config=mock_config, echo=False)
    Base.metadata.create_all(engine)
    return make_session_factory(engine)


@pytest.fixture
def thresholds() -> Thresholds:
    return Thresholds(
        promotion_group_id=VIP_GROUP_ID,
        demotion_group_id=BASIC_GROUP_ID,
        promotion_amount=Decimal(500),
        demotion_amount=Decimal(100),
    )


@pytest.fixture
def reconciler(
    session_factory: DbSessionFactory, thresholds: Thresholds
) -> Reconciler:
    return Reconciler(session_factory=session_factory, thresholds=thresholds)


@pytest.fixture
def root_logger():
    """Restores the handlers of the root logger after `setup_logging` calls."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
