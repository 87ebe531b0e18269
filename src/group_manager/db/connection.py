from typing import Optional

from configmanager import Config
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from group_manager.config import get_config
from group_manager.types.db_session import DbSessionFactory


def make_db_url(
    driver: str, config: Config, application_name: Optional[str] = None
) -> str:
    """
    Returns the database connection string from configuration values.

    :param driver: Driver name. Ex: psycopg2. Ignored if the configuration
                   provides a full URL.
    :param config: Configuration.
    :param application_name: Application name. Only used for PostgreSQL URLs
                             assembled from the individual settings.
    :returns: The database connection string.
    """

    url = config.database.url.value
    if url:
        return url

    host = config.database.host.value
    port = config.database.port.value
    user = config.database.user.value
    password = config.database.password.value
    database = config.database.database.value

    connection_string = f"postgresql+{driver}://{user}:"

    if password is not None:
        connection_string += f"{password}"

    connection_string += "@"

    if host is not None:
        connection_string += f"{host}:{port}"

    connection_string += f"/{database}"

    if application_name:
        connection_string += f"?application_name={application_name}"

    return connection_string


def make_engine(
    config: Optional[Config] = None,
    echo: bool = False,
    application_name: Optional[str] = None,
) -> Engine:
    if config is None:
        config = get_config()

    db_url = make_db_url(
        driver="psycopg2", config=config, application_name=application_name
    )

    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        # An in-memory SQLite database only lives as long as its connection,
        # share a single one across sessions.
        if url.database in (None, "", ":memory:"):
            return create_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_engine(url, echo=echo)

    return create_engine(
        url,
        echo=echo,
        pool_size=config.database.pool_size.value,
    )


def make_session_factory(engine: Engine) -> DbSessionFactory:
    return sessionmaker(engine, expire_on_commit=False)
