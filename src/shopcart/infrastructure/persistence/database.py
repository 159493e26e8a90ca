"""SQL engine setup for the relational cart backend."""

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for *database_url*.

    SQLite gets two adjustments:

    - connections are shared between threads of the same process, so the
      same-thread check is disabled
    - every transaction starts with ``BEGIN IMMEDIATE``, which takes the
      database write lock up front; a read-modify-write in one session is
      then serialized against every other connection and process, which
      is what ``SELECT ... FOR UPDATE`` gives on other databases
    """
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {"check_same_thread": False, "timeout": 30} if is_sqlite else {}
    engine = create_engine(
        database_url,
        echo=echo,  # set to True to debug SQL queries
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    if is_sqlite:
        _begin_immediate(engine)
    return engine


def _begin_immediate(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        # let SQLAlchemy emit BEGIN itself
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_and_tables(engine: Engine) -> None:
    """Create all tables defined in SQLModel metadata if they do not exist."""
    SQLModel.metadata.create_all(engine)
