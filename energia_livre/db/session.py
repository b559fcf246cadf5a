from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from energia_livre.core.config import settings


def _engine_kwargs() -> dict:
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}

    connect_args = {"connect_timeout": 10}
    if settings.DATABASE_SCHEMA:
        # Isola produção e desenvolvimento em schemas diferentes do mesmo banco
        connect_args["options"] = f"-c search_path={settings.DATABASE_SCHEMA},public"
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 5,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "connect_args": connect_args,
    }


def enable_sqlite_savepoints(sqlite_engine: Engine) -> None:
    """
    O driver pysqlite controla BEGIN por conta própria e quebra SAVEPOINT.
    Desliga esse controle e emite BEGIN explicitamente (receita da documentação do SQLAlchemy),
    para que begin_nested() funcione como no PostgreSQL.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs())
if settings.is_sqlite:
    enable_sqlite_savepoints(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
