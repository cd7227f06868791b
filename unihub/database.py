"""
Database engine, session factory and storage primitives.
"""
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Union

from sqlalchemy import create_engine, event, insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings

settings = get_settings()

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(settings.database_url, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ships with foreign key enforcement off."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a request-scoped session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit on clean exit, roll back on any exception."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def insert_if_absent(
    db: Session,
    model,
    values: Union[dict, List[dict]],
    index_elements: Iterable[str],
) -> int:
    """
    Insert rows, silently skipping those that collide with a unique key.

    Uses the dialect's native conflict clause so two concurrent callers can
    never both create the same row. Returns the number of rows inserted.
    """
    rows = [values] if isinstance(values, dict) else list(values)
    if not rows:
        return 0

    dialect = db.get_bind().dialect.name
    index_elements = list(index_elements)

    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as sqlite_insert
        stmt = sqlite_insert(model).values(rows).on_conflict_do_nothing(index_elements=index_elements)
        return db.execute(stmt).rowcount
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as pg_insert
        stmt = pg_insert(model).values(rows).on_conflict_do_nothing(index_elements=index_elements)
        return db.execute(stmt).rowcount
    if dialect in ("mysql", "mariadb"):
        stmt = insert(model).values(rows).prefix_with("IGNORE")
        return db.execute(stmt).rowcount

    inserted = 0
    for row in rows:
        try:
            with db.begin_nested():
                db.execute(insert(model).values(**row))
            inserted += 1
        except IntegrityError:
            continue
    return inserted
