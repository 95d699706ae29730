import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.techno.core.config import settings
from app.techno.core.db_timing import add_db_time, get_db_time_ms


def _on_before_execute(conn, cursor, statement, parameters, context, executemany):
    if get_db_time_ms() is None:
        return
    conn.info["techno_query_started"] = time.perf_counter()


def _on_after_execute(conn, cursor, statement, parameters, context, executemany):
    started = conn.info.pop("techno_query_started", None)
    if started is not None:
        add_db_time((time.perf_counter() - started) * 1000)


def build_engine(database_url: str) -> Engine:
    """Engine for ``database_url`` with per-request SQL timing attached.

    SQLite connections are shared across the threadpool FastAPI runs sync
    endpoints on; other backends get ``pool_pre_ping`` so stale pooled
    connections are replaced instead of failing the first query.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, future=True, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(database_url, future=True, pool_pre_ping=True)
    event.listen(engine, "before_cursor_execute", _on_before_execute)
    event.listen(engine, "after_cursor_execute", _on_after_execute)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = build_session_factory(engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
