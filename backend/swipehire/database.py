import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL

logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_url(url: str) -> bool:
    return _is_sqlite(url) and (":memory:" in url or url.rstrip("/").endswith(":"))


def _engine_options(url: str) -> dict:
    options: dict = {}
    if _is_sqlite(url):
        # Screening requests run on the event loop, the rest in the threadpool.
        options["connect_args"] = {"check_same_thread": False}
    if _is_memory_url(url):
        # A second connection to :memory: would open a second, empty database.
        options["poolclass"] = StaticPool
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
    if not _is_sqlite(DATABASE_URL):
        return
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Request-scoped session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    # Model modules must be imported so their tables are on Base.metadata.
    from .models import application, candidate, chat, hr_profile, job, user  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Schema ready on %s", target.url.render_as_string(hide_password=True))
