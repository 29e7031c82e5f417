from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from booksmart.core import config


def _connect_args(database_url: str) -> dict:
    # FastAPI runs sync routes in a threadpool; sqlite connections are per-thread by default.
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
    connect_args=_connect_args(config.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all_tables() -> None:
    # Importing the models registers their tables on Base.metadata.
    from booksmart.models import appointment, bus_booking, train_booking, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
