"""
Database engine and session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from evalhub.config import settings

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # SQLite connections are shared across FastAPI's threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Yield a database session for the duration of one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables"""
    import evalhub.models  # noqa: F401  registers the mappers on Base

    Base.metadata.create_all(bind=bind or engine)
