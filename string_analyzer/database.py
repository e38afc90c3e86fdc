from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv
import logging

load_dotenv()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# DATABASE URL HANDLING
# ------------------------------------------------------------------------------

DEFAULT_DATABASE_URL = "sqlite:///./strings.db"


def resolve_database_url(url=None) -> str:
    """Pick the database URL from the argument, the environment or the local default."""
    url = url or os.getenv("DATABASE_URL")

    if not url:
        logger.warning("DATABASE_URL not found in environment, using local SQLite file.")
        url = DEFAULT_DATABASE_URL

    # Some hosts hand out plain mysql:// URLs; SQLAlchemy expects the driver name
    if url.startswith("mysql://"):
        url = url.replace("mysql://", "mysql+pymysql://", 1)

    return url


# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
def make_engine(url=None, **kwargs):
    """Create a SQLAlchemy engine with per-backend connection options."""
    url = resolve_database_url(url)
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)   # prevents "server has gone away" issues
        kwargs.setdefault("pool_recycle", 280)     # helps with idle connection timeouts
    try:
        return create_engine(url, **kwargs)
    except Exception as e:
        logger.error(f"Failed to create SQLAlchemy engine: {e}")
        raise


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


Base = declarative_base()


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(engine):
    """Create database tables (runs once on startup)."""
    from string_analyzer.models import string_record  # noqa: F401 - registers the table
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully.")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
