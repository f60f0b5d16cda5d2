# =====================================================
# FILE: hrcontracts/core/database.py
# Database Connection and Session Management
# =====================================================

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool, QueuePool, StaticPool
from typing import Generator
import logging

from hrcontracts.core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

# Database engine configuration
engine_args = {
    "echo": settings.DB_ECHO,
}

if DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared across the threadpool FastAPI runs sync work in
    engine_args["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        # In-memory database must live on a single connection
        engine_args["poolclass"] = StaticPool
elif settings.DEBUG:
    # Use NullPool for development (no connection pooling)
    engine_args["pool_pre_ping"] = settings.DB_POOL_PRE_PING
    engine_args["poolclass"] = NullPool
else:
    # Use QueuePool for production
    engine_args["pool_pre_ping"] = settings.DB_POOL_PRE_PING
    engine_args["pool_size"] = settings.DB_POOL_SIZE
    engine_args["max_overflow"] = settings.DB_MAX_OVERFLOW
    engine_args["poolclass"] = QueuePool

# Create database engine
try:
    engine = create_engine(DATABASE_URL, **engine_args)
    logger.info(f" Database engine created for {engine.url.render_as_string(hide_password=True)}")
except Exception as e:
    logger.error(f" Failed to create database engine: {str(e)}")
    raise

# Create SessionLocal class
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

# Create Base class for models
Base = declarative_base()


# Dependency to get DB session
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f" Database session error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


def test_connection() -> bool:
    """
    Test database connection
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info(" Database connection test successful")
            return True
    except Exception as e:
        logger.error(f" Database connection test failed: {str(e)}")
        return False


def init_db():
    """
    Create all tables in the database
    """
    try:
        # Register every mapped class on Base.metadata
        import hrcontracts.models  # noqa: F401

        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info(" Database tables created successfully")
    except Exception as e:
        logger.error(f" Failed to create database tables: {str(e)}")
        raise


# Drop all tables (use with caution!)
def drop_all_tables():
    """
    Drop all tables from the database
    WARNING: This will delete all data!
    """
    try:
        Base.metadata.drop_all(bind=engine)
        logger.info(" All database tables dropped successfully")
    except Exception as e:
        logger.error(f" Failed to drop database tables: {str(e)}")
        raise
