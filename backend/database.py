"""
Database configuration and session management
Supports PostgreSQL for development and production, SQLite for local runs and tests
"""

import os
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from shared.utils import config, setup_logging

logger = setup_logging("database")

def build_database_url() -> str:
    """
    Build database URL from environment variables with fallback to DATABASE_URL
    Supports individual DB components for flexible configuration
    """
    # Priority 1: Use DATABASE_URL if provided
    database_url = config.get("database_url")
    if database_url:
        # Convert postgres:// to postgresql:// for SQLAlchemy compatibility
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        logger.info(f"Using DATABASE_URL from environment: {database_url.split('@')[-1]}")
        return database_url

    # Priority 2: Build from individual components
    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "5432")
    db_user = os.getenv("DB_USER", "postgres")
    db_password = os.getenv("DB_PASSWORD", "postgres")
    db_name = os.getenv("DB_NAME", "pitch_deck")
    db_sslmode = os.getenv("DB_SSLMODE", "prefer")

    database_url = f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
    if db_sslmode:
        database_url += f"?sslmode={db_sslmode}"

    logger.info(f"Built database URL from components: postgresql://{db_user}:***@{db_host}:{db_port}/{db_name}")
    return database_url

def create_database_engine(database_url: str | None = None):
    """Create SQLAlchemy engine with appropriate configuration"""
    database_url = database_url or build_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        logger.info("Using SQLite database engine")
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,
            pool_size=10,
            max_overflow=20,
            echo=False,
        )
        logger.info("Using PostgreSQL database engine with connection pooling")
    return engine

# Engines connect lazily; check_database_connection() connects on startup
engine = create_database_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for FastAPI to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database_connection(bind=None) -> bool:
    """Run a trivial query to verify the database is reachable"""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection test failed: {e}")
        return False


def init_database(bind=None):
    """Initialize database tables"""
    import models.database  # noqa: F401  registers ORM models on Base

    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise
