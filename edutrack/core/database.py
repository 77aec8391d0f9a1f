from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from .errors import AppError
from .config import settings
import logging

logger = logging.getLogger(__name__)

database_url = settings.sqlalchemy_url


def _engine_options(url: str) -> dict:
    # SQLite connections are cheap and bound to their creating thread
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": 0,
        "pool_timeout": settings.db_pool_timeout,
        "pool_pre_ping": True,  # Verify connections before use
        "pool_recycle": 3600,  # Recycle connections every hour
    }


# Process-wide connection pool, created once on import and disposed on shutdown
engine = create_async_engine(
    database_url,
    echo=False,  # Set to True for SQL debugging
    **_engine_options(database_url),
)

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=True,
    autocommit=False
)

Base = declarative_base()


async def get_db():
    """Dependency to get database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except AppError:
            # Domain errors are answered by the exception handlers
            await session.rollback()
            raise
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_tables():
    """Create the teachers and students tables if they do not exist"""
    try:
        async with engine.begin() as conn:
            # Import all models to ensure they're registered
            from ..models import Teacher, Student  # noqa: F401

            logger.info("Creating database tables...")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise


async def drop_tables():
    """Drop all tables; used to reset throwaway databases"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped")


async def close_db():
    """Close database engine"""
    try:
        await engine.dispose()
        logger.info("Database engine disposed")
    except Exception as e:
        logger.error(f"Error disposing database engine: {e}")
