import uuid

from sqlalchemy.orm import declarative_base

# Create declarative base
Base = declarative_base()


def new_id() -> str:
    """Chaves primárias são uuid4 em texto (estáveis entre export/import)."""
    return str(uuid.uuid4())

# Models are imported in energia_livre/models/__init__.py to avoid circular imports


def init_db():
    """Initialize database tables."""
    # Import engine here to avoid circular import
    from energia_livre.db.session import engine
    from sqlalchemy import text
    import time
    import logging

    # Import all models to register them with Base.metadata
    # This must happen before create_all()
    from energia_livre.models import (  # noqa: F401
        User,
        Comercializadora,
        PurchaseIntent,
        Proposal,
        UserPartnerAccess,
    )
    from energia_livre.core.config import settings

    logger = logging.getLogger(__name__)

    # Retry logic to wait for database to be ready
    max_retries = 30
    retry_delay = 2

    for attempt in range(max_retries):
        try:
            with engine.begin() as conn:
                conn.execute(text("SELECT 1"))
                if settings.DATABASE_SCHEMA and not settings.is_sqlite:
                    conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.DATABASE_SCHEMA}"'))
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created/updated successfully")
            return
        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(f"Database not ready, retrying in {retry_delay}s... (attempt {attempt + 1}/{max_retries})")
                time.sleep(retry_delay)
            else:
                logger.error(f"Failed to connect to database after {max_retries} attempts: {e}")
                raise
