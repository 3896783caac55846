from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ridealert.config import settings

# Create SQLAlchemy engine against the managed Postgres
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG  # Enable SQL debug logging if DEBUG=true
)

# Session factory
SessionLocal = sessionmaker(
    autoflush=False,
    bind=engine
)

# Base class for declarative models
Base = declarative_base()

# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Create any missing tables (local development; the hosted schema is managed remotely)
def init_db():
    import ridealert.models  # noqa: F401  registers the models on Base
    Base.metadata.create_all(bind=engine)

# Cleanup engine
def cleanup_db():
    engine.dispose()
