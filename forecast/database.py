"""Housing Forecast — Database Engine & Session Factories.

One engine is shared by two kinds of callers:
  • FastAPI routes, through the ``get_session`` dependency
  • the poll thread, through ``PollSession`` (one session per cycle)
"""

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, Session, create_engine

from forecast.config import settings
from forecast.core.logging import get_logger

# Table models must be imported before create_all() sees the metadata
from forecast.models import housing_models, snapshot_models  # noqa: F401

logger = get_logger("database")

db_url = make_url(settings.effective_database_url)
is_sqlite = db_url.get_backend_name() == "sqlite"


def masked_url() -> str:
    """Connection URL with the password hidden, for logs and /debug/db."""
    return db_url.render_as_string(hide_password=True)


def _engine_kwargs() -> dict:
    if is_sqlite:
        # Routes and the poll thread use connections from different threads
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 5, "pool_recycle": 300}


engine = create_engine(db_url, echo=False, **_engine_kwargs())
logger.info(f"⚙️  Database engine created ({db_url.get_backend_name()}): {masked_url()}")

# Each cycle re-selects every table it touches, so committed rows need no reload.
PollSession = sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def check_connection() -> bool:
    """Run SELECT 1; False (logged) if the database is unreachable."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"❌ Database connection check failed: {e}")
        return False
    return True


def init_db() -> None:
    """Create any missing tables."""
    SQLModel.metadata.create_all(engine)
    logger.info("✅ Database tables ready")


def get_session():
    """Dependency — yields a DB session."""
    with Session(engine) as session:
        yield session
