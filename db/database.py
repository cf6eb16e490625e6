# db/database.py
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker, scoped_session

from models.submission import Base

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """Accept Heroku-style postgres:// URLs, which SQLAlchemy no longer does."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def engine_options(url: str, node_env: str = "development") -> dict:
    engine_args = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
    elif url.startswith("postgresql") and node_env == "production":
        engine_args["connect_args"] = {"sslmode": "require"}
    return engine_args


class Database:
    """
    Owns the engine (and its connection pool) plus the scoped session factory.
    Built once by create_app() and disposed at process exit.
    """

    def __init__(self, url: str, node_env: str = "development", echo: bool = False):
        self.url = normalize_url(url)
        self.engine = create_engine(self.url, echo=echo, **engine_options(self.url, node_env))
        self.SessionLocal = scoped_session(
            sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine)
        )

    @contextmanager
    def session(self):
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            self.SessionLocal.remove()

    def init_db(self):
        """Create all tables if not exist (basic version)."""
        Base.metadata.create_all(bind=self.engine)

    # -------------------------------------------------------------
    #           SAFE AUTO-MIGRATION (CREATE / PATCH)
    # -------------------------------------------------------------
    def auto_migrate(self):
        """
        Auto-creates the submissions table AND auto-adds missing columns.
        Does NOT delete data. Safe for local & lightweight usage.
        """
        # 1) Ensure table exists
        Base.metadata.create_all(bind=self.engine)

        # 2) Nullable columns that may be added after the fact
        optional_columns = {
            "city": "TEXT",
            "interested_course": "TEXT",
            "message": "TEXT",
            "email_sent": "BOOLEAN DEFAULT FALSE",
        }

        inspector = inspect(self.engine)
        existing_cols = [col["name"] for col in inspector.get_columns("form_submissions")]

        # 3) Add missing columns inside a transaction (engine.begin ensures commit)
        with self.engine.begin() as conn:
            for col_name, col_type in optional_columns.items():
                if col_name not in existing_cols:
                    logger.info("[AUTO-MIGRATE] Adding missing column: %s", col_name)
                    conn.execute(text(f"ALTER TABLE form_submissions ADD COLUMN {col_name} {col_type}"))

        logger.info("[AUTO-MIGRATE] Schema verified/updated.")

    def ping(self):
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self):
        self.SessionLocal.remove()
        self.engine.dispose()
