from __future__ import annotations
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings
from .logging_config import get_logger

log = get_logger(__name__)

DATABASE_URL = settings.database_url or "sqlite:///./stability.db"

if DATABASE_URL.startswith("sqlite"):
	_connect_args = {"check_same_thread": False, "timeout": settings.store_timeout_seconds}
else:
	_connect_args = {"connect_timeout": settings.store_timeout_seconds}

engine = create_engine(DATABASE_URL, connect_args=_connect_args, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()


# Best-effort lightweight migrations for development (SQLite-friendly)
def ensure_schema(bind=None) -> None:
	bind = bind or engine
	try:
		inspector = inspect(bind)
		tables = set(inspector.get_table_names())
	except Exception:
		log.warning("Could not inspect database schema", exc_info=True)
		return
	if "survey_responses" in tables:
		cols = {c["name"] for c in inspector.get_columns("survey_responses")}
		with bind.begin() as conn:
			for name, ddl in (
				("first_name", "VARCHAR(128)"),
				("last_name", "VARCHAR(128)"),
				("email", "VARCHAR(256)"),
			):
				if name not in cols:
					log.info("Adding missing column survey_responses.%s", name)
					conn.exec_driver_sql(f"ALTER TABLE survey_responses ADD COLUMN {name} {ddl}")
