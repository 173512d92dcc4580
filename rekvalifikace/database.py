import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# .env лежит рядом с этим файлом, чтобы запуск из другого каталога его находил
load_dotenv(Path(__file__).with_name(".env"))

Base = declarative_base()


def resolve_database_url(env_value: str | None) -> str:
    """URL хранилища из окружения; фолбэк на локальную SQLite."""
    if not env_value or not env_value.strip():
        db_path = Path(__file__).with_name("app.db")
        return f"sqlite:///{db_path}"
    return env_value.strip()


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


DATABASE_URL = resolve_database_url(os.getenv("DATABASE_URL"))
engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Создаёт таблицы и встроенные роли, если их ещё нет."""
    # модели должны быть импортированы до create_all
    from rekvalifikace.models import evaluation, student, subject, teacher, user  # noqa: F401
    from rekvalifikace.models.user import Role
    from rekvalifikace.utils.policy import BUILTIN_ROLES

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    factory = sessionmaker(autocommit=False, autoflush=False, bind=bind)
    with factory() as db:
        existing = {name for (name,) in db.query(Role.name).all()}
        missing = [name for name in BUILTIN_ROLES if name not in existing]
        for name in missing:
            db.add(Role(name=name))
        if missing:
            db.commit()
            logger.info("Seeded built-in roles: %s", ", ".join(missing))
