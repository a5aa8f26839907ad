from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from explorafit.shared.config import settings

# Local SQLite DB under ./storage/ (created if missing) unless DATABASE_URL is set
ROOT = Path(__file__).resolve().parents[2]   # project root
STORAGE_DIR = ROOT / "storage"

def _db_url() -> str:
    url = (settings.DATABASE_URL or "").strip()
    if url:
        return url
    STORAGE_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(STORAGE_DIR / 'explorafit.db').as_posix()}"

DB_URL = _db_url()

connect_args = {}
if DB_URL.startswith("sqlite"):
    # writers queue on the busy timeout instead of failing with "database is locked"
    connect_args = {"check_same_thread": False, "timeout": settings.DB_BUSY_TIMEOUT_S}

engine = create_engine(DB_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

if DB_URL.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def _sqlite_pragmas(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

class Base(DeclarativeBase):
    pass

# FastAPI dep
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # import models so they register with Base.metadata
    from explorafit.auth import models as auth_models  # noqa: F401
    from explorafit.routes import models as routes_models  # noqa: F401
    from explorafit.shared import idem  # noqa: F401
    Base.metadata.create_all(bind=engine)
