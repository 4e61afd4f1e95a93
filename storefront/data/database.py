# storefront/data/database.py
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL


def make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        #sqlite + TestClient = inny watek niz ten ktory otworzyl polaczenie
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    """Dependency FastAPI: jedna sesja na request, zawsze zamykana."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session):
    """
    Jedna transakcja dla wielu zapisow.
    commit przy sukcesie, rollback przy dowolnym wyjatku (wyjatek leci dalej).
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
