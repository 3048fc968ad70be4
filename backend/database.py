# backend/database.py
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from utils.errors import AppError, InternalError

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# Hosted PostgreSQL hands out postgres:// URLs, SQLAlchemy needs postgresql://
if SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

if "sqlite" in SQLALCHEMY_DATABASE_URL:
    connect_args = {"check_same_thread": False} # SQLite only
else:
    connect_args = {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Unit of work around a multi-statement mutation.

    Commits when the block finishes. On any exception the session is rolled
    back before the error propagates; store errors are re-raised as
    InternalError, errors from utils.errors keep their type.
    """
    try:
        yield db
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Transaction rolled back: %s", e)
        raise InternalError("Database error, changes were rolled back") from e
    except Exception:
        db.rollback()
        raise


def init_db(bind=None):
    # Import every model so that its table is registered on Base.metadata
    import models.users  # noqa: F401
    import models.catalog  # noqa: F401
    import models.cart  # noqa: F401
    import models.order  # noqa: F401
    import models.review  # noqa: F401
    import models.log  # noqa: F401
    from models.users import seed_roles

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = Session(bind=bind)
    try:
        seed_roles(db)
    finally:
        db.close()
