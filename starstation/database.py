# starstation/database.py
from __future__ import annotations

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session
from sqlalchemy.orm.exc import StaleDataError

from starstation.config import DATABASE_URL
from starstation.game.errors import ConcurrentUpdate, ConflictError, PersistenceError

logger = logging.getLogger(__name__)

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    future=True,
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, *, conflict: ConflictError | None = None) -> None:
    """
    Commit the unit of work, or roll it back and raise a GameError.

    - StaleDataError (version counter moved under us) -> ConcurrentUpdate
    - IntegrityError -> `conflict` when given, else PersistenceError
    - anything else from SQLAlchemy -> PersistenceError
    """
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning("Concurrent update detected; transaction rolled back")
        raise ConcurrentUpdate()
    except IntegrityError:
        db.rollback()
        if conflict is not None:
            raise conflict
        logger.exception("Integrity error on commit")
        raise PersistenceError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error on commit")
        raise PersistenceError()
