"""SQLAlchemy implementation of UnitOfWork."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dividend_tracker.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """Commits or rolls back the session shared by the repositories."""

    def __init__(self, db: Session):
        self._db = db

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.commit()
            return False
        self.rollback()
        if isinstance(exc, SQLAlchemyError):
            logger.error("Rolled back after storage failure: %s", exc)
            raise PersistenceError() from exc
        return False

    def commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Commit failed: %s", exc)
            raise PersistenceError() from exc

    def rollback(self) -> None:
        self._db.rollback()
