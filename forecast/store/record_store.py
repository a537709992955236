"""Housing Forecast — Record Store.

Thin transactional facade over a SQLModel session. The poll cycle is its
only writer for reconciled tables.
"""

from typing import Any, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from forecast.core.logging import get_logger

logger = get_logger("store")

M = TypeVar("M", bound=SQLModel)


class PersistenceError(Exception):
    """Raised when a commit fails; the pending changes have been rolled back."""


class RecordStore:
    """Lookup, queue and commit rows for any reconciled table."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_key(self, model: Type[M], key: Any) -> Optional[M]:
        return self.session.get(model, key)

    def all(self, model: Type[M]) -> List[M]:
        """Every row, soft-deleted ones included."""
        return list(self.session.exec(select(model)).all())

    def all_active(self, model: Type[M]) -> List[M]:
        return list(
            self.session.exec(
                select(model).where(model.deleted.is_(None))  # type: ignore[attr-defined]
            ).all()
        )

    def add(self, record: SQLModel) -> None:
        self.session.add(record)

    def add_all(self, records: Iterable[SQLModel]) -> None:
        self.session.add_all(list(records))

    def update(self, record: SQLModel) -> None:
        # Attached rows are tracked by the session; add() re-attaches detached ones.
        self.session.add(record)

    def commit(self) -> None:
        """Flush every queued add/update in one transaction."""
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Commit failed, changes rolled back: {e}")
            raise PersistenceError(str(e)) from e
