"""Housing Forecast — Snapshot Read Repository."""

from datetime import date
from typing import List, Optional

from sqlmodel import Session, select

from forecast.models.snapshot_models import Snapshot


class SnapshotRepository:
    """Filtered reads over the snapshots table. Date ranges are inclusive."""

    def __init__(self, session: Session):
        self.session = session

    def _query(self):
        return select(Snapshot).order_by(Snapshot.date, Snapshot.location)  # type: ignore[arg-type]

    def get_all(self) -> List[Snapshot]:
        return list(self.session.exec(self._query()).all())

    def get_by_date(self, on_date: date) -> List[Snapshot]:
        query = self._query().where(Snapshot.date == on_date)
        return list(self.session.exec(query).all())

    def get_between_dates(self, start: date, end: date) -> List[Snapshot]:
        query = self._query().where(Snapshot.date >= start, Snapshot.date <= end)  # type: ignore[operator]
        return list(self.session.exec(query).all())

    def get_by_location(
        self, location: str, on_date: Optional[date] = None
    ) -> List[Snapshot]:
        query = self._query().where(Snapshot.location == location)
        if on_date is not None:
            query = query.where(Snapshot.date == on_date)
        return list(self.session.exec(query).all())

    def get_between_dates_at_location(
        self, start: date, end: date, location: str
    ) -> List[Snapshot]:
        query = self._query().where(
            Snapshot.date >= start,  # type: ignore[operator]
            Snapshot.date <= end,  # type: ignore[operator]
            Snapshot.location == location,
        )
        return list(self.session.exec(query).all())

    def get_locations(self) -> List[str]:
        query = (
            select(Snapshot.location)
            .where(Snapshot.location.is_not(None))  # type: ignore[union-attr]
            .distinct()
            .order_by(Snapshot.location)  # type: ignore[arg-type]
        )
        return list(self.session.exec(query).all())
