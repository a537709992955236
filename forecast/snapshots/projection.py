"""Housing Forecast — Snapshot Projection.

Summarises rooms and users active on a given day into one Snapshot per
location. Snapshots are append-only: a (date, location) pair that already has
a snapshot is left alone.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Sequence

from sqlmodel import Session, select

from forecast.core.logging import get_logger
from forecast.models.housing_models import Room, User
from forecast.models.snapshot_models import Snapshot
from forecast.snapshots.repository import SnapshotRepository
from forecast.store.record_store import RecordStore

logger = get_logger("snapshots.projection")


def _active_on(row, on_date: date) -> bool:
    """Created on/before the day and not yet soft-deleted by it."""
    if row.created is not None and row.created > on_date:
        return False
    return row.deleted is None or row.deleted > on_date


def build_snapshots(
    rooms: Sequence[Room], users: Sequence[User], on_date: date
) -> List[Snapshot]:
    """Compute (without persisting) one snapshot per known location."""
    occupancy: Dict[str, int] = defaultdict(int)
    user_counts: Dict[str, int] = defaultdict(int)

    for room in rooms:
        if room.location and _active_on(room, on_date):
            occupancy[room.location] += room.occupancy
    for user in users:
        if user.location and _active_on(user, on_date):
            user_counts[user.location] += 1

    return [
        Snapshot(
            date=on_date,
            location=location,
            room_occupancy_count=occupancy.get(location, 0),
            user_count=user_counts.get(location, 0),
        )
        for location in sorted(set(occupancy) | set(user_counts))
    ]


def take_snapshots(session: Session, on_date: Optional[date] = None) -> List[Snapshot]:
    """Build and append the snapshots for ``on_date`` (default: today)."""
    on_date = on_date or date.today()
    store = RecordStore(session)
    repo = SnapshotRepository(session)

    existing = {s.location for s in repo.get_by_date(on_date)}
    candidates = build_snapshots(
        session.exec(select(Room)).all(), session.exec(select(User)).all(), on_date
    )

    created: List[Snapshot] = []
    for snap in candidates:
        if snap.location in existing:
            continue
        if not snap.is_valid():
            logger.warning(f"Skipping invalid snapshot for {snap.location!r}")
            continue
        created.append(snap)

    if created:
        store.add_all(created)
        store.commit()
    logger.info(
        f"Snapshots for {on_date.isoformat()}: {len(created)} new, "
        f"{len(candidates) - len(created)} skipped"
    )
    return created
