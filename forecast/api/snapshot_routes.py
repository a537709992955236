"""Housing Forecast — Snapshot API Routes."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from forecast.database import get_session
from forecast.models.snapshot_models import Snapshot
from forecast.snapshots.projection import take_snapshots
from forecast.snapshots.repository import SnapshotRepository
from forecast.store.record_store import PersistenceError
from forecast.core.logging import get_logger

logger = get_logger("api.snapshots")

router = APIRouter(prefix="/snapshots", tags=["Snapshots"])


def _serialize(snapshots: List[Snapshot]) -> dict:
    return {
        "status": "success",
        "count": len(snapshots),
        "results": [s.model_dump(mode="json") for s in snapshots],
    }


def _check_range(
    on_date: Optional[date], start: Optional[date], end: Optional[date]
) -> None:
    if on_date is not None and (start is not None or end is not None):
        raise HTTPException(status_code=400, detail="use either date or start/end, not both")
    if (start is None) != (end is None):
        raise HTTPException(status_code=400, detail="start and end must be given together")
    if start is not None and end is not None and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")


@router.get("")
async def list_snapshots(
    on_date: Optional[date] = Query(None, alias="date", description="Exact day (YYYY-MM-DD)"),
    start: Optional[date] = Query(None, description="Range start (YYYY-MM-DD)"),
    end: Optional[date] = Query(None, description="Range end (YYYY-MM-DD)"),
    session: Session = Depends(get_session),
):
    """All snapshots, optionally restricted to one day or a date range."""
    _check_range(on_date, start, end)
    repo = SnapshotRepository(session)
    if on_date is not None:
        return _serialize(repo.get_by_date(on_date))
    if start is not None and end is not None:
        return _serialize(repo.get_between_dates(start, end))
    return _serialize(repo.get_all())


@router.get("/locations")
async def list_locations(session: Session = Depends(get_session)):
    """Distinct locations that have at least one snapshot."""
    locations = SnapshotRepository(session).get_locations()
    return {"status": "success", "count": len(locations), "locations": locations}


@router.get("/locations/{location}")
async def snapshots_for_location(
    location: str,
    on_date: Optional[date] = Query(None, alias="date", description="Exact day (YYYY-MM-DD)"),
    start: Optional[date] = Query(None, description="Range start (YYYY-MM-DD)"),
    end: Optional[date] = Query(None, description="Range end (YYYY-MM-DD)"),
    session: Session = Depends(get_session),
):
    """Snapshots for one location, optionally on a day or within a range."""
    _check_range(on_date, start, end)
    repo = SnapshotRepository(session)
    if start is not None and end is not None:
        return _serialize(repo.get_between_dates_at_location(start, end, location))
    return _serialize(repo.get_by_location(location, on_date=on_date))


@router.post("/run")
async def run_snapshots(
    on_date: Optional[date] = Query(None, alias="date", description="Day to snapshot (default: today)"),
    session: Session = Depends(get_session),
):
    """Project and append snapshots on demand."""
    try:
        created = take_snapshots(session, on_date)
    except PersistenceError as e:
        logger.error(f"Snapshot projection failed: {e}")
        raise HTTPException(status_code=500, detail=f"Snapshot projection failed: {str(e)}")
    return _serialize(created)
