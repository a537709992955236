"""Housing Forecast — Poller API Routes."""

from fastapi import APIRouter, Depends

from forecast.scheduler.jobs import get_poller
from forecast.scheduler.poller import Poller, PollerStatus

router = APIRouter(prefix="/poller", tags=["Poller"])


@router.get("/status", response_model=PollerStatus)
async def poller_status(poller: Poller = Depends(get_poller)):
    """Lifecycle state and last-cycle outcome of the reconciliation poller."""
    return poller.status()
