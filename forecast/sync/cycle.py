"""Housing Forecast — Poll Cycle.

One full pass: fetch users, rooms and batches from the service hub, derive
names and addresses, then reconcile every kind in RECONCILE_ORDER. Each kind
commits on its own; a persistence failure aborts the rest of the cycle.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List

from sqlmodel import Session

from forecast.config import settings
from forecast.connectors.service_hub.client import FetchResult, ServiceHubClient
from forecast.connectors.service_hub.transformer import HubRecords, transform_collections
from forecast.core.logging import get_logger
from forecast.store.record_store import RecordStore
from forecast.sync.entity_kinds import ADDRESS, BATCH, NAME, RECONCILE_ORDER, ROOM, USER
from forecast.sync.reconciler import ReconcileResult, reconcile

logger = get_logger("sync.cycle")


@dataclass
class CycleReport:
    cycle_date: date
    results: List[ReconcileResult] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def writes(self) -> int:
        return sum(r.writes for r in self.results)


class PollCycle:
    """Callable that runs one reconciliation cycle per invocation."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        client: ServiceHubClient,
        today: Callable[[], date] = date.today,
        delete_on_fetch_failure: bool | None = None,
    ):
        self.session_factory = session_factory
        self.client = client
        self.today = today
        self.delete_on_fetch_failure = (
            settings.delete_on_fetch_failure
            if delete_on_fetch_failure is None
            else delete_on_fetch_failure
        )

    def fetch(self) -> HubRecords:
        return transform_collections(
            users=self.client.fetch_users(),
            rooms=self.client.fetch_rooms(),
            batches=self.client.fetch_batches(),
        )

    def __call__(self) -> CycleReport:
        started = time.monotonic()
        report = CycleReport(cycle_date=self.today())
        records = self.fetch()
        fetched_by_kind: dict[str, FetchResult] = {
            ADDRESS.name: records.addresses,
            NAME.name: records.names,
            USER.name: records.users,
            ROOM.name: records.rooms,
            BATCH.name: records.batches,
        }

        with self.session_factory() as session:
            store = RecordStore(session)
            for kind in RECONCILE_ORDER:
                report.results.append(
                    reconcile(
                        store,
                        kind,
                        fetched_by_kind[kind.name],
                        report.cycle_date,
                        delete_on_fetch_failure=self.delete_on_fetch_failure,
                    )
                )

        report.duration_ms = round((time.monotonic() - started) * 1000, 1)
        logger.info(
            f"Poll cycle complete: {report.writes} writes",
            extra={"duration_ms": report.duration_ms},
        )
        return report
