"""Housing Forecast — Reconciler.

Three-way diff between a freshly fetched collection and the stored rows of one
entity kind, and its transactional application:

  ToDelete  local, not yet deleted, key absent remotely   → deleted = today
  ToInsert  remote key with no local row                  → created = today
  ToUpdate  key on both sides, a tracked field differs    → copy tracked fields

Matching is by key through dict lookups. Rows already soft-deleted are still
matched (so they are never re-inserted) but are never updated or reactivated.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Set

from forecast.connectors.service_hub.client import FetchResult
from forecast.core.logging import get_logger
from forecast.store.record_store import RecordStore
from forecast.sync.entity_kinds import EntityKind

logger = get_logger("sync.reconciler")


@dataclass
class ReconcileDiff:
    """Disjoint insert / update / delete sets for one entity kind."""

    kind: EntityKind
    to_insert: List[Any] = field(default_factory=list)
    to_update: Dict[Any, Any] = field(default_factory=dict)
    to_delete: Set[Any] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not (self.to_insert or self.to_update or self.to_delete)


@dataclass
class ReconcileResult:
    kind: str
    inserted: int = 0
    updated: int = 0
    deleted: int = 0
    deletes_suppressed: bool = False

    @property
    def writes(self) -> int:
        return self.inserted + self.updated + self.deleted


def compute_diff(
    kind: EntityKind,
    remote: Iterable[Any],
    local: Iterable[Any],
    allow_deletes: bool = True,
) -> ReconcileDiff:
    """Classify remote records against local rows by key."""
    diff = ReconcileDiff(kind=kind)
    local_by_key = {kind.key_of(row): row for row in local}

    remote_by_key: Dict[Any, Any] = {}
    for record in remote:
        key = kind.key_of(record)
        if key in remote_by_key:
            logger.warning(
                f"Duplicate {kind.name} key {key} in remote collection; keeping the last one",
                extra={"entity_kind": kind.name},
            )
        remote_by_key[key] = record

    for key, record in remote_by_key.items():
        existing = local_by_key.get(key)
        if existing is None:
            diff.to_insert.append(record)
        elif existing.deleted is None and kind.differs(record, existing):
            diff.to_update[key] = record

    if allow_deletes:
        for key, existing in local_by_key.items():
            if existing.deleted is None and key not in remote_by_key:
                diff.to_delete.add(key)

    return diff


def apply_diff(store: RecordStore, diff: ReconcileDiff, today: date) -> ReconcileResult:
    """Apply deletions and updates in place, then append inserts, then commit once."""
    kind = diff.kind
    result = ReconcileResult(kind=kind.name)
    if diff.is_empty:
        return result

    for row in store.all(kind.model):
        key = kind.key_of(row)
        if key in diff.to_delete:
            row.deleted = today
            store.update(row)
            result.deleted += 1
        elif key in diff.to_update:
            kind.copy_tracked(diff.to_update[key], row)
            store.update(row)
            result.updated += 1

    for record in diff.to_insert:
        record.created = today
        record.deleted = None
        store.add(record)
        result.inserted += 1

    store.commit()
    return result


def reconcile(
    store: RecordStore,
    kind: EntityKind,
    fetched: FetchResult,
    today: date,
    delete_on_fetch_failure: bool = False,
) -> ReconcileResult:
    """Fetch-diff-apply for one entity kind against the store."""
    remote = fetched.records
    allow_deletes = True

    if not fetched.ok:
        if delete_on_fetch_failure:
            # Legacy behaviour: an unreachable hub reads as an empty collection.
            remote = []
        else:
            allow_deletes = False
            logger.warning(
                f"Fetch for {kind.name} failed ({fetched.reason}); skipping deletions",
                extra={"entity_kind": kind.name},
            )

    diff = compute_diff(kind, remote, store.all(kind.model), allow_deletes=allow_deletes)
    result = apply_diff(store, diff, today)
    result.deletes_suppressed = not allow_deletes

    logger.info(
        f"Reconciled {kind.name}: +{result.inserted} ~{result.updated} -{result.deleted}",
        extra={
            "entity_kind": kind.name,
            "inserted": result.inserted,
            "updated": result.updated,
            "deleted": result.deleted,
        },
    )
    return result
