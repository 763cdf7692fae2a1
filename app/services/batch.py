"""Batch issuance and bulk regeneration of tickets."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from app.errors import StoreError, ValidationError
from app.services.archive import archive_entry_name
from app.services.pipeline import IssuedTicket, TicketPipeline
from app.stores.interfaces import TicketRecord, TicketStore

logger = logging.getLogger(__name__)

# Hard limit on tickets per request; not configurable
MAX_BATCH_SIZE = 100


@dataclass
class IssuedBatch:
    tickets: list[IssuedTicket] = field(default_factory=list)
    persistence_error: Optional[StoreError] = None

    @property
    def persisted(self) -> bool:
        return self.persistence_error is None

    @property
    def codes(self) -> list[str]:
        return [t.code for t in self.tickets]

    def __len__(self) -> int:
        return len(self.tickets)


def validate_batch_size(n) -> int:
    """Return ``n`` if it is an integer in [1, MAX_BATCH_SIZE], else raise ValidationError."""
    if isinstance(n, bool) or not isinstance(n, int) or not 1 <= n <= MAX_BATCH_SIZE:
        raise ValidationError(f"n must be an integer between 1 and {MAX_BATCH_SIZE}")
    return n


def issue_batch(n, store: TicketStore, pipeline: TicketPipeline) -> IssuedBatch:
    """
    Issue ``n`` new tickets, replacing every record in the store.

    Order matters: validate, check the template, wipe the store, build all
    artifacts in memory, then write all codes in one batch. A failure while
    building aborts the whole batch. A failure while writing is logged and
    attached to the result, but the built artifacts are still returned.
    """
    n = validate_batch_size(n)
    pipeline.ensure_template()

    deleted = store.clear()
    logger.info("Cleared %d ticket record(s) before issuing %d", deleted, n)

    batch = IssuedBatch()
    for _ in range(n):
        batch.tickets.append(pipeline.issue_new())

    try:
        store.batch_insert(batch.codes)
    except StoreError as e:
        logger.warning(
            "Issued %d ticket(s) but could not save them; the store is now empty "
            "and does not match the delivered artifacts: %s",
            n, e,
        )
        batch.persistence_error = e

    return batch


def iter_stored_artifacts(
    records: Iterable[TicketRecord], pipeline: TicketPipeline
) -> Iterator[tuple[str, bytes]]:
    """Regenerate stored tickets as ``(entry_name, png)``, skipping any that fail."""
    for record in records:
        try:
            artifact = pipeline.regenerate(record.code)
        except Exception:
            logger.exception("Error adding ticket %s to archive, skipping", record.code)
            continue
        yield archive_entry_name(record.code), artifact
