"""In-memory ticket store, used by tests and local runs without a database."""

import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from app.stores.interfaces import TicketRecord, TicketStore


class InMemoryTicketStore(TicketStore):
    def __init__(self):
        self._records: list[TicketRecord] = []

    def clear(self) -> int:
        count = len(self._records)
        self._records = []
        return count

    def batch_insert(self, codes: Iterable[str]) -> list[TicketRecord]:
        now = datetime.now(timezone.utc)
        created = [
            TicketRecord(
                id=uuid.uuid4().hex,
                code=code,
                issued_at=now,
                created_at=now.isoformat(),
            )
            for code in codes
        ]
        self._records.extend(created)
        return created

    def list_all(self) -> list[TicketRecord]:
        return sorted(self._records, key=lambda r: r.issued_at, reverse=True)

    def find_by_code(self, code: str) -> Optional[TicketRecord]:
        for record in self._records:
            if record.code == code:
                return record
        return None
