"""Ticket store interface (repository pattern).

Stores must be swappable and return TicketRecord values. Callers sequence
``clear()`` and ``batch_insert()`` themselves; the two are not one transaction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional


@dataclass(frozen=True)
class TicketRecord:
    id: str
    code: str
    issued_at: datetime
    created_at: str  # ISO-8601, written alongside issued_at

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "date": self.issued_at.isoformat(),
            "createdAt": self.created_at,
        }


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def clear(self) -> int:
        """Delete every record and return how many were removed."""
        ...

    @abstractmethod
    def batch_insert(self, codes: Iterable[str]) -> list[TicketRecord]:
        """Insert one record per code in a single atomic write."""
        ...

    @abstractmethod
    def list_all(self) -> list[TicketRecord]:
        """Return all records ordered by issue date descending."""
        ...

    @abstractmethod
    def find_by_code(self, code: str) -> Optional[TicketRecord]:
        """Return the first record whose code matches exactly, or None."""
        ...
