"""SQLAlchemy-backed ticket store."""

import logging
from datetime import timezone
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import StoreError
from app.models import GalaTicket, utcnow
from app.stores.interfaces import TicketRecord, TicketStore

logger = logging.getLogger(__name__)


def _to_record(row: GalaTicket) -> TicketRecord:
    issued_at = row.date
    # SQLite hands back naive datetimes; everything is written in UTC
    if issued_at.tzinfo is None:
        issued_at = issued_at.replace(tzinfo=timezone.utc)
    return TicketRecord(
        id=str(row.id),
        code=row.code,
        issued_at=issued_at,
        created_at=row.created_at or issued_at.isoformat(),
    )


class SqlAlchemyTicketStore(TicketStore):
    """Ticket store on the ``gala_tickets`` table."""

    def __init__(self, db: Session):
        self.db = db

    def clear(self) -> int:
        try:
            deleted = self.db.query(GalaTicket).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to delete existing tickets: {e}") from e
        if deleted:
            logger.info("Deleted %d ticket record(s)", deleted)
        else:
            logger.info("Ticket collection is already empty")
        return deleted

    def batch_insert(self, codes: Iterable[str]) -> list[TicketRecord]:
        now = utcnow()
        rows = [GalaTicket(code=code, date=now, created_at=now.isoformat()) for code in codes]
        try:
            self.db.add_all(rows)
            self.db.commit()
            for row in rows:
                self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to save tickets: {e}") from e
        logger.info("Saved %d ticket(s)", len(rows))
        return [_to_record(row) for row in rows]

    def list_all(self) -> list[TicketRecord]:
        try:
            rows = (
                self.db.query(GalaTicket)
                .order_by(GalaTicket.date.desc(), GalaTicket.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to list tickets: {e}") from e
        return [_to_record(row) for row in rows]

    def find_by_code(self, code: str) -> Optional[TicketRecord]:
        try:
            row = (
                self.db.query(GalaTicket)
                .filter(GalaTicket.code == code)
                .order_by(GalaTicket.id)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to look up ticket {code}: {e}") from e
        return _to_record(row) if row else None
