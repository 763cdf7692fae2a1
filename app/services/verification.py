"""Ticket lookup for the scanner and the listing page."""

import logging

from app.errors import StoreError
from app.stores.interfaces import TicketRecord, TicketStore

logger = logging.getLogger(__name__)


def verify_ticket_code(code: str, store: TicketStore) -> dict:
    """
    Check whether a ticket code was issued.
    Store failures are reported as an invalid result rather than raised.
    """
    try:
        record = store.find_by_code(code)
    except StoreError as e:
        logger.exception("Error verifying ticket code %s", code)
        return {
            "valid": False,
            "code": code,
            "message": f"Verification failed: {e}",
        }

    if record is None:
        return {
            "valid": False,
            "code": code,
            "message": "Ticket not found",
        }

    return {
        "valid": True,
        "code": code,
        "id": record.id,
        "date": record.issued_at.isoformat(),
        "createdAt": record.created_at,
        "message": "Ticket valid",
    }


def list_tickets(store: TicketStore) -> list[TicketRecord]:
    """All issued tickets, newest first; empty if the store can't be read."""
    try:
        return store.list_all()
    except StoreError:
        logger.exception("Error loading tickets from store")
        return []
