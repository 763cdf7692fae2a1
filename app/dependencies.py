"""FastAPI dependencies for the ticket store and artifact pipeline."""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.services.pipeline import TicketPipeline
from app.services.qrcode import qr_options_from_settings
from app.stores.interfaces import TicketStore
from app.stores.sqlalchemy_store import SqlAlchemyTicketStore


def get_ticket_store(db: Session = Depends(get_db)) -> TicketStore:
    return SqlAlchemyTicketStore(db)


def get_ticket_pipeline() -> TicketPipeline:
    settings = get_settings()
    return TicketPipeline(settings.ticket_template_path, qr_options_from_settings())
