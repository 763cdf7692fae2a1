from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone

from app.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class GalaTicket(Base):
    __tablename__ = "gala_tickets"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), nullable=False, index=True)  # not unique: codes may collide
    date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    created_at = Column(String(40), nullable=False)  # ISO-8601 copy of the issue time
