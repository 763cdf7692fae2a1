from pydantic import BaseModel
from typing import Any, Optional


# ============== Issuance Schemas ==============

class GenerateTicketsRequest(BaseModel):
    # Validated by the batch coordinator so bad values return 400, not 422
    n: Any = 1


# ============== Verification Schemas ==============

class TicketVerificationResponse(BaseModel):
    valid: bool
    code: Optional[str] = None
    id: Optional[str] = None
    date: Optional[str] = None
    createdAt: Optional[str] = None
    message: str
