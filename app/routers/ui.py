"""HTML pages: ticket listing, batch issuance form and door scanner."""

import logging
import re
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import get_settings
from app.dependencies import get_ticket_pipeline, get_ticket_store
from app.errors import ResourceMissingError, StoreError, TicketError
from app.rate_limit import issue_rate_limit, limiter
from app.services.batch import issue_batch
from app.services.pipeline import TicketPipeline
from app.services.verification import list_tickets
from app.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])

# Jinja2 template setup
templates_dir = Path(__file__).parent.parent / "templates"
jinja_env = Environment(
    loader=FileSystemLoader(str(templates_dir)),
    autoescape=select_autoescape(["html"]),
)


def _format_datetime(value):
    """Format a datetime as '18/10/2026 21:04'."""
    if not value:
        return ""
    return value.strftime("%d/%m/%Y %H:%M")

jinja_env.filters["fdatetime"] = _format_datetime

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_count(raw: str) -> int:
    """Parse the form count; a blank or non-numeric value means one ticket."""
    match = _LEADING_INT.match(raw or "")
    if not match:
        return 1
    return int(match.group(1))


def _redirect(key: str, message: str) -> RedirectResponse:
    return RedirectResponse(url=f"/?{key}={quote(message)}", status_code=303)


@router.get("/", response_class=HTMLResponse)
def index(
    error: str = Query(default=None),
    success: str = Query(default=None),
    store: TicketStore = Depends(get_ticket_store),
):
    """Listing of all issued tickets."""
    tickets = list_tickets(store)
    template = jinja_env.get_template("index.html")
    return HTMLResponse(template.render(
        tickets=tickets,
        count=len(tickets),
        error=error,
        success=success,
        org_name=get_settings().org_name,
    ))


@router.post("/generate")
@limiter.limit(issue_rate_limit)
def generate_from_form(
    request: Request,
    count: str = Form(default=""),
    store: TicketStore = Depends(get_ticket_store),
    pipeline: TicketPipeline = Depends(get_ticket_pipeline),
):
    """Issue a batch from the web form and go back to the listing."""
    n = _parse_count(count)
    try:
        batch = issue_batch(n, store, pipeline)
    except ResourceMissingError:
        return _redirect("error", "Ticket template not found")
    except StoreError as e:
        logger.error("Error clearing tickets before issuing: %s", e)
        return _redirect("error", "Could not delete existing tickets")
    except TicketError as e:
        logger.error("Error generating tickets: %s", e)
        return _redirect("error", str(e))

    if not batch.persisted:
        return _redirect("error", f"{n} ticket(s) generated but could not be saved: {batch.persistence_error}")
    return _redirect("success", f"{n} ticket(s) generated. You can now download them.")


@router.get("/scan", response_class=HTMLResponse)
def scan_page(
    error: str = Query(default=None),
    success: str = Query(default=None),
):
    """Door scanner page; checks codes against POST /verify."""
    template = jinja_env.get_template("scan.html")
    return HTMLResponse(template.render(
        error=error,
        success=success,
        org_name=get_settings().org_name,
    ))
