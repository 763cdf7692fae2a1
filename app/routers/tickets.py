import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response, StreamingResponse

from app.config import get_settings
from app.dependencies import get_ticket_pipeline, get_ticket_store
from app.errors import TicketError
from app.rate_limit import issue_rate_limit, limiter
from app.schemas import GenerateTicketsRequest, TicketVerificationResponse
from app.services.archive import stream_archive
from app.services.batch import IssuedBatch, issue_batch, iter_stored_artifacts
from app.services.pipeline import TicketPipeline
from app.services.verification import list_tickets, verify_ticket_code
from app.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tickets"])


def _persisted_header(batch: IssuedBatch) -> dict:
    return {"X-Tickets-Persisted": "true" if batch.persisted else "false"}


def _png_response(code: str, artifact: bytes, headers: Optional[dict] = None) -> Response:
    all_headers = {"Content-Disposition": f'attachment; filename="ticket_{code}.png"'}
    if headers:
        all_headers.update(headers)
    return Response(content=artifact, media_type="image/png", headers=all_headers)


def _zip_response(entries, headers: Optional[dict] = None) -> StreamingResponse:
    filename = get_settings().archive_filename
    all_headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    if headers:
        all_headers.update(headers)
    return StreamingResponse(stream_archive(entries), media_type="application/zip", headers=all_headers)


@router.post("/generate-tickets")
@limiter.limit(issue_rate_limit)
def generate_tickets(
    request: Request,
    payload: Optional[GenerateTicketsRequest] = None,
    store: TicketStore = Depends(get_ticket_store),
    pipeline: TicketPipeline = Depends(get_ticket_pipeline),
):
    """Issue n tickets: a PNG for one ticket, a ZIP archive for several."""
    n = payload.n if payload else 1
    # JSON has no separate integer type; accept 3.0 as 3
    if isinstance(n, float) and n.is_integer():
        n = int(n)

    batch = issue_batch(n, store, pipeline)

    if len(batch) == 1:
        ticket = batch.tickets[0]
        return _png_response(ticket.code, ticket.artifact, _persisted_header(batch))

    entries = [(t.filename, t.artifact) for t in batch.tickets]
    return _zip_response(entries, _persisted_header(batch))


@router.get("/generate-ticket")
@limiter.limit(issue_rate_limit)
def generate_ticket(
    request: Request,
    store: TicketStore = Depends(get_ticket_store),
    pipeline: TicketPipeline = Depends(get_ticket_pipeline),
):
    """Issue a single ticket, replacing all stored tickets."""
    batch = issue_batch(1, store, pipeline)
    ticket = batch.tickets[0]
    return _png_response(ticket.code, ticket.artifact, _persisted_header(batch))


@router.get("/download-all")
def download_all(
    store: TicketStore = Depends(get_ticket_store),
    pipeline: TicketPipeline = Depends(get_ticket_pipeline),
):
    """Regenerate every stored ticket into one streamed ZIP archive."""
    records = list_tickets(store)
    if not records:
        return RedirectResponse(url="/?error=" + quote("No tickets to download"), status_code=303)

    logger.info("Streaming archive of %d ticket(s)", len(records))
    return _zip_response(iter_stored_artifacts(records, pipeline))


@router.get("/download/{code}")
def download_ticket(code: str, pipeline: TicketPipeline = Depends(get_ticket_pipeline)):
    """Regenerate and download one ticket by code."""
    try:
        artifact = pipeline.regenerate(code)
    except TicketError as e:
        logger.exception("Error downloading ticket %s", code)
        return PlainTextResponse(f"Error: {e}", status_code=500)
    return _png_response(code, artifact)


async def _read_verify_code(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        code = form.get("code")
    else:
        try:
            body = await request.json()
        except ValueError:
            body = None
        code = body.get("code") if isinstance(body, dict) else None
    return code.strip() if isinstance(code, str) else ""


@router.get("/verify/{code}", response_model=TicketVerificationResponse, response_model_exclude_none=True)
def verify_ticket(code: str, store: TicketStore = Depends(get_ticket_store)):
    """Check whether a ticket code was issued."""
    return verify_ticket_code(code, store)


@router.post("/verify", response_model=TicketVerificationResponse, response_model_exclude_none=True)
async def verify_ticket_post(request: Request, store: TicketStore = Depends(get_ticket_store)):
    """Check a ticket code sent by the scanner page as JSON or a form post."""
    code = await _read_verify_code(request)
    if not code:
        return JSONResponse(
            status_code=400,
            content={"valid": False, "message": "Ticket code required"},
        )
    return verify_ticket_code(code, store)
