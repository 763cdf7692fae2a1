"""Ticket artifact pipeline: code -> QR -> composited PNG."""

import logging
from dataclasses import dataclass
from pathlib import Path

from app.errors import ResourceMissingError
from app.services.compositor import composite, load_template
from app.services.qrcode import DEFAULT_QR_OPTIONS, QrOptions, encode_qr
from app.services.ticket_codes import generate_ticket_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedTicket:
    code: str
    artifact: bytes  # PNG

    @property
    def filename(self) -> str:
        return f"ticket_{self.code}.png"


class TicketPipeline:
    """Builds ticket artifacts from a fixed background template.

    Nothing rendered is cached. The template is read for every artifact, so
    ``regenerate(code)`` is a pure function of the code and the template file
    and can stand in for storing the images.
    """

    def __init__(self, template_path, qr_options: QrOptions = DEFAULT_QR_OPTIONS):
        self.template_path = Path(template_path)
        self.qr_options = qr_options

    def ensure_template(self) -> None:
        if not self.template_path.is_file():
            raise ResourceMissingError(str(self.template_path))

    def regenerate(self, code: str) -> bytes:
        """Rebuild the artifact for an already issued code."""
        qr_image = encode_qr(code, self.qr_options)
        background = load_template(self.template_path)
        return composite(background, qr_image)

    def issue_new(self) -> IssuedTicket:
        """Draw a fresh code and build its artifact."""
        code = generate_ticket_code()
        artifact = self.regenerate(code)
        logger.debug("Built ticket artifact for %s (%d bytes)", code, len(artifact))
        return IssuedTicket(code=code, artifact=artifact)
