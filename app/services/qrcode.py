import qrcode
from dataclasses import dataclass
from qrcode.exceptions import DataOverflowError
from PIL import Image

from app.config import get_settings
from app.errors import EncodingError

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


@dataclass(frozen=True)
class QrOptions:
    error_correction: str = "M"
    width: int = 500  # final square size in pixels
    border: int = 1  # quiet zone in modules
    box_size: int = 10  # native module size before scaling


DEFAULT_QR_OPTIONS = QrOptions()


def qr_options_from_settings() -> QrOptions:
    settings = get_settings()
    return QrOptions(
        error_correction=settings.qr_error_correction.upper(),
        width=settings.qr_width,
        border=settings.qr_border,
    )


def encode_qr(payload: str, options: QrOptions = DEFAULT_QR_OPTIONS) -> Image.Image:
    """
    Encode a ticket code as a square QR image of exactly ``options.width`` pixels.

    The symbol is rendered at its native module size and then scaled with
    nearest-neighbour resampling, so the same payload always yields the same
    pixels. Raises EncodingError for an empty payload or one that does not fit
    in the largest symbol at the chosen error-correction level.
    """
    if not payload:
        raise EncodingError("Cannot encode an empty ticket code")

    level = ERROR_CORRECTION_LEVELS.get(options.error_correction)
    if level is None:
        raise EncodingError(f"Unknown error-correction level: {options.error_correction}")

    qr = qrcode.QRCode(
        version=None,
        error_correction=level,
        box_size=options.box_size,
        border=options.border,
    )
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise EncodingError(f"Ticket code too long to encode: {e}") from e

    img = qr.make_image(fill_color="black", back_color="white")
    if hasattr(img, "get_image"):
        img = img.get_image()

    img = img.convert("RGB")
    if img.size != (options.width, options.width):
        img = img.resize((options.width, options.width), Image.Resampling.NEAREST)
    return img
