"""QR code rendering with the qrcode library (PNG via Pillow, SVG native)."""

import base64
from io import BytesIO

import qrcode
import qrcode.image.svg
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

from smartdine.domain.schemas.qr import QRCodeOptions

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def _build(data: str, options: QRCodeOptions) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION_LEVELS[options.error_correction],
        box_size=1,
        border=options.margin,
    )
    qr.add_data(data)
    qr.make(fit=True)

    # largest whole box size whose image fits in the requested width
    total_modules = qr.modules_count + 2 * options.margin
    qr.box_size = max(1, options.size // total_modules)
    return qr


def render_png(data: str, options: QRCodeOptions) -> bytes:
    qr = _build(data, options)
    img = qr.make_image(fill_color=options.dark_color, back_color=options.light_color)
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def render_png_data_url(data: str, options: QRCodeOptions) -> str:
    encoded = base64.b64encode(render_png(data, options)).decode()
    return f"data:image/png;base64,{encoded}"


def render_svg(data: str, options: QRCodeOptions) -> bytes:
    """Black-on-transparent path SVG; colors are not applied to vector output."""
    qr = _build(data, options)
    img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
    buffer = BytesIO()
    img.save(buffer)
    return buffer.getvalue()
