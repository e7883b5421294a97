"""QR service — QR artifact generation plus scan and view tracking."""

from datetime import datetime, timezone
from typing import Optional

import structlog

from smartdine.application.services.restaurant_service import public_menu_url
from smartdine.core.exceptions import EntityNotFoundException
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.schemas.qr import QRAnalytics, QRCodeOptions, QRCodeRead, ScanResult
from smartdine.infrastructure import qr_renderer

logger = structlog.get_logger(__name__)

DOWNLOAD_FORMATS = {
    "png": "image/png",
    "svg": "image/svg+xml",
}


def generate_qr_code(
    repo: RestaurantRepository,
    restaurant: Restaurant,
    options: Optional[QRCodeOptions] = None,
) -> QRCodeRead:
    """Render the public menu URL and store it; the scan counter is preserved."""
    options = options or QRCodeOptions()
    url = public_menu_url(restaurant.slug)
    code = qr_renderer.render_png_data_url(url, options)

    restaurant = repo.save_qr_code(restaurant, code, url, datetime.now(timezone.utc))
    logger.info("QR code generated", restaurant_id=restaurant.id, size=options.size)

    return QRCodeRead(
        qr_code=restaurant.qr_code,
        public_url=restaurant.qr_public_url,
        last_generated=restaurant.qr_last_generated,
        scan_count=restaurant.qr_scan_count,
        options=options,
    )


def get_qr_code(restaurant: Restaurant) -> QRCodeRead:
    if not restaurant.qr_code:
        raise EntityNotFoundException("QR code not found. Please generate one first.")
    return QRCodeRead(
        qr_code=restaurant.qr_code,
        public_url=restaurant.qr_public_url,
        last_generated=restaurant.qr_last_generated,
        scan_count=restaurant.qr_scan_count,
    )


def render_download(restaurant: Restaurant, fmt: str, size: int = 256) -> tuple[bytes, str, str]:
    """Return (body, content type, filename) for a QR download.

    ``fmt`` is case-insensitive; anything other than svg renders a PNG.
    """
    if not restaurant.qr_public_url:
        raise EntityNotFoundException("QR code not found. Please generate one first.")

    fmt = fmt.strip().lower()
    options = QRCodeOptions(size=size)
    if fmt == "svg":
        body = qr_renderer.render_svg(restaurant.qr_public_url, options)
    else:
        fmt = "png"
        body = qr_renderer.render_png(restaurant.qr_public_url, options)

    return body, DOWNLOAD_FORMATS[fmt], f"{restaurant.slug}-qr-code.{fmt}"


def record_scan(repo: RestaurantRepository, slug: str) -> ScanResult:
    """Count a scan of a published menu and return where to send the client.

    Draft and deactivated restaurants answer exactly like unknown slugs.
    """
    if not repo.increment_qr_scans(slug):
        raise EntityNotFoundException("Restaurant not found")
    logger.info("QR scan tracked", slug=slug)
    return ScanResult(redirect=public_menu_url(slug))


def record_view(repo: RestaurantRepository, restaurant: Restaurant) -> None:
    repo.increment_views(restaurant.id, datetime.now(timezone.utc))


def get_qr_analytics(restaurant: Restaurant) -> QRAnalytics:
    scans = restaurant.qr_scan_count or 0
    views = restaurant.total_menu_views or 0
    return QRAnalytics(
        total_scans=scans,
        total_menu_views=views,
        qr_to_view_ratio=round(views / scans, 2) if scans > 0 else 0,
        last_generated=restaurant.qr_last_generated,
        last_viewed=restaurant.last_viewed_at,
        is_generated=bool(restaurant.qr_code),
        public_url=restaurant.qr_public_url or public_menu_url(restaurant.slug),
    )
