"""QR API routes — QR artifact management and public scan tracking."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response

from smartdine.application.services.qr_service import (
    generate_qr_code,
    get_qr_analytics,
    get_qr_code,
    record_scan,
    render_download,
)
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.schemas.qr import QRCodeOptions
from smartdine.interfaces.api.deps import get_owned_restaurant
from smartdine.interfaces.deps import get_restaurant_repository

router = APIRouter(prefix="/qr", tags=["QR"])


@router.get("/restaurants/{restaurant_id}")
def get_qr(restaurant: Restaurant = Depends(get_owned_restaurant)):
    return {"success": True, "data": {"qr_code": get_qr_code(restaurant)}}


@router.post("/restaurants/{restaurant_id}/generate")
def generate(
    options: Optional[QRCodeOptions] = Body(default=None),
    restaurant: Restaurant = Depends(get_owned_restaurant),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    qr_code = generate_qr_code(repo, restaurant, options)
    return {"success": True, "message": "QR code generated successfully", "data": {"qr_code": qr_code}}


@router.post("/restaurants/{restaurant_id}/regenerate")
def regenerate(
    options: Optional[QRCodeOptions] = Body(default=None),
    restaurant: Restaurant = Depends(get_owned_restaurant),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    """Overwrite the stored artifact with new options; scans keep counting."""
    qr_code = generate_qr_code(repo, restaurant, options)
    return {"success": True, "message": "QR code regenerated successfully", "data": {"qr_code": qr_code}}


@router.get("/restaurants/{restaurant_id}/download")
def download(
    format: str = Query(default="png", description="png or svg, any case; other values fall back to png"),
    size: int = Query(default=256, ge=64, le=2048),
    restaurant: Restaurant = Depends(get_owned_restaurant),
):
    body, content_type, filename = render_download(restaurant, format, size)
    return Response(
        content=body,
        media_type=content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/restaurants/{restaurant_id}/analytics")
def analytics(restaurant: Restaurant = Depends(get_owned_restaurant)):
    return {"success": True, "data": {"analytics": get_qr_analytics(restaurant)}}


@router.post("/scan/{slug}")
def scan(slug: str, repo: RestaurantRepository = Depends(get_restaurant_repository)):
    """Count a scan of a published menu; drafts answer like unknown slugs."""
    return {"success": True, "data": record_scan(repo, slug)}
