"""Pydantic schemas for QR code generation and tracking."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional

from smartdine.domain.schemas.restaurant import HEX_COLOR


class QRCodeOptions(BaseModel):
    error_correction: Literal["L", "M", "Q", "H"] = "M"
    size: int = Field(default=256, ge=64, le=2048)  # target width in px
    margin: int = Field(default=1, ge=0, le=10)  # quiet zone, in modules
    dark_color: str = Field(default="#000000", pattern=HEX_COLOR)
    light_color: str = Field(default="#FFFFFF", pattern=HEX_COLOR)


class QRCodeRead(BaseModel):
    qr_code: str
    public_url: str
    last_generated: Optional[datetime] = None
    scan_count: int = 0
    options: Optional[QRCodeOptions] = None


class ScanResult(BaseModel):
    redirect: str


class QRAnalytics(BaseModel):
    total_scans: int
    total_menu_views: int
    qr_to_view_ratio: float
    last_generated: Optional[datetime] = None
    last_viewed: Optional[datetime] = None
    is_generated: bool
    public_url: str
