"""Pydantic schemas for Restaurant domain."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional

Feature = Literal[
    "delivery", "takeout", "dine-in", "outdoor-seating", "wifi", "parking", "wheelchair-accessible",
]
Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: str = "US"


class Contact(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class DayHours(BaseModel):
    open: Optional[str] = None
    close: Optional[str] = None
    is_open: bool = True


class SocialMedia(BaseModel):
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None


class Theme(BaseModel):
    primary_color: str = Field(default="#dc2626", pattern=HEX_COLOR)
    secondary_color: str = Field(default="#fbbf24", pattern=HEX_COLOR)
    font_family: str = "Inter"
    layout: Literal["classic", "modern", "minimal"] = "modern"


class RestaurantBase(BaseModel):
    description: Optional[str] = Field(default=None, max_length=500)
    address: Address = Field(default_factory=Address)
    contact: Contact = Field(default_factory=Contact)
    operating_hours: dict[Weekday, DayHours] = {}
    social_media: SocialMedia = Field(default_factory=SocialMedia)
    theme: Theme = Field(default_factory=Theme)
    cuisine: list[str] = []
    features: list[Feature] = []
    logo: Optional[str] = Field(default=None, max_length=500)
    cover_image: Optional[str] = Field(default=None, max_length=500)

    model_config = {"str_strip_whitespace": True}


class RestaurantCreate(RestaurantBase):
    name: str = Field(min_length=1, max_length=100)


class RestaurantUpdate(BaseModel):
    """Owner-editable fields. Slug and owner are deliberately absent."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    address: Optional[Address] = None
    contact: Optional[Contact] = None
    operating_hours: Optional[dict[Weekday, DayHours]] = None
    social_media: Optional[SocialMedia] = None
    theme: Optional[Theme] = None
    cuisine: Optional[list[str]] = None
    features: Optional[list[Feature]] = None
    logo: Optional[str] = Field(default=None, max_length=500)
    cover_image: Optional[str] = Field(default=None, max_length=500)

    model_config = {"str_strip_whitespace": True}


class RestaurantRead(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    owner_id: int
    address: dict = {}
    contact: dict = {}
    operating_hours: dict = {}
    social_media: dict = {}
    theme: dict = {}
    cuisine: list[str] = []
    features: list[str] = []
    logo: Optional[str] = None
    cover_image: Optional[str] = None

    qr_public_url: Optional[str] = None
    qr_last_generated: Optional[datetime] = None
    qr_scan_count: int = 0
    total_menu_views: int = 0
    total_qr_scans: int = 0
    last_viewed_at: Optional[datetime] = None

    is_active: bool
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    category_count: Optional[int] = None
    menu_item_count: Optional[int] = None

    model_config = {"from_attributes": True}


class PublicRestaurantProfile(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    logo: Optional[str] = None
    cover_image: Optional[str] = None
    theme: dict = {}
    address: dict = {}
    contact: dict = {}
    operating_hours: dict = {}
    cuisine: list[str] = []
    features: list[str] = []
    social_media: dict = {}

    model_config = {"from_attributes": True}


class CategoryItemCount(BaseModel):
    id: int
    name: str
    order: int
    color: str
    item_count: int


class PopularItem(BaseModel):
    id: int
    name: str
    price: float
    category_id: int
    order_count: int
    view_count: int

    model_config = {"from_attributes": True}


class RestaurantAnalytics(BaseModel):
    total_views: int
    total_qr_scans: int
    total_categories: int
    total_menu_items: int
    popular_items: list[PopularItem]
    categories: list[CategoryItemCount]
    last_viewed_at: Optional[datetime] = None
