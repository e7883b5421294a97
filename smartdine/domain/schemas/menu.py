"""Pydantic schemas for categories, menu items and the public menu."""

from pydantic import BaseModel, Field, computed_field, field_validator
from datetime import datetime
from typing import Literal, Optional

from smartdine.domain.schemas.restaurant import HEX_COLOR, PublicRestaurantProfile

Allergen = Literal[
    "gluten", "dairy", "eggs", "nuts", "peanuts", "shellfish",
    "fish", "soy", "sesame", "sulfites", "mustard", "celery",
]
Dietary = Literal[
    "vegetarian", "vegan", "gluten-free", "dairy-free",
    "nut-free", "halal", "kosher", "organic", "spicy", "low-carb",
]


# ── Categories ──────────────────────────────────────────────

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    icon: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=500)
    order: int = 0
    color: str = Field(default="#dc2626", pattern=HEX_COLOR)

    model_config = {"str_strip_whitespace": True}


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    icon: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=500)
    order: Optional[int] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    is_active: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}


class CategoryRead(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    order: int
    color: str
    is_active: bool
    created_at: Optional[datetime] = None
    menu_item_count: Optional[int] = None

    model_config = {"from_attributes": True}


# ── Menu items ──────────────────────────────────────────────

class MenuImage(BaseModel):
    url: str = Field(min_length=1, max_length=500)
    alt: str = ""
    is_primary: bool = False


class NutritionalInfo(BaseModel):
    calories: Optional[float] = None
    protein: Optional[float] = None  # g
    carbs: Optional[float] = None  # g
    fat: Optional[float] = None  # g
    fiber: Optional[float] = None  # g
    sugar: Optional[float] = None  # g
    sodium: Optional[float] = None  # mg


class CustomizationOption(BaseModel):
    name: str = Field(min_length=1)
    price: float = 0


class Customization(BaseModel):
    name: str = Field(min_length=1)
    options: list[CustomizationOption] = []
    required: bool = False
    max_selections: int = Field(default=1, ge=1)


class MenuItemBase(BaseModel):
    description: Optional[str] = Field(default=None, max_length=500)
    original_price: Optional[float] = Field(default=None, ge=0)
    images: list[MenuImage] = []
    ingredients: list[str] = []
    allergens: list[Allergen] = []
    dietary: list[Dietary] = []
    nutritional_info: NutritionalInfo = Field(default_factory=NutritionalInfo)
    preparation_time: Optional[int] = Field(default=None, ge=0)
    spice_level: int = Field(default=0, ge=0, le=5)
    customizations: list[Customization] = []
    tags: list[str] = []
    order: int = 0
    is_available: bool = True
    is_popular: bool = False
    is_featured: bool = False

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v: list[str]) -> list[str]:
        return [t.strip().lower() for t in v if t.strip()]


class MenuItemCreate(MenuItemBase):
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(ge=0)
    category_id: int


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Optional[float] = Field(default=None, ge=0)
    original_price: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    images: Optional[list[MenuImage]] = None
    ingredients: Optional[list[str]] = None
    allergens: Optional[list[Allergen]] = None
    dietary: Optional[list[Dietary]] = None
    nutritional_info: Optional[NutritionalInfo] = None
    preparation_time: Optional[int] = Field(default=None, ge=0)
    spice_level: Optional[int] = Field(default=None, ge=0, le=5)
    customizations: Optional[list[Customization]] = None
    tags: Optional[list[str]] = None
    order: Optional[int] = None
    is_available: Optional[bool] = None
    is_popular: Optional[bool] = None
    is_featured: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        return [t.strip().lower() for t in v if t.strip()]


class MenuItemRead(BaseModel):
    id: int
    restaurant_id: int
    category_id: int
    name: str
    description: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    images: list[MenuImage] = []
    ingredients: list[str] = []
    allergens: list[str] = []
    dietary: list[str] = []
    nutritional_info: dict = {}
    preparation_time: Optional[int] = None
    spice_level: int = 0
    customizations: list[dict] = []
    tags: list[str] = []
    order: int = 0
    is_available: bool
    is_popular: bool
    is_featured: bool
    view_count: int = 0
    order_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def image(self) -> Optional[str]:
        """Primary image URL, falling back to the first image."""
        if not self.images:
            return None
        primary = next((img for img in self.images if img.is_primary), self.images[0])
        return primary.url

    @computed_field
    @property
    def is_on_sale(self) -> bool:
        return self.original_price is not None and self.original_price > self.price

    @computed_field
    @property
    def discount_percentage(self) -> int:
        if not self.is_on_sale:
            return 0
        return round((self.original_price - self.price) / self.original_price * 100)


# ── Public menu ─────────────────────────────────────────────

class MenuCategory(CategoryRead):
    items: list[MenuItemRead] = []


class PublicMenu(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    restaurant: PublicRestaurantProfile
    categories: list[MenuCategory]
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
