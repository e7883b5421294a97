"""Menu domain models — 'categories' and 'menu_items' tables."""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from smartdine.infrastructure.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(String(200), nullable=True)
    icon = Column(String(100), nullable=True)
    image = Column(String(500), nullable=True)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    color = Column(String(20), nullable=False, default="#dc2626")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    restaurant = relationship("Restaurant", back_populates="categories")
    menu_items = relationship("MenuItem", back_populates="category")

    __table_args__ = (
        Index("idx_categories_restaurant_order", "restaurant_id", "order"),
        Index("idx_categories_restaurant_active", "restaurant_id", "is_active"),
    )

    def __repr__(self):
        return f"<Category {self.name}>"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=True)

    images = Column(JSON, nullable=False, default=list)  # [{url, alt, is_primary}]
    ingredients = Column(JSON, nullable=False, default=list)
    allergens = Column(JSON, nullable=False, default=list)
    dietary = Column(JSON, nullable=False, default=list)
    nutritional_info = Column(JSON, nullable=False, default=dict)
    customizations = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    preparation_time = Column(Integer, nullable=True)  # minutes
    spice_level = Column(Integer, nullable=False, default=0)
    order = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    is_popular = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)

    view_count = Column(Integer, nullable=False, default=0, server_default="0")
    order_count = Column(Integer, nullable=False, default=0, server_default="0")
    last_ordered_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    restaurant = relationship("Restaurant", back_populates="menu_items")
    category = relationship("Category", back_populates="menu_items")

    __table_args__ = (
        Index("idx_menu_items_restaurant_category", "restaurant_id", "category_id", "order"),
        Index("idx_menu_items_restaurant_available", "restaurant_id", "is_available"),
    )

    def __repr__(self):
        return f"<MenuItem {self.name} - {self.price}>"
