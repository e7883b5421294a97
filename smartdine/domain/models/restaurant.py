"""Restaurant domain model — maps to the 'restaurants' table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, JSON, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from smartdine.infrastructure.database import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(160), unique=True, nullable=False, index=True)
    description = Column(String(500), nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Profile
    address = Column(JSON, nullable=False, default=dict)
    contact = Column(JSON, nullable=False, default=dict)
    operating_hours = Column(JSON, nullable=False, default=dict)
    social_media = Column(JSON, nullable=False, default=dict)
    theme = Column(JSON, nullable=False, default=dict)
    cuisine = Column(JSON, nullable=False, default=list)
    features = Column(JSON, nullable=False, default=list)
    logo = Column(String(500), nullable=True)
    cover_image = Column(String(500), nullable=True)

    # QR code
    qr_code = Column(Text, nullable=True)  # PNG data URL
    qr_public_url = Column(String(500), nullable=True)
    qr_last_generated = Column(DateTime(timezone=True), nullable=True)
    qr_scan_count = Column(Integer, nullable=False, default=0, server_default="0")

    # Stats
    total_menu_views = Column(Integer, nullable=False, default=0, server_default="0")
    total_qr_scans = Column(Integer, nullable=False, default=0, server_default="0")
    last_viewed_at = Column(DateTime(timezone=True), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="restaurants")
    categories = relationship("Category", back_populates="restaurant", cascade="all, delete-orphan")
    menu_items = relationship("MenuItem", back_populates="restaurant", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_restaurants_visibility", "is_active", "is_published"),
    )

    def __repr__(self):
        return f"<Restaurant {self.slug}>"
