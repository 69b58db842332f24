"""Property and Unit models.

A property is a building listed on the site; units are the rentable
apartments inside it. Photos are not stored here: they live on disk under
a directory derived from the property's city and name (see
``urbanliving.services.photo_paths``).
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from urbanliving.models.base import Base, CreatedAtMixin


class Property(Base, CreatedAtMixin):
    """Represents a listed rental property.

    Attributes:
        id: Primary key identifier.
        name: Marketing name, also used to derive the photo directory.
        address: Street address.
        city: City name, also used to derive the photo directory.
        state: State abbreviation.
        zip_code: ZIP/postal code.
        bedrooms: Typical bedroom count.
        bathrooms: Bathroom count as entered (e.g. "1.5").
        total_units: Number of units in the building.
        latitude: Latitude formatted to 5 decimals, if known.
        longitude: Longitude formatted to 5 decimals, if known.
        images: Legacy list of image URLs.
    """

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[str] = mapped_column(String(20), nullable=False)
    total_units: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    neighborhood: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    amenities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pet_policy: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    floor_plans: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    latitude: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    longitude: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class Unit(Base):
    """Represents a rentable unit inside a property.

    Attributes:
        id: Primary key identifier.
        property_id: Foreign key to the owning property.
        unit_number: Unit label as entered (e.g. "3B"), slugified for the
            unit photo directory.
        is_available: Whether the unit is currently on the market.
        rent: Monthly rent in cents.
    """

    __tablename__ = "units"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    unit_number: Mapped[str] = mapped_column(String(50), nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bathrooms: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    available_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    rent: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
