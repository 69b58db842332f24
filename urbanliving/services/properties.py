"""Property and unit persistence.

Plain async functions over an ``AsyncSession``. The request session is
committed by ``get_db`` once the endpoint returns; these helpers only
flush so generated ids and server defaults can be read back.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from urbanliving.core.exceptions import NotFoundException, ValidationException
from urbanliving.models import Property, Unit
from urbanliving.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    UnitCreate,
    UnitUpdate,
)
from urbanliving.services.geocoding import GeocodingClient, full_address

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("address", "city", "state")


def _changes(data, model) -> Dict[str, Any]:
    """Fields sent in a partial update; explicit nulls only for nullable columns."""
    changes = data.model_dump(exclude_unset=True)
    columns = model.__table__.columns
    rejected = [key for key, value in changes.items() if value is None and not columns[key].nullable]
    if rejected:
        raise ValidationException(
            f"Fields cannot be null: {', '.join(rejected)}", details={"fields": rejected}
        )
    return changes


async def list_properties(
    db: AsyncSession,
    city: Optional[str] = None,
    is_available: Optional[bool] = None,
) -> Sequence[Property]:
    """
    List properties, optionally filtered.

    Args:
        city: Case-insensitive exact city match
        is_available: True keeps only properties with at least one
            available unit; False keeps only properties with none
    """
    query = select(Property).order_by(Property.id)
    if city:
        query = query.where(func.lower(Property.city) == city.strip().lower())
    if is_available is not None:
        available_units = select(Unit.id).where(
            Unit.property_id == Property.id, Unit.is_available.is_(True)
        )
        exists = available_units.exists()
        query = query.where(exists if is_available else ~exists)
    result = await db.execute(query)
    return result.scalars().all()


async def get_property(db: AsyncSession, property_id: int) -> Property:
    prop = await db.get(Property, property_id)
    if prop is None:
        raise NotFoundException("Property not found", details={"id": property_id})
    return prop


async def _apply_geocode(
    prop: Property, geocoder: Optional[GeocodingClient]
) -> None:
    if geocoder is None:
        return
    coordinates = await run_in_threadpool(
        geocoder.geocode, full_address(prop.address, prop.city, prop.state)
    )
    if coordinates:
        prop.latitude, prop.longitude = coordinates
        logger.info(f"Geocoded property {prop.name!r} to {prop.latitude},{prop.longitude}")


async def create_property(
    db: AsyncSession,
    data: PropertyCreate,
    geocoder: Optional[GeocodingClient] = None,
) -> Property:
    """
    Insert a property.

    When the request carries no coordinates the address is geocoded;
    a failed lookup still saves the property, without coordinates.
    """
    prop = Property(**data.model_dump())
    if prop.latitude is None or prop.longitude is None:
        await _apply_geocode(prop, geocoder)

    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info(f"Created property {prop.id} ({prop.name}, {prop.city})")
    return prop


async def update_property(
    db: AsyncSession,
    property_id: int,
    data: PropertyUpdate,
    geocoder: Optional[GeocodingClient] = None,
) -> Property:
    """Apply a partial update; re-geocode when the address moved."""
    prop = await get_property(db, property_id)
    changes = _changes(data, Property)

    address_changed = any(
        key in changes and changes[key] != getattr(prop, key) for key in ADDRESS_FIELDS
    )
    for key, value in changes.items():
        setattr(prop, key, value)

    if address_changed and "latitude" not in changes and "longitude" not in changes:
        await _apply_geocode(prop, geocoder)

    await db.flush()
    await db.refresh(prop)
    return prop


async def delete_property(db: AsyncSession, property_id: int) -> None:
    """
    Delete a property and its units.

    Photo directories on disk are left in place.
    """
    prop = await get_property(db, property_id)
    await db.execute(delete(Unit).where(Unit.property_id == prop.id))
    await db.delete(prop)
    await db.flush()
    logger.info(f"Deleted property {property_id}")


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------


async def list_units(db: AsyncSession, property_id: int) -> List[Unit]:
    result = await db.execute(
        select(Unit).where(Unit.property_id == property_id).order_by(Unit.id)
    )
    return list(result.scalars().all())


async def get_unit(db: AsyncSession, unit_id: int) -> Unit:
    unit = await db.get(Unit, unit_id)
    if unit is None:
        raise NotFoundException("Unit not found", details={"id": unit_id})
    return unit


async def create_unit(db: AsyncSession, data: UnitCreate) -> Unit:
    await get_property(db, data.property_id)
    unit = Unit(**data.model_dump())
    db.add(unit)
    await db.flush()
    await db.refresh(unit)
    logger.info(f"Created unit {unit.id} ({unit.unit_number}) in property {unit.property_id}")
    return unit


async def update_unit(db: AsyncSession, unit_id: int, data: UnitUpdate) -> Unit:
    unit = await get_unit(db, unit_id)
    changes = _changes(data, Unit)
    if "property_id" in changes and changes["property_id"] != unit.property_id:
        await get_property(db, changes["property_id"])
    for key, value in changes.items():
        setattr(unit, key, value)
    await db.flush()
    await db.refresh(unit)
    return unit


async def delete_unit(db: AsyncSession, unit_id: int) -> None:
    unit = await get_unit(db, unit_id)
    await db.delete(unit)
    await db.flush()
