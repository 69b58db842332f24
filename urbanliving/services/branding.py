"""Site branding persistence.

Branding is a singleton: the first row is the site's branding and
updates overwrite it in place.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from urbanliving.models import Branding
from urbanliving.schemas.branding import BrandingUpdate

logger = logging.getLogger(__name__)


async def get_branding(db: AsyncSession) -> Optional[Branding]:
    result = await db.execute(select(Branding).order_by(Branding.id).limit(1))
    return result.scalar_one_or_none()


async def upsert_branding(db: AsyncSession, data: BrandingUpdate) -> Branding:
    branding = await get_branding(db)
    if branding is None:
        branding = Branding(**data.model_dump())
        db.add(branding)
        logger.info("Created site branding")
    else:
        for key, value in data.model_dump().items():
            setattr(branding, key, value)
    await db.flush()
    await db.refresh(branding)
    return branding
