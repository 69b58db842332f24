"""Lead submission persistence."""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from urbanliving.core.exceptions import NotFoundException
from urbanliving.models import LeadSubmission
from urbanliving.schemas.lead import LeadSubmissionCreate

logger = logging.getLogger(__name__)


async def create_lead(db: AsyncSession, data: LeadSubmissionCreate) -> LeadSubmission:
    lead = LeadSubmission(**data.model_dump())
    db.add(lead)
    await db.flush()
    await db.refresh(lead)
    logger.info(f"New lead submission {lead.id}")
    return lead


async def list_leads(db: AsyncSession) -> Sequence[LeadSubmission]:
    """All submissions, newest first."""
    result = await db.execute(
        select(LeadSubmission).order_by(
            LeadSubmission.submitted_at.desc(), LeadSubmission.id.desc()
        )
    )
    return result.scalars().all()


async def set_contacted(db: AsyncSession, lead_id: int, contacted: bool) -> LeadSubmission:
    lead = await db.get(LeadSubmission, lead_id)
    if lead is None:
        raise NotFoundException("Lead submission not found", details={"id": lead_id})
    lead.contacted = contacted
    await db.flush()
    await db.refresh(lead)
    return lead
