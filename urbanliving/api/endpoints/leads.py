"""
Lead submission endpoints.

Anyone can submit the contact form (rate limited per IP); reading and
marking leads as contacted is admin-only.
"""

import logging
from typing import List

from fastapi import APIRouter, Request, status

from urbanliving.api.deps import CurrentUser, DBSession
from urbanliving.middleware.rate_limit import RateLimitConfig, limiter
from urbanliving.schemas.lead import (
    LeadSubmissionCreate,
    LeadSubmissionResponse,
    LeadSubmissionUpdate,
)
from urbanliving.services import leads as lead_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lead-submissions", tags=["Leads"])


@router.post("", response_model=LeadSubmissionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RateLimitConfig.LEAD_SUBMIT)
async def submit_lead(request: Request, data: LeadSubmissionCreate, db: DBSession):
    return await lead_service.create_lead(db, data)


@router.get("", response_model=List[LeadSubmissionResponse])
async def list_leads(db: DBSession, current_user: CurrentUser):
    """All lead submissions, newest first."""
    return await lead_service.list_leads(db)


@router.patch("/{lead_id}", response_model=LeadSubmissionResponse)
@limiter.limit(RateLimitConfig.WRITE)
async def update_lead(
    request: Request,
    lead_id: int,
    data: LeadSubmissionUpdate,
    db: DBSession,
    current_user: CurrentUser,
):
    lead = await lead_service.set_contacted(db, lead_id, data.contacted)
    logger.info(f"Lead {lead_id} marked contacted={data.contacted} by {current_user}")
    return lead
