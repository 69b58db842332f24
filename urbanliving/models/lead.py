"""Lead submission model for prospective tenant enquiries."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from urbanliving.models.base import Base


class LeadSubmission(Base):
    """A contact request captured by the public lead form.

    Attributes:
        id: Primary key identifier.
        name: Prospect's name.
        email: Normalized email address.
        move_in_date: Desired move-in date, if given.
        desired_bedrooms: Free-form bedroom preference (e.g. "2", "studio").
        additional_info: Message body.
        contacted: Set by an admin once the lead has been followed up.
        submitted_at: Server timestamp of the submission.
    """

    __tablename__ = "lead_submissions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    move_in_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    desired_bedrooms: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    additional_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contacted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
