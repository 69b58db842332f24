"""Site branding model (a single row edited from the admin dashboard)."""

from typing import List, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from urbanliving.models.base import Base


class Branding(Base):
    """Company name, colors and copy shown on the public site."""

    __tablename__ = "branding"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_name: Mapped[str] = mapped_column(
        String(255), nullable=False, default="UrbanLiving"
    )
    logo_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    primary_color: Mapped[Optional[str]] = mapped_column(String(20), default="#2563eb")
    secondary_color: Mapped[Optional[str]] = mapped_column(String(20), default="#4f46e5")
    cities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    header: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    subtitle: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    footer_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
