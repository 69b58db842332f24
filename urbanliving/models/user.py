"""Admin user model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from urbanliving.models.base import Base, CreatedAtMixin


class User(Base, CreatedAtMixin):
    """An account allowed into the admin dashboard.

    Attributes:
        id: Primary key identifier.
        username: Unique login name.
        hashed_password: passlib hash, never the plain password.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
