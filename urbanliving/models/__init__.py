"""Database models.

Importing this package registers every table on ``Base.metadata``.
"""

from urbanliving.models.base import Base
from urbanliving.models.branding import Branding
from urbanliving.models.lead import LeadSubmission
from urbanliving.models.property import Property, Unit
from urbanliving.models.user import User

__all__ = ["Base", "Branding", "LeadSubmission", "Property", "Unit", "User"]
