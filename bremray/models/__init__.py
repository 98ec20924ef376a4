"""SQLAlchemy models for local client storage."""

from bremray.models.base import Base
from bremray.models.preference import Preference

__all__ = ["Base", "Preference"]
