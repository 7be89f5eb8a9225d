"""
SQLAlchemy models
"""
from comtrans.models.locale import Locale, LocaleAccess, AccessLevel
from comtrans.models.translatable import Translatable
from comtrans.models.translation import Translation

__all__ = [
    "Locale",
    "LocaleAccess",
    "AccessLevel",
    "Translatable",
    "Translation",
]

# Import Base for Alembic
from comtrans.core.database import Base
