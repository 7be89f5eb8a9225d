"""
Translatable model - canonical source strings, language independent
"""
import hashlib
from typing import Optional
from sqlalchemy import Column, String, Text, Integer, DateTime
from sqlalchemy.sql import func

from comtrans.core.database import Base

CONTEXT_SEPARATOR = "\x04"
PLURAL_SEPARATOR = "\x05"


def translatable_hash(original: str, plural: Optional[str] = None, context: Optional[str] = None) -> str:
    """
    Stable lookup hash of a source string.

    The key is the singular text, prefixed by the context when there is one;
    strings with a plural form hash key + separator + plural.
    """
    key = f"{context}{CONTEXT_SEPARATOR}{original}" if context else original
    if plural:
        key = f"{key}{PLURAL_SEPARATOR}{plural}"
    return hashlib.md5(key.encode("utf-8")).hexdigest()


class Translatable(Base):
    """Source string. Rows are created by the source-string import, never by translation imports."""

    __tablename__ = "translatables"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hash = Column(String(32), nullable=False, unique=True)
    context = Column(Text, nullable=False, default="")
    text = Column(Text, nullable=False)
    plural = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Translatable(id={self.id}, hash={self.hash})>"
