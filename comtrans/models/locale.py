"""
Locale models - languages translations are collected for
"""
from enum import IntEnum
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from comtrans.core.database import Base


class AccessLevel(IntEnum):
    """Per-locale permission of a user, ordered from weakest to strongest"""
    NONE = 0
    TRANSLATE = 1
    REVIEW = 2
    ADMIN = 3


class Locale(Base):
    """Locale descriptor (e.g. it_IT)"""

    __tablename__ = "locales"

    id = Column(String(12), primary_key=True)  # it_IT, de, pt_BR
    name = Column(String(100), nullable=False)  # Italian (Italy)
    plural_count = Column(Integer, nullable=False, default=2)
    plural_formula = Column(String(400), nullable=False, default="(n != 1)")
    is_source = Column(Boolean, nullable=False, default=False)
    is_approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("plural_count BETWEEN 1 AND 6", name="ck_locale_plural_count"),
    )

    def __repr__(self):
        return f"<Locale(id={self.id}, approved={self.is_approved})>"


class LocaleAccess(Base):
    """Access level granted to a user for one locale"""

    __tablename__ = "locale_access"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    locale_id = Column(String(12), ForeignKey("locales.id"), nullable=False)
    level = Column(Integer, nullable=False, default=AccessLevel.TRANSLATE)

    locale = relationship("Locale", backref="access_grants")

    # One grant per user per locale
    __table_args__ = (
        UniqueConstraint("user_id", "locale_id", name="uq_locale_access_user_locale"),
    )

    def __repr__(self):
        return f"<LocaleAccess(user_id={self.user_id}, locale={self.locale_id}, level={self.level})>"
