"""
Translation model - candidate and current translations of a source string
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from comtrans.core.database import Base

MAX_PLURAL_FORMS = 6
TEXT_COLUMNS = tuple(f"text{i}" for i in range(MAX_PLURAL_FORMS))


class Translation(Base):
    """
    One rendering of a Translatable into a Locale.

    `current` is True for the translation shown to users and NULL otherwise,
    so the unique constraint below allows any number of candidates but a
    single current row per string and locale.
    """

    __tablename__ = "translations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    translatable_id = Column(Integer, ForeignKey("translatables.id"), nullable=False)
    locale_id = Column(String(12), ForeignKey("locales.id"), nullable=False)
    current = Column(Boolean, nullable=True)
    current_since = Column(DateTime(timezone=True), nullable=True)
    reviewed = Column(Boolean, nullable=False, default=False)
    need_review = Column(Boolean, nullable=False, default=False)
    # text0 is the singular form, text1..text5 the plural forms
    text0 = Column(Text, nullable=False, default="")
    text1 = Column(Text, nullable=False, default="")
    text2 = Column(Text, nullable=False, default="")
    text3 = Column(Text, nullable=False, default="")
    text4 = Column(Text, nullable=False, default="")
    text5 = Column(Text, nullable=False, default="")
    created_on = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by = Column(Integer, nullable=False)

    translatable = relationship("Translatable", backref="translations")
    locale = relationship("Locale")

    __table_args__ = (
        UniqueConstraint("translatable_id", "locale_id", "current", name="uq_translation_current"),
        Index("idx_translations_translatable_locale", "translatable_id", "locale_id"),
    )

    @property
    def texts(self) -> tuple:
        return tuple(getattr(self, column) for column in TEXT_COLUMNS)

    def __repr__(self):
        return f"<Translation(id={self.id}, translatable={self.translatable_id}, locale={self.locale_id}, current={self.current})>"
