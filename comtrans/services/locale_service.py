"""
Locale Service - locale catalog lookups and per-locale user access
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_
from babel import Locale as BabelLocale, UnknownLocaleError

from comtrans.models.locale import Locale, LocaleAccess, AccessLevel

logger = logging.getLogger(__name__)


class LocaleService:
    """
    Read-only view of the locale catalog.
    Access levels come from locale_access grants; administrators get ADMIN everywhere.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def normalize_id(locale_id: str) -> str:
        """'pt-br' / 'PT_BR' -> 'pt_br' (comparison form, not the stored id)"""
        return locale_id.strip().replace("-", "_").lower()

    def resolve(self, locale_id: str) -> Optional[Locale]:
        """
        Find a locale by identifier.
        Exact match first, then a case-insensitive match with '-' read as '_'.
        """
        if not locale_id:
            return None

        locale = self.db.get(Locale, locale_id)
        if locale is not None:
            return locale

        wanted = self.normalize_id(locale_id)
        for candidate in self.db.query(Locale).all():
            if self.normalize_id(candidate.id) == wanted:
                return candidate
        return None

    def get_approved_locales(self) -> List[Locale]:
        """Approved locales that can receive translations, sorted by name"""
        return self.db.query(Locale).filter(
            and_(
                Locale.is_approved.is_(True),
                Locale.is_source.is_(False)
            )
        ).order_by(Locale.name).all()

    def access_level(self, locale: Locale, user_id: Optional[int], is_admin: bool = False) -> AccessLevel:
        """
        Access level of a user for a locale.

        Args:
            locale: Locale descriptor
            user_id: Acting user id (None = anonymous)
            is_admin: Global administrator flag

        Returns:
            AccessLevel (NONE when there is no grant)
        """
        if is_admin:
            return AccessLevel.ADMIN
        if user_id is None:
            return AccessLevel.NONE

        grant = self.db.query(LocaleAccess).filter(
            and_(
                LocaleAccess.user_id == user_id,
                LocaleAccess.locale_id == locale.id
            )
        ).first()

        if not grant:
            return AccessLevel.NONE
        return AccessLevel(grant.level)

    @staticmethod
    def language_name(code: Optional[str]) -> Optional[str]:
        """
        English display name of a language code ('it_IT' -> 'Italian (Italy)').

        Returns:
            None when the code is empty or not a known language
        """
        if not code:
            return None
        try:
            return BabelLocale.parse(code.strip().replace("-", "_")).get_display_name("en")
        except (UnknownLocaleError, ValueError, TypeError) as e:
            logger.debug(f"Unknown language code '{code}': {e}")
            return None
