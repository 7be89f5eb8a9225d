"""
Translation Importer - merges a set of translated strings for one locale into the store.

For every source string and locale the store keeps any number of candidate
translations, at most one of them current. A reviewed translation always
wins over an unreviewed one; among equals the current translation is kept,
and new unreviewed text never replaces a reviewed current translation (it is
queued for review instead).

The whole run is one transaction: validation happens before anything is
written, and any error rolls everything back.
"""
import logging
from collections import Counter
from typing import List, Optional, Tuple, Union
from sqlalchemy.orm import Session

from comtrans.core.config import settings
from comtrans.core.exceptions import (
    AccessDenied,
    LanguageMismatch,
    LanguageUndetermined,
    LocaleNotApproved,
    PluralFormMismatch,
    SourceLocaleNotAllowed,
    UnknownLocale,
)
from comtrans.core.monitoring import monitor_performance
from comtrans.models.locale import AccessLevel, Locale
from comtrans.models.translation import MAX_PLURAL_FORMS
from comtrans.schemas.import_result import ImportResult
from comtrans.schemas.translation_set import TranslationSet, TranslationUnit
from comtrans.services.locale_service import LocaleService
from comtrans.services.stats_service import StatsInvalidator
from comtrans.services.translation_gateway import ExistingTranslation, TranslationGateway

logger = logging.getLogger(__name__)

# Outcomes, named after the ImportResult counters
EMPTY_TRANSLATIONS = "empty_translations"
UNKNOWN_STRINGS = "unknown_strings"
ADDED_ACTIVATED = "added_activated"
ADDED_NEED_REVIEW = "added_need_review"
EXISTING_ACTIVE_UNTOUCHED = "existing_active_untouched"
EXISTING_ACTIVE_REVIEWED = "existing_active_reviewed"
EXISTING_ACTIVATED = "existing_activated"
EXISTING_INACTIVE_UNTOUCHED = "existing_inactive_untouched"


class TranslationImporter:
    """
    Imports translations on behalf of one user.

    Args:
        db: Database session; the import commits or rolls back its transaction
        user_id: Acting user, recorded as created_by (None = system user)
        is_admin: Caller is a global administrator
        locales: Locale catalog (defaults to LocaleService on the same session)
        stats: Notified with changed source strings after commit
        batch_size: Rows per multi-row INSERT (defaults to settings.IMPORT_BATCH_SIZE)
    """

    def __init__(
        self,
        db: Session,
        user_id: Optional[int] = None,
        is_admin: bool = False,
        locales: Optional[LocaleService] = None,
        stats: Optional[StatsInvalidator] = None,
        batch_size: Optional[int] = None
    ):
        self.db = db
        self.user_id = user_id
        self.is_admin = is_admin
        self.locales = locales or LocaleService(db)
        self.stats = stats or StatsInvalidator()
        self.batch_size = settings.IMPORT_BATCH_SIZE if batch_size is None else batch_size

    def import_translations(
        self,
        translation_set: TranslationSet,
        locale: Union[Locale, str],
        may_set_as_reviewed: Optional[bool] = None,
        check_locale: bool = False,
        check_plural: bool = False
    ) -> ImportResult:
        """
        Import the translated strings of a set into a locale.

        Args:
            translation_set: Parsed translations
            locale: Locale or locale identifier
            may_set_as_reviewed: Mark imported text as reviewed (None = decide from access level)
            check_locale: Require the set's declared language to be the locale
            check_plural: Require the set's declared plural count to match the locale

        Returns:
            ImportResult with one counter per outcome

        Raises:
            TranslationImportError: Validation failed, nothing was written
            StorageFailure: Database error, the transaction was rolled back
        """
        locale_id = locale.id if isinstance(locale, Locale) else locale
        with monitor_performance("import_translations", locale_id=locale_id, user_id=self.user_id):
            return self._import(translation_set, locale, may_set_as_reviewed, check_locale, check_plural)

    def _import(
        self,
        translation_set: TranslationSet,
        locale: Union[Locale, str],
        may_set_as_reviewed: Optional[bool],
        check_locale: bool,
        check_plural: bool
    ) -> ImportResult:
        locale = self._check_locale(locale)
        may_set_as_reviewed = self._check_access(locale, may_set_as_reviewed)
        if check_locale:
            self._check_language(translation_set, locale)
        if check_plural:
            self._check_plural_forms(translation_set, locale)

        gateway = TranslationGateway(
            self.db,
            locale.id,
            self.user_id if self.user_id is not None else settings.SYSTEM_USER_ID,
            self.batch_size
        )
        plural_count = locale.plural_count
        counters = Counter()
        changed: List[int] = []

        gateway.begin()
        try:
            for unit in translation_set.units:
                outcome = self._import_unit(gateway, unit, plural_count, may_set_as_reviewed, changed)
                counters[outcome] += 1
            gateway.flush()
            gateway.commit()
        except BaseException:
            try:
                gateway.rollback()
            except Exception as rollback_error:
                logger.warning(f"Rollback of import into {locale.id} failed: {rollback_error}")
            raise

        result = ImportResult(**counters)
        logger.info(
            f"Imported {len(translation_set)} strings into {locale.id} "
            f"(user {gateway.user_id}, {gateway.inserter.statements} insert batches): {result.model_dump()}"
        )

        if changed:
            try:
                self.stats.notify_changed(locale.id, set(changed))
            except Exception as e:
                logger.warning(f"Stats invalidation for {locale.id} failed: {e}")

        return result

    # Validation

    def _check_locale(self, locale: Union[Locale, str]) -> Locale:
        if not isinstance(locale, Locale):
            resolved = self.locales.resolve(locale)
            if resolved is None:
                raise UnknownLocale(locale)
            locale = resolved
        if locale.is_source:
            raise SourceLocaleNotAllowed(locale.name)
        if not locale.is_approved:
            raise LocaleNotApproved(locale.name)
        return locale

    def _check_access(self, locale: Locale, may_set_as_reviewed: Optional[bool]) -> bool:
        if may_set_as_reviewed is not None:
            return bool(may_set_as_reviewed)
        level = self.locales.access_level(locale, self.user_id, self.is_admin)
        if level < AccessLevel.TRANSLATE:
            raise AccessDenied(locale.name)
        return level >= AccessLevel.REVIEW

    def _check_language(self, translation_set: TranslationSet, locale: Locale):
        declared = translation_set.language
        if declared and LocaleService.normalize_id(declared) == LocaleService.normalize_id(locale.id):
            return
        name = self.locales.language_name(declared)
        if name:
            raise LanguageMismatch(name, locale.name)
        raise LanguageUndetermined()

    def _check_plural_forms(self, translation_set: TranslationSet, locale: Locale):
        declared = translation_set.plural_forms
        if declared == locale.plural_count:
            return
        for unit in translation_set.units:
            if unit.has_plural and unit.has_plural_translation:
                raise PluralFormMismatch(locale.name, locale.plural_count, declared)

    # Classification

    def _import_unit(
        self,
        gateway: TranslationGateway,
        unit: TranslationUnit,
        plural_count: int,
        may_set_as_reviewed: bool,
        changed: List[int]
    ) -> str:
        """Apply one unit and return its outcome"""
        if not unit.has_translation:
            return EMPTY_TRANSLATIONS
        is_plural = unit.has_plural
        if is_plural and plural_count > 1 and not unit.has_plural_translation:
            return EMPTY_TRANSLATIONS

        found = gateway.search(unit.lookup_hash)
        if found.translatable_id is None:
            return UNKNOWN_STRINGS
        translatable_id = found.translatable_id

        texts = self._texts(unit, is_plural, plural_count)
        current_row, same_row = self._find_rows(found.translations, texts, is_plural, plural_count)
        reviewed = may_set_as_reviewed and not unit.is_fuzzy

        if same_row is None:
            if current_row is not None and current_row.reviewed and not reviewed:
                # Keep the reviewed current translation, queue this one
                gateway.add(translatable_id, texts, current=False, reviewed=False, need_review=True)
                return ADDED_NEED_REVIEW
            if current_row is not None:
                gateway.deactivate(current_row.id)
            gateway.add(translatable_id, texts, current=True, reviewed=reviewed, need_review=False)
            changed.append(translatable_id)
            return ADDED_ACTIVATED

        if current_row is None:
            gateway.activate(same_row.id, reviewed or same_row.reviewed)
            changed.append(translatable_id)
            return ADDED_ACTIVATED

        if same_row.id == current_row.id:
            if reviewed and not same_row.reviewed:
                gateway.mark_reviewed(same_row.id)
                return EXISTING_ACTIVE_REVIEWED
            return EXISTING_ACTIVE_UNTOUCHED

        if reviewed or not current_row.reviewed:
            gateway.deactivate(current_row.id)
            gateway.activate(same_row.id, reviewed)
            changed.append(translatable_id)
            return EXISTING_ACTIVATED
        return EXISTING_INACTIVE_UNTOUCHED

    @staticmethod
    def _texts(unit: TranslationUnit, is_plural: bool, plural_count: int) -> Tuple[str, ...]:
        """Values of the six text slots; slots past the locale's plural count stay empty"""
        texts = [unit.translation]
        for slot in range(1, MAX_PLURAL_FORMS):
            texts.append(unit.plural_translation(slot - 1) if is_plural and slot < plural_count else "")
        return tuple(texts)

    @staticmethod
    def _same_texts(row: ExistingTranslation, texts: Tuple[str, ...], is_plural: bool, plural_count: int) -> bool:
        if row.texts[0] != texts[0]:
            return False
        if not is_plural:
            return True
        for slot in range(1, plural_count):
            if row.texts[slot] != texts[slot]:
                return False
        return True

    def _find_rows(
        self,
        rows: Tuple[ExistingTranslation, ...],
        texts: Tuple[str, ...],
        is_plural: bool,
        plural_count: int
    ) -> Tuple[Optional[ExistingTranslation], Optional[ExistingTranslation]]:
        """Current translation and first translation with the same text, in one pass"""
        current_row = None
        same_row = None
        for row in rows:
            if current_row is None and row.current:
                current_row = row
            if same_row is None and self._same_texts(row, texts, is_plural, plural_count):
                same_row = row
        return current_row, same_row
