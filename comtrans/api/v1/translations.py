"""
Translation endpoints: approved locales and translation upload.
The request body is an already-parsed translation set.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List

from comtrans.core.database import get_db
from comtrans.core.exceptions import AccessDenied, TranslationImportError, UnknownLocale
from comtrans.core.security import CurrentUser, get_current_user
from comtrans.schemas.import_result import ImportResult
from comtrans.schemas.locale import LocaleResponse
from comtrans.schemas.translation_set import TranslationSet
from comtrans.services.importer import TranslationImporter
from comtrans.services.locale_service import LocaleService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/locales", response_model=List[LocaleResponse])
def list_approved_locales(db: Session = Depends(get_db)):
    """
    Locales currently accepting translations.

    Returns:
        List of approved, non-source locales
    """
    return LocaleService(db).get_approved_locales()


@router.post("/locales/{locale_id}/import", response_model=ImportResult)
def import_translations(
    locale_id: str,
    translation_set: TranslationSet,
    check_locale: bool = Query(False, description="Reject sets declaring another language"),
    check_plural: bool = Query(False, description="Reject sets declaring another plural-form count"),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Import translated strings into a locale.

    Args:
        locale_id: Target locale (e.g. 'it_IT')
        translation_set: Parsed translations
        check_locale: Verify the declared language
        check_plural: Verify the declared plural-form count
        user: Authenticated user
        db: Database session

    Returns:
        Import counters
    """
    importer = TranslationImporter(db, user_id=user.id, is_admin=user.is_admin)
    try:
        return importer.import_translations(
            translation_set,
            locale_id,
            check_locale=check_locale,
            check_plural=check_plural
        )
    except UnknownLocale as e:
        raise HTTPException(status_code=404, detail=e.message)
    except AccessDenied as e:
        logger.warning(f"User {user.id} denied import into {locale_id}")
        raise HTTPException(status_code=403, detail=e.message)
    except TranslationImportError as e:
        raise HTTPException(status_code=400, detail=e.message)
