"""
Errors raised by the translation importer.

Validation errors are raised before anything is written. Storage errors are
SQLAlchemy's own exceptions, re-raised unchanged after rollback; they are
exported here as StorageFailure so callers can tell the two apart.
"""
from sqlalchemy.exc import SQLAlchemyError as StorageFailure


class TranslationImportError(Exception):
    """Base class for import validation failures. The message is user-facing."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownLocale(TranslationImportError):
    def __init__(self, locale_id: str):
        super().__init__(f"Invalid locale identifier: {locale_id}")
        self.locale_id = locale_id


class SourceLocaleNotAllowed(TranslationImportError):
    def __init__(self, locale_name: str):
        super().__init__(f"The locale '{locale_name}' is the source one.")


class LocaleNotApproved(TranslationImportError):
    def __init__(self, locale_name: str):
        super().__init__(f"The locale '{locale_name}' is not approved.")


class AccessDenied(TranslationImportError):
    def __init__(self, locale_name: str):
        super().__init__(f"No access for the locale '{locale_name}'.")


class LanguageMismatch(TranslationImportError):
    def __init__(self, language_name: str, locale_name: str):
        super().__init__(
            f"The specified file contains translations for {language_name} and not for {locale_name}"
        )


class LanguageUndetermined(TranslationImportError):
    def __init__(self):
        super().__init__("It was not possible to determine the language of the uploaded file.")


class PluralFormMismatch(TranslationImportError):
    """The translation set declares a plural-form count the locale does not use"""

    def __init__(self, locale_name: str, expected: int, found=None):
        if found is None:
            message = (
                f"For the language {locale_name} there should be {expected} plural forms, "
                f"but in your file this is not specified"
            )
        else:
            message = (
                f"For the language {locale_name} there should be {expected} plural forms, "
                f"but in your file there are {found}"
            )
        super().__init__(message)
        self.expected = expected
        self.found = found


__all__ = [
    "TranslationImportError",
    "UnknownLocale",
    "SourceLocaleNotAllowed",
    "LocaleNotApproved",
    "AccessDenied",
    "LanguageMismatch",
    "LanguageUndetermined",
    "PluralFormMismatch",
    "StorageFailure",
]
