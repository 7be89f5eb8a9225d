"""
Pydantic schemas for an already-parsed set of translated strings
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from comtrans.models.translatable import translatable_hash

FUZZY_FLAG = "fuzzy"


class TranslationUnit(BaseModel):
    """One source string with its translation(s)"""
    context: str = ""
    original: str
    plural: str = ""
    translation: str = ""
    plural_translations: List[str] = Field(default_factory=list, max_length=5)
    flags: List[str] = Field(default_factory=list)

    @property
    def has_plural(self) -> bool:
        return self.plural != ""

    @property
    def has_translation(self) -> bool:
        return self.translation != ""

    @property
    def has_plural_translation(self) -> bool:
        return any(text != "" for text in self.plural_translations)

    @property
    def is_fuzzy(self) -> bool:
        return FUZZY_FLAG in self.flags

    @property
    def lookup_hash(self) -> str:
        return translatable_hash(self.original, self.plural if self.has_plural else None, self.context)

    def plural_translation(self, index: int) -> str:
        """Plural text number `index` (0 = first plural form), empty when missing"""
        if index < len(self.plural_translations):
            return self.plural_translations[index]
        return ""


class TranslationSet(BaseModel):
    """
    Translations for one language, in input order.

    `language` and `plural_forms` are what the uploaded file declares; either
    may be missing.
    """
    language: Optional[str] = None
    plural_forms: Optional[int] = Field(default=None, ge=1)
    units: List[TranslationUnit] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.units)
