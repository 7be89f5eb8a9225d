"""
Pydantic schema for the outcome of a translation import
"""
from pydantic import BaseModel, ConfigDict


class ImportResult(BaseModel):
    """Per-outcome counters of one import run"""
    model_config = ConfigDict(frozen=True)

    empty_translations: int = 0  # no (complete) translation in the unit
    unknown_strings: int = 0  # source string not in the store
    added_activated: int = 0  # new or existing-but-idle translation became current
    added_need_review: int = 0  # new candidate queued behind a reviewed current one
    existing_active_untouched: int = 0
    existing_active_reviewed: int = 0  # current translation upgraded to reviewed
    existing_activated: int = 0  # existing candidate replaced the current one
    existing_inactive_untouched: int = 0

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())
