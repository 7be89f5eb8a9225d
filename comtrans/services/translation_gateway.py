"""
Translation Gateway - the SQL side of the translation importer.

All statements are SQLAlchemy Core on the caller's session, so they share its
transaction. New rows are buffered and written with one multi-row INSERT per
batch; activations and deactivations are single-row UPDATEs issued at once.
"""
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Set, Tuple
from sqlalchemy import Table, and_, insert, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from comtrans.models.translatable import Translatable
from comtrans.models.translation import Translation, TEXT_COLUMNS

logger = logging.getLogger(__name__)

translatables = Translatable.__table__
translations = Translation.__table__


class ExistingTranslation(NamedTuple):
    """Snapshot of a stored translation row"""
    id: int
    current: bool
    reviewed: bool
    texts: Tuple[str, ...]


class SearchResult(NamedTuple):
    """Translatable id (None if the source string is unknown) and its translations in one locale"""
    translatable_id: Optional[int]
    translations: Tuple[ExistingTranslation, ...]


class BulkInserter:
    """
    Buffers rows for one table and writes them as multi-row INSERTs.

    Every row must carry the same keys. A full buffer is written as soon as
    the batch size is reached; flush() writes whatever is left.
    """

    def __init__(self, db: Session, table: Table, batch_size: int, key: Optional[str] = None):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.db = db
        self.table = table
        self.batch_size = batch_size
        self.key = key
        self._rows: List[Dict[str, Any]] = []
        self._pending_keys: Set[Any] = set()
        self.statements = 0
        self.inserted = 0

    def __len__(self) -> int:
        return len(self._rows)

    def is_pending(self, key_value: Any) -> bool:
        """Whether a buffered row has `key` column equal to key_value"""
        return key_value in self._pending_keys

    def add(self, row: Dict[str, Any]):
        self._rows.append(row)
        if self.key is not None:
            self._pending_keys.add(row[self.key])
        if len(self._rows) >= self.batch_size:
            self.flush()

    def flush(self) -> int:
        """Write buffered rows. Returns the number of rows written."""
        if not self._rows:
            return 0
        count = len(self._rows)
        self.db.execute(insert(self.table).values(self._rows))
        self.statements += 1
        self.inserted += count
        self._rows = []
        self._pending_keys.clear()
        return count


class TranslationGateway:
    """
    Reads and writes translations of one locale on behalf of one user.
    """

    def __init__(self, db: Session, locale_id: str, user_id: int, batch_size: int):
        self.db = db
        self.locale_id = locale_id
        self.user_id = user_id
        self.inserter = BulkInserter(db, translations, batch_size, key="translatable_id")
        self._search_query = (
            select(
                translatables.c.id.label("translatable_id"),
                translations.c.id,
                translations.c.current,
                translations.c.reviewed,
                *(translations.c[column] for column in TEXT_COLUMNS),
            )
            .select_from(translatables)
            .outerjoin(
                translations,
                and_(
                    translations.c.translatable_id == translatables.c.id,
                    translations.c.locale_id == locale_id,
                ),
            )
            .order_by(translations.c.id)
        )

    # Transaction

    def begin(self):
        """Open a transaction unless the session already has one"""
        if not self.db.in_transaction():
            self.db.begin()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    # Reads

    def search(self, lookup_hash: str) -> SearchResult:
        """
        Translatable matching the hash plus all its translations in this locale.

        Rows still waiting in the insert buffer for the same translatable are
        written first so the result reflects them.
        """
        result = self._search(lookup_hash)
        if result.translatable_id is not None and self.inserter.is_pending(result.translatable_id):
            self.inserter.flush()
            result = self._search(lookup_hash)
        return result

    def _search(self, lookup_hash: str) -> SearchResult:
        rows = self.db.execute(
            self._search_query.where(translatables.c.hash == lookup_hash)
        ).all()
        if not rows:
            return SearchResult(None, ())

        found = tuple(
            ExistingTranslation(
                id=row.id,
                current=bool(row.current),
                reviewed=bool(row.reviewed),
                texts=tuple(getattr(row, column) or "" for column in TEXT_COLUMNS),
            )
            for row in rows
            if row.id is not None
        )
        return SearchResult(rows[0].translatable_id, found)

    # Writes

    def add(self, translatable_id: int, texts: Tuple[str, ...], current: bool, reviewed: bool, need_review: bool):
        """Queue a new translation row"""
        row = {
            "created_by": self.user_id,
            "locale_id": self.locale_id,
            "current": True if current else None,
            "current_since": func.now() if current else None,
            "reviewed": reviewed,
            "need_review": need_review,
            "translatable_id": translatable_id,
        }
        row.update(zip(TEXT_COLUMNS, texts))
        self.inserter.add(row)

    def flush(self) -> int:
        return self.inserter.flush()

    def deactivate(self, translation_id: int):
        """Take a translation out of the current slot and clear its review state"""
        self.db.execute(
            update(translations)
            .where(translations.c.id == translation_id)
            .values(current=None, current_since=None, reviewed=False, need_review=False)
        )

    def activate(self, translation_id: int, reviewed: bool):
        """Make a translation the current one"""
        self.db.execute(
            update(translations)
            .where(translations.c.id == translation_id)
            .values(current=True, current_since=func.now(), reviewed=reviewed, need_review=False)
        )

    def mark_reviewed(self, translation_id: int):
        """Flag a translation as reviewed without touching its current state"""
        self.db.execute(
            update(translations)
            .where(translations.c.id == translation_id)
            .values(reviewed=True, need_review=False)
        )
