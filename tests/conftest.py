"""
Shared fixtures: in-memory SQLite database, locales, source strings, importer
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from comtrans.main import app
from comtrans.core.database import Base, get_db
from comtrans.core.security import create_access_token
from comtrans.models import Locale, LocaleAccess, Translatable, Translation
from comtrans.models.translatable import translatable_hash
from comtrans.services.importer import TranslationImporter


class RecordingStats:
    """Stats invalidator that remembers what it was told"""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def notify_changed(self, locale_id, translatable_ids):
        self.calls.append((locale_id, set(translatable_ids)))
        if self.fail:
            raise RuntimeError("stats backend down")
        return 0


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory database per test"""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create test database session"""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def insert_counter(engine):
    """Counts INSERT statements sent for the translations table"""
    statements = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("INSERT INTO TRANSLATIONS"):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def make_locale(db_session):
    def _make(locale_id="it_IT", name="Italian (Italy)", plural_count=2, is_source=False, is_approved=True):
        locale = Locale(
            id=locale_id,
            name=name,
            plural_count=plural_count,
            is_source=is_source,
            is_approved=is_approved,
        )
        db_session.add(locale)
        db_session.commit()
        return locale
    return _make


@pytest.fixture
def italian(make_locale):
    return make_locale()


@pytest.fixture
def make_translatable(db_session):
    def _make(original, plural="", context=""):
        translatable = Translatable(
            hash=translatable_hash(original, plural or None, context or None),
            context=context,
            text=original,
            plural=plural,
        )
        db_session.add(translatable)
        db_session.commit()
        return translatable
    return _make


@pytest.fixture
def make_translation(db_session):
    """Store a translation row directly, bypassing the importer"""
    def _make(translatable, locale, text0, *plurals, current=False, reviewed=False, need_review=False):
        texts = [text0, *plurals] + [""] * (5 - len(plurals))
        translation = Translation(
            translatable_id=translatable.id,
            locale_id=locale.id,
            current=True if current else None,
            reviewed=reviewed,
            need_review=need_review,
            created_by=1,
            **{f"text{i}": text for i, text in enumerate(texts)},
        )
        db_session.add(translation)
        db_session.commit()
        return translation
    return _make


@pytest.fixture
def grant(db_session):
    def _grant(user_id, locale, level):
        db_session.add(LocaleAccess(user_id=user_id, locale_id=locale.id, level=int(level)))
        db_session.commit()
    return _grant


@pytest.fixture
def stats():
    return RecordingStats()


@pytest.fixture
def make_importer(db_session, stats):
    def _make(**kwargs):
        kwargs.setdefault("user_id", 7)
        kwargs.setdefault("stats", stats)
        return TranslationImporter(db_session, **kwargs)
    return _make


@pytest.fixture
def client(session_factory):
    """Create test client bound to the test database"""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def auth_headers():
    def _headers(user_id=7, role=None):
        claims = {"sub": str(user_id)}
        if role:
            claims["role"] = role
        return {"Authorization": f"Bearer {create_access_token(claims)}"}
    return _headers


@pytest.fixture
def failing_stats():
    return RecordingStats(fail=True)
