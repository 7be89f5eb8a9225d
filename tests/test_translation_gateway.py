"""
Tests for the SQL gateway used by the importer
"""
import pytest
from sqlalchemy.exc import IntegrityError

from comtrans.models import Translation
from comtrans.models.translatable import translatable_hash
from comtrans.services.translation_gateway import BulkInserter, TranslationGateway, translations


def texts(first, *rest):
    return (first, *rest) + ("",) * (5 - len(rest))


def test_search_unknown_hash(db_session, italian):
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)

    found = gateway.search(translatable_hash("Nothing here"))

    assert found.translatable_id is None
    assert found.translations == ()


def test_search_known_string_without_translations(db_session, italian, make_translatable):
    hello = make_translatable("Hello")
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)

    found = gateway.search(hello.hash)

    assert found.translatable_id == hello.id
    assert found.translations == ()


def test_search_only_returns_rows_of_the_locale(db_session, italian, make_locale, make_translatable, make_translation):
    german = make_locale("de_DE", "German (Germany)")
    hello = make_translatable("Hello")
    make_translation(hello, german, "Hallo", current=True)
    ciao = make_translation(hello, italian, "Ciao", current=True, reviewed=True)
    salve = make_translation(hello, italian, "Salve", need_review=True)
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)

    found = gateway.search(hello.hash)

    assert [(row.id, row.current, row.reviewed, row.texts[0]) for row in found.translations] == [
        (ciao.id, True, True, "Ciao"),
        (salve.id, False, False, "Salve"),
    ]


def test_bulk_inserter_writes_full_batches_immediately(db_session, italian, make_translatable, insert_counter):
    ids = [make_translatable(f"String {i}").id for i in range(5)]
    insert_counter.clear()
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=2)

    for translatable_id in ids:
        gateway.add(translatable_id, texts("x"), current=True, reviewed=False, need_review=False)

    assert len(insert_counter) == 2
    assert len(gateway.inserter) == 1

    assert gateway.flush() == 1
    assert gateway.flush() == 0
    assert len(insert_counter) == 3
    assert gateway.inserter.inserted == 5
    gateway.commit()

    assert db_session.query(Translation).count() == 5


def test_bulk_inserter_rejects_empty_batches(db_session):
    with pytest.raises(ValueError):
        BulkInserter(db_session, translations, batch_size=0)


def test_search_sees_buffered_rows_of_the_same_string(db_session, italian, make_translatable):
    hello = make_translatable("Hello")
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)
    gateway.add(hello.id, texts("Ciao"), current=True, reviewed=False, need_review=False)

    found = gateway.search(hello.hash)

    assert len(gateway.inserter) == 0
    assert [row.texts[0] for row in found.translations] == ["Ciao"]


def test_activate_and_deactivate(db_session, italian, make_translatable, make_translation):
    hello = make_translatable("Hello")
    old = make_translation(hello, italian, "Salve", current=True, reviewed=True)
    new = make_translation(hello, italian, "Ciao", need_review=True)
    old_id, new_id = old.id, new.id
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)

    gateway.begin()
    gateway.deactivate(old_id)
    gateway.activate(new_id, reviewed=False)
    gateway.commit()

    old_row = db_session.get(Translation, old_id)
    new_row = db_session.get(Translation, new_id)
    assert (old_row.current, old_row.current_since, old_row.reviewed, old_row.need_review) == (None, None, False, False)
    assert (new_row.current, new_row.reviewed, new_row.need_review) == (True, False, False)
    assert new_row.current_since is not None


def test_second_current_row_is_rejected_by_the_database(db_session, italian, make_translatable, make_translation):
    """Two imports racing on the same string cannot both leave a current row"""
    hello = make_translatable("Hello")
    make_translation(hello, italian, "Ciao", current=True)
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)

    gateway.add(hello.id, texts("Salve"), current=True, reviewed=False, need_review=False)
    with pytest.raises(IntegrityError):
        gateway.flush()
    gateway.rollback()

    assert db_session.query(Translation).filter(Translation.current.is_(True)).count() == 1


def test_candidates_do_not_collide(db_session, italian, make_translatable):
    hello = make_translatable("Hello")
    gateway = TranslationGateway(db_session, "it_IT", user_id=7, batch_size=50)

    for text in ("Ciao", "Salve", "Buongiorno"):
        gateway.add(hello.id, texts(text), current=False, reviewed=False, need_review=True)
    gateway.flush()
    gateway.commit()

    assert db_session.query(Translation).filter(Translation.current.is_(None)).count() == 3
