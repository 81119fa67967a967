"""Tests for TranslationTable and TableBackend."""

import pyarrow as pa
import pytest

from transcachex import CachedBackend, TableBackend, TranslationTable
from transcachex.backends.table import SCHEMA


class TestTranslationTable:
    """Test the Arrow translation table."""

    def test_initialization(self):
        table = TranslationTable(lru_size=10)
        assert len(table) == 0
        assert table.table.schema == SCHEMA
        assert table.lru_enabled

    def test_put_and_get(self):
        table = TranslationTable()
        table.put(1, "title", "en", "Hello")
        table.put(1, "title", "fr", "Bonjour")
        table.put(2, "title", "en", "Other")

        assert table.get(1, "title", "en") == "Hello"
        assert table.get(1, "title", "fr") == "Bonjour"
        assert table.get(2, "title", "en") == "Other"
        assert table.get(1, "content", "en") is None
        assert len(table) == 3

    def test_put_replaces_row(self):
        table = TranslationTable(lru_size=0)
        table.put(1, "title", "en", "Hello")
        table.put(1, "title", "en", "Hi")

        assert len(table) == 1
        assert table.get(1, "title", "en") == "Hi"

    def test_put_none_removes_row(self):
        table = TranslationTable()
        table.put(1, "title", "en", "Hello")
        table.put(1, "title", "en", None)

        assert len(table) == 0
        assert table.get(1, "title", "en") is None

    def test_lru_cache(self):
        table = TranslationTable(lru_size=2)
        table.put(1, "title", "en", "Hello")

        assert (1, "title", "en") in table.lru
        assert table.get(1, "title", "en") == "Hello"

    def test_lru_disabled_with_zero_size(self):
        table = TranslationTable(lru_size=0)
        assert not table.lru_enabled
        assert table.lru is None

        table.put(1, "title", "en", "Hello")
        assert table.get(1, "title", "en") == "Hello"

    def test_lru_misses_are_remembered_until_put(self):
        table = TranslationTable()
        assert table.get(1, "title", "en") is None
        table.put(1, "title", "en", "Hello")
        assert table.get(1, "title", "en") == "Hello"

    def test_delete(self):
        table = TranslationTable()
        table.put(1, "title", "en", "Hello")
        table.put(1, "content", "en", "Body")
        table.put(2, "title", "en", "Other")

        assert table.delete(1, "title") == 1
        assert table.get(1, "title", "en") is None
        assert table.get(1, "content", "en") == "Body"

        assert table.delete(1) == 1
        assert len(table) == 1
        assert table.get(2, "title", "en") == "Other"

    def test_locales_for(self):
        table = TranslationTable()
        table.put(1, "title", "en", "Hello")
        table.put(1, "title", "fr", "Bonjour")
        table.put(1, "content", "de", "Inhalt")

        assert table.locales_for(1, "title") == ["en", "fr"]
        assert table.locales_for(3, "title") == []


class TestTablePersistence:
    """Test persistence to Arrow IPC files."""

    def test_save_and_load(self, temp_dir):
        table = TranslationTable()
        table.put(1, "title", "en", "Hello")
        table.put(1, "title", "fr", "Bonjour")

        path = table.save(temp_dir / "nested" / "translations.arrow")
        assert path.exists()
        assert not path.with_name(path.name + ".tmp").exists()

        loaded = TranslationTable.load(path, lru_size=0)
        assert len(loaded) == 2
        assert loaded.get(1, "title", "fr") == "Bonjour"

    def test_saved_file_is_arrow_ipc(self, temp_dir):
        table = TranslationTable()
        table.put(7, "title", "en", "Hello")
        path = table.save(temp_dir / "translations.arrow")

        with pa.OSFile(str(path), "rb") as source:
            read_back = pa.ipc.open_file(source).read_all()

        assert read_back.schema == SCHEMA
        assert read_back.to_pylist() == [
            {"record_id": 7, "attribute": "title", "locale": "en", "value": "Hello"}
        ]

    def test_load_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            TranslationTable.load(temp_dir / "missing.arrow")


class TestTableBackend:
    """Test records backed by a translation table."""

    @pytest.fixture
    def table(self):
        return TranslationTable()

    @pytest.fixture
    def article_class(self, record_class, table):
        record_class.translates("title", backend=TableBackend, table=table)
        return record_class

    def test_requires_table(self, record_class):
        with pytest.raises(ValueError, match="TranslationTable"):
            record_class.translates("title", backend=TableBackend)

    def test_rows_keyed_by_record(self, article_class, table):
        first = article_class.create(title="First")
        second = article_class.create(title="Second")

        assert first.title == "First"
        assert second.title == "Second"
        assert table.get(first.id, "title", "en") == "First"
        assert first.backend_for("title").backend.locales() == ["en"]

    def test_cached_reads_skip_table_until_save(self, article_class, table):
        article = article_class.create(title="Hello")
        backend = article.backend_for("title")
        assert isinstance(backend, CachedBackend)
        assert article.title == "Hello"

        table.put(article.id, "title", "en", "Changed elsewhere")
        assert article.title == "Hello"

        article.save()
        assert article.title == "Changed elsewhere"

    def test_write_returns_stored_value(self, article_class):
        article = article_class()
        assert article.write_translation("title", 12, locale="en") == "12"
        assert article.read_translation("title", locale="en") == "12"
