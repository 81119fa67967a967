"""Pytest configuration and fixtures for transcachex tests."""
import shutil
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from transcachex import Backend, TranslatableRecord, reset_config, set_locale


class StubBackend(Backend):
    """Backend delegating reads and writes to a per-instance mock."""

    def __init__(self, model, attribute, **options):
        super().__init__(model, attribute, **options)
        self.double = Mock(name=f"{attribute}_backend")

    def read(self, locale, **options):
        return self.double.read(locale, **options)

    def write(self, locale, value, **options):
        return self.double.write(locale, value, **options)


@pytest.fixture(autouse=True)
def clean_translation_state(monkeypatch):
    """Isolate tests from the environment, the active config and the locale."""
    for name in (
        "TRANSCACHEX_DEFAULT_LOCALE",
        "TRANSCACHEX_AVAILABLE_LOCALES",
        "TRANSCACHEX_CACHE",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    set_locale(None)
    yield
    set_locale(None)
    reset_config()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def stub_backend_class():
    """A fresh StubBackend subclass, safe to customise per test."""

    class FreshStubBackend(StubBackend):
        pass

    return FreshStubBackend


@pytest.fixture
def record_class():
    """A fresh TranslatableRecord subclass with no declarations."""

    class Article(TranslatableRecord):
        pass

    return Article


@pytest.fixture
def options():
    return {"these": "options"}
