"""Current-locale context used by translated attribute accessors."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from .config import get_config

logger = logging.getLogger(__name__)

_current_locale: ContextVar[str | None] = ContextVar("transcachex_locale", default=None)


class InvalidLocale(ValueError):
    """Raised when a locale is not among the configured available locales."""


def normalize_locale(locale: str) -> str:
    """Normalize a locale tag: ``" pt_BR "`` -> ``"pt-BR"``."""
    return str(locale).strip().replace("_", "-")


def validate_locale(locale: str) -> str:
    """Normalize ``locale`` and check it against the configured locales."""
    locale = normalize_locale(locale)
    available = get_config().available_locales
    if available and locale not in available:
        raise InvalidLocale(f"{locale!r} is not one of {list(available)}")
    return locale


def get_locale() -> str:
    """Locale of the current context, or the configured default."""
    locale = _current_locale.get()
    return locale if locale is not None else get_config().default_locale


def set_locale(locale: str | None) -> None:
    """Set the locale of the current context; ``None`` restores the default."""
    _current_locale.set(None if locale is None else validate_locale(locale))


@contextmanager
def with_locale(locale: str) -> Iterator[str]:
    """Temporarily switch the current locale.

    Example:
        >>> with with_locale("fr"):
        ...     article.title  # read in French
    """
    token = _current_locale.set(validate_locale(locale))
    try:
        yield _current_locale.get()
    finally:
        _current_locale.reset(token)
