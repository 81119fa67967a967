"""transcachex: Per-locale caching for translated record attributes.

Each translated attribute delegates reads and writes to a pluggable backend
(hash column, separate Arrow table, ...). ``CachedBackend`` wraps any backend
to memoize reads per locale, and cached attributes are reset automatically
whenever their record is reloaded or saved.

Basic usage:
    >>> from transcachex import TranslatableRecord, HashBackend, with_locale
    >>>
    >>> class Article(TranslatableRecord):
    ...     pass
    >>>
    >>> # Declare translated attributes (cached by default)
    >>> Article.translates("title", "content", backend=HashBackend)
    >>>
    >>> article = Article.create(title="Hello")
    >>> with with_locale("fr"):
    ...     article.title = "Bonjour"
    >>> article.save()  # clears every cache attached to the article
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"
__version__ = "0.1.0"

from .backend import Backend, CachePolicy, NullBackend
from .backends import HashBackend, TableBackend, TranslationTable
from .config import TranslationConfig, configure, get_config, reset_config
from .decorator import CachedBackend
from .locales import InvalidLocale, get_locale, set_locale, with_locale
from .record import LifecycleBinder, TranslatableRecord

__all__ = [
    "Backend",
    "CachePolicy",
    "CachedBackend",
    "HashBackend",
    "InvalidLocale",
    "LifecycleBinder",
    "NullBackend",
    "TableBackend",
    "TranslatableRecord",
    "TranslationConfig",
    "TranslationTable",
    "configure",
    "get_config",
    "get_locale",
    "reset_config",
    "set_locale",
    "with_locale",
    "__version__",
]
