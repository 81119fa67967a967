"""Backend interface for translated attributes.

A backend stores the values of one translated attribute of one record across
locales. Concrete storage strategies live in :mod:`transcachex.backends`.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class CachePolicy(Enum):
    """How a :class:`~transcachex.decorator.CachedBackend` treats reads and writes.

    - ``PASS_THROUGH``: writes always reach the backend, reads are memoized
      after the first backend call.
    - ``CACHE_ONLY``: writes land in the cache only, reads are served from the
      cache only. The backend is never called.
    """

    PASS_THROUGH = "pass_through"
    CACHE_ONLY = "cache_only"


class Backend(ABC):
    """Storage strategy for one translated attribute of one record.

    Args:
        model: Record the attribute belongs to
        attribute: Name of the translated attribute
        **options: Backend-specific options from the attribute declaration
    """

    def __init__(self, model: Any, attribute: str, **options: Any):
        self.model = model
        self.attribute = attribute
        self.options = options

    @abstractmethod
    def read(self, locale: str, **options: Any) -> Any:
        """Return the value stored for ``locale``."""

    @abstractmethod
    def write(self, locale: str, value: Any, **options: Any) -> Any:
        """Store ``value`` for ``locale`` and return the stored value."""

    def writes_to_cache(self) -> bool:
        """Whether a caching wrapper should keep values in its cache only."""
        return False

    def new_cache(self) -> MutableMapping:
        """Build an empty cache container for a caching wrapper."""
        return {}

    @classmethod
    def setup_model(cls, model_class: type, attributes: list[str], **options: Any):
        """Prepare ``model_class`` when ``attributes`` are declared with this backend."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(attribute={self.attribute!r})"


class NullBackend(Backend):
    """Backend that stores nothing; reads and writes return ``None``."""

    def read(self, locale: str, **options: Any) -> None:
        return None

    def write(self, locale: str, value: Any, **options: Any) -> None:
        return None
