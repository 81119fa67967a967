"""Storage backends for translated attributes."""

from ..backend import NullBackend
from .hash import HashBackend
from .table import TableBackend, TranslationTable

__all__ = ["HashBackend", "NullBackend", "TableBackend", "TranslationTable"]
