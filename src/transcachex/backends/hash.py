"""Backend storing all translations of an attribute in one hash column."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
from collections.abc import Iterator
from typing import Any

from ..backend import Backend

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class HashBackend(Backend):
    """Translations kept as ``{locale: value}`` in the record column named
    after the attribute.

    Values are stringified on read and write (``None`` is kept as ``None``).
    Declaring attributes with this backend initialises their columns to an
    empty dict on new records and drops blank values before each save.
    """

    @property
    def translations(self) -> dict[str, Any]:
        return self.model.columns.get(self.attribute) or {}

    def read(self, locale: str, **options: Any) -> str | None:
        value = self.translations.get(locale)
        return None if value is None else str(value)

    def write(self, locale: str, value: Any, **options: Any) -> str | None:
        value = None if value is None else str(value)
        self.model.columns.setdefault(self.attribute, {})[locale] = value
        return value

    def locales(self) -> Iterator[str]:
        """Locales with a stored value."""
        return (locale for locale, value in self.translations.items() if value is not None)

    @classmethod
    def setup_model(cls, model_class: type, attributes: list[str], **options: Any):
        attributes = list(attributes)

        def initialize_columns(record, **_):
            for attribute in attributes:
                record.columns[attribute] = {}

        def prune_blank(record, **_):
            for attribute in attributes:
                column = record.columns.get(attribute) or {}
                blank = [locale for locale, value in column.items() if _is_blank(value)]
                for locale in blank:
                    del column[locale]
                if blank:
                    logger.debug(f"Dropped blank {attribute} translations: {blank}")

        model_class.register_hook("initialize", initialize_columns)
        model_class.register_hook("before_save", prune_blank)
