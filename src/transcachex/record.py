"""Records with translated attributes and cache invalidation on lifecycle events.

``TranslatableRecord`` is a small in-memory host: it keeps persisted state in
``columns``, declares translated attributes with :meth:`TranslatableRecord.translates`
and dispatches lifecycle hooks (``initialize``, ``before_save``, ``save``,
``reload``). :class:`LifecycleBinder` hooks cached backends into that dispatch.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import copy
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .backend import Backend
from .config import get_config
from .decorator import CachedBackend
from .locales import get_locale, validate_locale

logger = logging.getLogger(__name__)

HOOK_EVENTS = ("initialize", "before_save", "save", "reload")

_record_ids = itertools.count(1)


class LifecycleBinder:
    """Clears every cached backend of a record when lifecycle events fire.

    Binding is additive: each cached attribute declaration binds its own hook
    and all bound hooks run on every event.

    Args:
        events: Lifecycle events that invalidate caches
    """

    EVENTS = ("reload", "save")

    def __init__(self, events: tuple[str, ...] = EVENTS):
        self.events = tuple(events)

    def bind(self, record_class: type["TranslatableRecord"]) -> None:
        """Register :meth:`clear_caches` on each event of ``record_class``."""
        for event in self.events:
            record_class.register_hook(event, self.clear_caches)

    @staticmethod
    def clear_caches(record: "TranslatableRecord", **options: Any) -> None:
        """Reset the caches of all cached backends attached to ``record``."""
        backends = record.cached_backends()
        for backend in backends:
            backend.clear_cache()
        logger.debug(f"Cleared {len(backends)} backend cache(s) on {record!r}")


@dataclass
class AttributeDeclaration:
    """Declaration of one translated attribute."""

    name: str
    backend_class: type[Backend]
    cache: bool = True
    options: dict[str, Any] = field(default_factory=dict)

    def build(self, model: "TranslatableRecord") -> Backend | CachedBackend:
        backend = self.backend_class(model, self.name, **self.options)
        return CachedBackend(backend) if self.cache else backend


class TranslatedAttribute:
    """Descriptor reading and writing an attribute in the current locale."""

    def __init__(self, name: str):
        self.name = name

    def __get__(self, instance: "TranslatableRecord | None", owner: type) -> Any:
        if instance is None:
            return self
        return instance.read_translation(self.name)

    def __set__(self, instance: "TranslatableRecord", value: Any) -> None:
        instance.write_translation(self.name, value)


class TranslatableRecord:
    """In-memory record whose translated attributes delegate to backends.

    Example:
        >>> class Article(TranslatableRecord):
        ...     pass
        >>> Article.translates("title", "content", backend=HashBackend)
        >>> article = Article(title="Hello")
        >>> article.save()
        >>> with with_locale("fr"):
        ...     article.title = "Bonjour"
        >>> article.reload()  # drops the unsaved French title and every cache
    """

    _hooks: dict[str, list[Callable[..., None]]] = {event: [] for event in HOOK_EVENTS}
    _translated: dict[str, AttributeDeclaration] = {}

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        # Copy so declarations on a subclass never leak into its parents
        cls._hooks = {event: list(hooks) for event, hooks in cls._hooks.items()}
        cls._translated = dict(cls._translated)

    def __init__(self, **values: Any):
        self.id = next(_record_ids)
        self.columns: dict[str, Any] = {}
        self.persisted = False
        self._saved_columns: dict[str, Any] = {}
        self._backends: dict[str, Backend | CachedBackend] = {}
        self._changed: dict[str, set[str]] = {}

        self._run_hooks("initialize")
        for name, value in values.items():
            if name in self._translated:
                self.write_translation(name, value)
            else:
                self.columns[name] = value

    @classmethod
    def translates(
        cls,
        *attributes: str,
        backend: type[Backend],
        cache: bool | None = None,
        **backend_options: Any,
    ) -> None:
        """Declare translated attributes stored by ``backend``.

        Args:
            *attributes: Attribute names
            backend: Backend class storing the values
            cache: Wrap each backend in a :class:`CachedBackend`
                (default: configured ``cache`` setting)
            **backend_options: Passed to every backend instance
        """
        cls._require_subclass()
        if not attributes:
            raise ValueError("translates() needs at least one attribute name")
        if not (isinstance(backend, type) and issubclass(backend, Backend)):
            raise TypeError(f"backend must be a Backend subclass, got {backend!r}")
        duplicates = [name for name in attributes if name in cls._translated]
        if duplicates:
            raise ValueError(f"{cls.__name__} already translates {duplicates}")

        if cache is None:
            cache = get_config().cache

        backend.setup_model(cls, list(attributes), **backend_options)

        for name in attributes:
            cls._translated[name] = AttributeDeclaration(
                name=name, backend_class=backend, cache=cache, options=backend_options
            )
            setattr(cls, name, TranslatedAttribute(name))

        if cache:
            LifecycleBinder().bind(cls)

        logger.info(
            f"{cls.__name__} translates {list(attributes)} "
            f"(backend: {backend.__name__}, cache: {cache})"
        )

    @classmethod
    def register_hook(cls, event: str, hook: Callable[..., None]) -> None:
        """Append ``hook(record, **options)`` to the hooks run on ``event``."""
        cls._require_subclass()
        if event not in cls._hooks:
            raise ValueError(f"Unknown lifecycle event {event!r}; expected one of {HOOK_EVENTS}")
        cls._hooks[event].append(hook)

    @classmethod
    def _require_subclass(cls) -> None:
        if cls is TranslatableRecord:
            raise TypeError(
                "Declare translated attributes and hooks on a TranslatableRecord subclass"
            )

    @classmethod
    def translated_attributes(cls) -> list[str]:
        return list(cls._translated)

    def _run_hooks(self, event: str, **options: Any) -> None:
        for hook in self._hooks[event]:
            hook(self, **options)

    def backend_for(self, attribute: str) -> Backend | CachedBackend:
        """Backend of ``attribute`` for this record, built on first access."""
        try:
            declaration = self._translated[attribute]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__} has no translated attribute {attribute!r}"
            ) from None

        backend = self._backends.get(attribute)
        if backend is None:
            backend = declaration.build(self)
            self._backends[attribute] = backend
        return backend

    @property
    def translation_backends(self) -> dict[str, Backend | CachedBackend]:
        """Backends built so far, keyed by attribute."""
        return dict(self._backends)

    def cached_backends(self) -> list[CachedBackend]:
        return [b for b in self._backends.values() if isinstance(b, CachedBackend)]

    def read_translation(self, attribute: str, locale: str | None = None, **options: Any) -> Any:
        """Read ``attribute`` in ``locale`` (default: current locale)."""
        locale = get_locale() if locale is None else validate_locale(locale)
        return self.backend_for(attribute).read(locale, **options)

    def write_translation(
        self, attribute: str, value: Any, locale: str | None = None, **options: Any
    ) -> Any:
        """Write ``attribute`` in ``locale`` (default: current locale)."""
        locale = get_locale() if locale is None else validate_locale(locale)
        result = self.backend_for(attribute).write(locale, value, **options)
        self._changed.setdefault(attribute, set()).add(locale)
        return result

    @property
    def changed(self) -> list[str]:
        """Translated attributes written since the last save or reload."""
        return list(self._changed)

    @property
    def changes(self) -> dict[str, list[str]]:
        """Locales written per attribute since the last save or reload."""
        return {attribute: sorted(locales) for attribute, locales in self._changed.items()}

    def save(self) -> "TranslatableRecord":
        """Persist ``columns`` and run the ``save`` hooks."""
        self._run_hooks("before_save")
        self._saved_columns = copy.deepcopy(self.columns)
        self.persisted = True
        self._changed = {}
        self._run_hooks("save")
        return self

    def reload(self, **options: Any) -> "TranslatableRecord":
        """Restore ``columns`` from the last save and run the ``reload`` hooks.

        Args:
            **options: Passed to the hooks (e.g. ``readonly=True, lock=True``)

        Raises:
            RuntimeError: If the record was never saved
        """
        if not self.persisted:
            raise RuntimeError(f"Cannot reload {self!r}: it was never saved")
        self.columns = copy.deepcopy(self._saved_columns)
        self._changed = {}
        self._run_hooks("reload", **options)
        return self

    @classmethod
    def create(cls, **values: Any) -> "TranslatableRecord":
        """Build and save a record."""
        return cls(**values).save()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"
