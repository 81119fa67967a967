"""Library-wide configuration for translated attributes."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class TranslationConfig:
    """Defaults applied when attributes are declared and locales resolved.

    Args:
        default_locale: Locale used when none is set in the current context
        available_locales: Accepted locales; empty means any locale is accepted
        cache: Whether ``translates`` wraps backends in a cache by default
    """

    default_locale: str = "en"
    available_locales: tuple[str, ...] = field(default_factory=tuple)
    cache: bool = True

    def __post_init__(self):
        if isinstance(self.available_locales, str):
            self.available_locales = tuple(
                part.strip() for part in self.available_locales.split(",") if part.strip()
            )
        else:
            self.available_locales = tuple(self.available_locales)

        if self.available_locales and self.default_locale not in self.available_locales:
            raise ValueError(
                f"default_locale {self.default_locale!r} is not one of "
                f"available_locales {list(self.available_locales)}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "TranslationConfig":
        """Create config from a dictionary, ignoring unknown keys."""
        known = {"default_locale", "available_locales", "cache"}
        unknown = set(config_dict) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    @classmethod
    def from_env(cls) -> "TranslationConfig":
        """Create config from ``TRANSCACHEX_*`` environment variables."""
        return cls(
            default_locale=os.getenv("TRANSCACHEX_DEFAULT_LOCALE", "en"),
            available_locales=os.getenv("TRANSCACHEX_AVAILABLE_LOCALES", ""),
            cache=os.getenv("TRANSCACHEX_CACHE", "true").strip().lower() in _TRUE_VALUES,
        )


_config: TranslationConfig | None = None


def get_config() -> TranslationConfig:
    """Return the active config, reading the environment on first use."""
    global _config
    if _config is None:
        _config = TranslationConfig.from_env()
    return _config


def configure(**kwargs: Any) -> TranslationConfig:
    """Override fields of the active config and return the new config."""
    global _config
    _config = replace(get_config(), **kwargs)
    logger.info(f"Translation config updated: {_config}")
    return _config


def reset_config() -> None:
    """Forget the active config so the environment is read again."""
    global _config
    _config = None
