"""
Translation providers.

A translation provider supplies localized route components (area prefixes,
route prefixes, route urls) keyed by a translation key and a culture name.
Waymark only keeps the ordered provider list and reports the cultures they
cover; resolving translations is the route compiler's job.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional


class TranslationProvider(ABC):
    """Base class for translation providers."""

    @property
    @abstractmethod
    def culture_names(self) -> Iterable[str]:
        """Culture names this provider has translations for."""

    @abstractmethod
    def get_translation(self, key: str, culture_name: str) -> Optional[str]:
        """Translation for ``key`` in ``culture_name``, or None."""


class FluentTranslationProvider(TranslationProvider):
    """
    In-memory provider filled through a chainable API.

    Example:
        provider = (
            FluentTranslationProvider()
            .add("es", "Users_Index_RouteUrl", "usuarios")
            .add_all("fr", {"Users_Index_RouteUrl": "utilisateurs"})
        )
    """

    def __init__(self):
        self._translations: Dict[str, Dict[str, str]] = {}

    @property
    def culture_names(self) -> List[str]:
        return list(self._translations)

    def add(self, culture_name: str, key: str, value: str) -> "FluentTranslationProvider":
        self._translations.setdefault(culture_name, {})[key] = value
        return self

    def add_all(self, culture_name: str, translations: Mapping[str, str]) -> "FluentTranslationProvider":
        self._translations.setdefault(culture_name, {}).update(translations)
        return self

    def get_translation(self, key: str, culture_name: str) -> Optional[str]:
        return self._translations.get(culture_name, {}).get(key)
