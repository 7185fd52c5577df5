from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from pylenient.domain.errors import UnknownLanguageError
from pylenient.domain.interfaces import IConverterProvider
from pylenient.domain.models import ConverterSet
from pylenient.services.converters.js_converter import build_js_converters
from pylenient.services.converters.json_converter import build_json_converters
from pylenient.utils.constants import DEFAULT_JSON_INDENT, LANGUAGE_JS, LANGUAGE_JSON

ConverterFactory = Callable[[], ConverterSet]


@dataclass
class ConverterRegistry(IConverterProvider):
    """
    Instance-based converter provider (no globals).

    Each language's ConverterSet is built on first request and then shared by
    every document; registering a factory again replaces the cached set.
    """

    _factories: dict[str, ConverterFactory] = field(default_factory=dict)
    _built: dict[str, ConverterSet] = field(default_factory=dict)

    def register(self, language: str, factory: ConverterFactory) -> None:
        self._factories[language] = factory
        self._built.pop(language, None)

    def get_converters(self, language: str) -> ConverterSet:
        cached = self._built.get(language)
        if cached is not None:
            return cached
        try:
            factory = self._factories[language]
        except KeyError:
            raise UnknownLanguageError(language) from None
        converters = factory()
        self._built[language] = converters
        return converters

    def languages(self) -> list[str]:
        return sorted(self._factories)


def default_registry(*, json_indent: int = DEFAULT_JSON_INDENT) -> ConverterRegistry:
    registry = ConverterRegistry()
    registry.register(LANGUAGE_JS, build_js_converters)
    registry.register(LANGUAGE_JSON, lambda: build_json_converters(indent=json_indent))
    return registry
