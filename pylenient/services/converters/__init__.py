"""Converter provider and the bundled lenient JS / JSON converters."""

from .js_converter import build_js_converters
from .json_converter import build_json_converters
from .registry import ConverterRegistry, default_registry

__all__ = ["ConverterRegistry", "build_js_converters", "build_json_converters", "default_registry"]
