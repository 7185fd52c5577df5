"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    COULDNT_CONVERT_FROM_LENIENT,
    COULDNT_CONVERT_TO_LENIENT,
    COULDNT_SAVE_LENIENT_FILE,
    DEFAULT_JSON_INDENT,
    LANGUAGE_JS,
    LANGUAGE_JSON,
    LENIENT_JS_SCOPE,
    LENIENT_JSON_SCOPE,
    STALE_ON_SAVE,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "COULDNT_CONVERT_FROM_LENIENT",
    "COULDNT_CONVERT_TO_LENIENT",
    "COULDNT_SAVE_LENIENT_FILE",
    "DEFAULT_JSON_INDENT",
    "LANGUAGE_JS",
    "LANGUAGE_JSON",
    "LENIENT_JS_SCOPE",
    "LENIENT_JSON_SCOPE",
    "STALE_ON_SAVE",
]
