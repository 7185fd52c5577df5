"""Domain layer: errors, ports (protocols) and simple models (dataclasses)."""

from .errors import LenientError, ParseError, UnknownLanguageError, WriteFailure
from .interfaces import (
    IConfigService,
    IConverterProvider,
    IDisposable,
    IEditorDocument,
    IFileHandle,
    INotificationCenter,
    IReadStream,
    IWriteStream,
)
from .models import ConverterSet, Grammar, Notification, SwitchOutcome

__all__ = [
    "LenientError",
    "ParseError",
    "UnknownLanguageError",
    "WriteFailure",
    "IConfigService",
    "IConverterProvider",
    "IDisposable",
    "IEditorDocument",
    "IFileHandle",
    "INotificationCenter",
    "IReadStream",
    "IWriteStream",
    "ConverterSet",
    "Grammar",
    "Notification",
    "SwitchOutcome",
]
