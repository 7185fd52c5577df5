"""Qt-backed editor host: documents, file handles, notifications and workspace."""

from .notifications import NotificationCenter
from .qt_document import QtEditorDocument
from .qt_file import QtFile
from .workspace import Workspace, grammar_for_path

__all__ = [
    "NotificationCenter",
    "QtEditorDocument",
    "QtFile",
    "Workspace",
    "grammar_for_path",
]
