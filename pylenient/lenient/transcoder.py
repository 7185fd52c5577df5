from __future__ import annotations

from collections.abc import Callable

from pylenient.domain.interfaces import IEditorDocument
from pylenient.domain.models import Convert


def transcode_document(
    document: IEditorDocument,
    convert: Convert,
    on_error: Callable[[Exception], None],
) -> None:
    """
    Replace the document's whole text with `convert(text)`.

    On failure the text is left as it was, `on_error` is called and the error
    is re-raised: the caller decides whether the dialect switch stands.
    """
    try:
        converted = convert(document.get_text())
    except Exception as e:
        on_error(e)
        raise
    document.set_text(converted)
