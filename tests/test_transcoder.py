from __future__ import annotations

import pytest

from conftest import FakeDocument, failing
from pylenient.domain.errors import ParseError
from pylenient.lenient.transcoder import transcode_document


def test_transcode_replaces_text():
    doc = FakeDocument(text="abc")
    transcode_document(doc, str.upper, on_error=pytest.fail)
    assert doc.text == "ABC"
    assert doc.modified is True


def test_failed_transcode_keeps_text_and_reraises():
    errors = []
    doc = FakeDocument(text="abc", modified=True)

    with pytest.raises(ParseError) as exc_info:
        transcode_document(doc, failing, on_error=errors.append)

    assert doc.text == "abc"
    assert errors == [exc_info.value]
