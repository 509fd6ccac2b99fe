import pytest
from pypdf import PdfWriter

from shipcrop.errors import MalformedDocument, TextLayerUnavailable
from shipcrop.loader import TextDocument, load_document, open_text_document, serialize


def test_load_document(pdf_factory):
    source = load_document(pdf_factory(["a", "b"]))
    assert source.page_count == 2


@pytest.mark.parametrize("data", [b"", b"not a pdf at all", b"%PDF-1.4\ngarbage"])
def test_load_malformed(data):
    with pytest.raises(MalformedDocument):
        load_document(data, index=3)


def test_page_text_joins_words(pdf_factory):
    with TextDocument(pdf_factory(["Ship to  SKU: ABC-123"])) as text_doc:
        assert text_doc.page_text(0) == "Ship to SKU: ABC-123"


def test_page_without_text(pdf_factory):
    with TextDocument(pdf_factory([None])) as text_doc:
        with pytest.raises(TextLayerUnavailable):
            text_doc.page_text(0)


def test_open_text_document_failure_is_not_fatal():
    assert open_text_document(b"not a pdf") is None


def test_serialize_empty_writer():
    data = serialize(PdfWriter())
    assert data.startswith(b"%PDF")
