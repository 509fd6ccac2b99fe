"""Helpers that build small PDFs in memory."""
import fitz
import pytest

A4 = (595, 842)


def make_pdf(texts, size=A4, at=(72, 72)):
    """One page per entry of ``texts``; ``None`` makes a page without text."""
    doc = fitz.open()
    for text in texts:
        page = doc.new_page(width=size[0], height=size[1])
        if text:
            page.insert_text(fitz.Point(*at), text, fontname="helv", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


def page_words(data, index):
    with fitz.open(stream=data, filetype="pdf") as doc:
        return doc.load_page(index).get_text("words")


def page_texts(data):
    with fitz.open(stream=data, filetype="pdf") as doc:
        return [" ".join(w[4] for w in page.get_text("words")) for page in doc]


@pytest.fixture
def pdf_factory():
    return make_pdf
