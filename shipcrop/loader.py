"""Decode input bytes into the structural and text views of a PDF."""

import io
import logging
from dataclasses import dataclass

import fitz  # PyMuPDF
from pypdf import PdfReader, PdfWriter

from .errors import MalformedDocument, SerializationFailure, TextLayerUnavailable

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """Pages of one decoded PDF. Pages are copied out, never edited here."""

    data: bytes
    reader: PdfReader

    @property
    def pages(self):
        return self.reader.pages

    @property
    def page_count(self):
        return len(self.reader.pages)


def load_document(data: bytes, index=None) -> SourceDocument:
    try:
        reader = PdfReader(io.BytesIO(data))
        # page tree is parsed lazily; walk it now so broken files fail here
        len(reader.pages)
    except Exception as exc:
        name = "Input" if index is None else f"Input {index}"
        raise MalformedDocument(f"{name} is not a readable PDF: {exc}", index) from exc
    return SourceDocument(data=data, reader=reader)


class TextDocument:
    """Read-only text view of the same bytes as a SourceDocument."""

    def __init__(self, data: bytes):
        try:
            self.doc = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise TextLayerUnavailable(f"Could not decode text layer: {exc}") from exc

    @property
    def page_count(self):
        return self.doc.page_count

    def page_text(self, index: int) -> str:
        """All words of a page, joined with single spaces in extraction order."""
        try:
            page = self.doc.load_page(index)
            words = page.get_text("words")
        except Exception as exc:
            raise TextLayerUnavailable(f"No text for page {index}: {exc}") from exc
        if not words:
            raise TextLayerUnavailable(f"Page {index} has no text layer")
        return " ".join(w[4] for w in words)

    def close(self):
        self.doc.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def open_text_document(data: bytes):
    """Return a TextDocument, or None when the bytes have no usable text view."""
    try:
        return TextDocument(data)
    except TextLayerUnavailable as exc:
        LOGGER.warning("SKU lookup disabled for this run: %s", exc)
        return None


def serialize(writer: PdfWriter) -> bytes:
    buf = io.BytesIO()
    try:
        writer.write(buf)
    except Exception as exc:
        raise SerializationFailure(f"Could not write output PDF: {exc}") from exc
    return buf.getvalue()
