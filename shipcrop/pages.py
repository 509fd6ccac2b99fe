"""Merging documents and dropping pages by position."""

import logging
from typing import Callable, Sequence

from pypdf import PdfWriter

from .errors import NoInputDocuments
from .loader import SourceDocument, load_document

LOGGER = logging.getLogger(__name__)


def merge_documents(buffers: Sequence[bytes]) -> PdfWriter:
    """
    Append the pages of every buffer, in input order, to one new document.
    Every input is decoded before anything is copied, so a bad input
    aborts the merge without a partial result.
    """
    if not buffers:
        raise NoInputDocuments("Nothing to merge")
    sources = [load_document(data, index=i) for i, data in enumerate(buffers)]
    writer = PdfWriter()
    for source in sources:
        for page in source.pages:
            writer.add_page(page)
    LOGGER.debug(
        "Merged %d documents into %d pages", len(sources), len(writer.pages)
    )
    return writer


def filter_pages(source: SourceDocument, keep: Callable[[int], bool]) -> PdfWriter:
    """Copy the pages whose zero-based index satisfies ``keep``, in order."""
    writer = PdfWriter()
    for i, page in enumerate(source.pages):
        if keep(i):
            writer.add_page(page)
    LOGGER.debug("Kept %d of %d pages", len(writer.pages), source.page_count)
    return writer
