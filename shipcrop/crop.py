"""
Crop label pages and stamp the SKU found in their text.

Resizing and stamping are separate page operations. Stamping is best
effort: a page with no SKU, or no readable text, is left as cropped.
"""

import io
import logging
import re
from typing import Callable, Optional

import fitz  # PyMuPDF
from pypdf import PdfReader, PdfWriter, Transformation
from pypdf.generic import RectangleObject

from .cords import CropRegion, to_page_box
from .errors import TextLayerUnavailable
from .loader import SourceDocument, TextDocument

LOGGER = logging.getLogger(__name__)

SKU_PATTERN = re.compile(r"SKU:?\s*([A-Za-z0-9\-_]+)", re.IGNORECASE)
SKU_OFFSET = 10
SKU_FONT = "helv"
SKU_FONT_SIZE = 10
SKU_COLOR = (0, 0, 0)


def apply_region(page, region: CropRegion):
    """Set MediaBox and CropBox of ``page`` to ``region``. Returns the page box."""
    page_height = float(page.mediabox.height)
    x, y, width, height = to_page_box(region, page_height)
    page.mediabox = RectangleObject([x, y, x + width, y + height])
    page.cropbox = RectangleObject([x, y, x + width, y + height])
    return x, y, width, height


def find_sku(text: str) -> Optional[str]:
    match = SKU_PATTERN.search(text or "")
    return match.group(1) if match else None


def read_sku(text_doc: Optional[TextDocument], index: int) -> Optional[str]:
    if text_doc is None:
        return None
    try:
        text = text_doc.page_text(index)
    except TextLayerUnavailable as exc:
        LOGGER.warning("Skipping SKU for page %d: %s", index, exc)
        return None
    return find_sku(text)


def _text_overlay(text, width, height):
    doc = fitz.open()
    try:
        page = doc.new_page(width=width, height=height)
        # fitz measures y from the top; baseline sits SKU_OFFSET above the bottom edge
        page.insert_text(
            fitz.Point(SKU_OFFSET, height - SKU_OFFSET),
            text,
            fontname=SKU_FONT,
            fontsize=SKU_FONT_SIZE,
            color=SKU_COLOR,
        )
        data = doc.tobytes()
    finally:
        doc.close()
    return PdfReader(io.BytesIO(data)).pages[0]


def stamp_sku(page, sku: str) -> None:
    """Draw ``SKU: <sku>`` 10 units right and up from the page's lower-left corner."""
    box = page.mediabox
    overlay = _text_overlay(f"SKU: {sku}", float(box.width), float(box.height))
    page.merge_transformed_page(
        overlay, Transformation().translate(float(box.left), float(box.bottom))
    )


def crop_pages(
    source: SourceDocument,
    region: Optional[CropRegion],
    keep: Optional[Callable[[int], bool]] = None,
    text_doc: Optional[TextDocument] = None,
) -> PdfWriter:
    """
    Copy the pages of ``source`` into a new document.

    ``region`` None leaves page boxes untouched. Pages rejected by ``keep``
    are left out entirely. With ``text_doc`` each page gets its SKU stamped
    when one is found.
    """
    writer = PdfWriter()
    stamped = 0
    for i, src_page in enumerate(source.pages):
        if keep is not None and not keep(i):
            continue
        page = writer.add_page(src_page)
        if region is not None:
            apply_region(page, region)
        sku = read_sku(text_doc, i)
        if not sku:
            continue
        try:
            stamp_sku(page, sku)
        except Exception as exc:
            LOGGER.warning("Skipping SKU stamp for page %d: %s", i, exc)
            continue
        stamped += 1
    LOGGER.debug(
        "Cropped %d pages, stamped %d SKUs", len(writer.pages), stamped
    )
    return writer
