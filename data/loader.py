"""PDF access with PyMuPDF: open from bytes, per-page text and page rendering"""

import hashlib
from typing import Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image

from models.errors import InvalidDocumentError
from models.schemas import PageRange
from config.settings import DEFAULT_PAGE_WINDOW
import logging

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


def is_pdf(data: bytes, filename: Optional[str] = None) -> bool:
    """Cheap file-type check done before handing bytes to PyMuPDF"""
    if filename is not None and not filename.lower().endswith(".pdf"):
        return False
    # Header may be preceded by junk bytes, but must sit in the first 1024
    return PDF_MAGIC in data[:1024]


def upload_fingerprint(filename: str, data: bytes) -> str:
    """Identity of an upload; same name with different content is a new file"""
    return f"{filename}:{len(data)}:{hashlib.sha256(data).hexdigest()}"


class PDFDocument:
    """Read-only handle over an opened PDF. Pages are numbered from 1."""

    def __init__(self, doc: "fitz.Document"):
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def _page(self, page_number: int) -> "fitz.Page":
        if not 1 <= page_number <= self.page_count:
            raise IndexError(f"Page {page_number} out of range 1-{self.page_count}")
        return self._doc.load_page(page_number - 1)

    def get_page_text(self, page_number: int) -> str:
        """Native text of a page, lines joined with single spaces"""
        text = self._page(page_number).get_text("text")
        return " ".join(line.strip() for line in text.splitlines() if line.strip())

    def render_page(self, page_number: int, scale: float) -> Image.Image:
        """Render a page to a fresh RGB image; the pixmap is dropped right away"""
        page = self._page(page_number)
        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

    def close(self) -> None:
        self._doc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_document(data: bytes, filename: Optional[str] = None) -> PDFDocument:
    """
    Open PDF bytes.

    Raises:
        InvalidDocumentError: not a PDF, corrupt, encrypted or empty
    """
    if not data or not is_pdf(data, filename):
        raise InvalidDocumentError("Please upload a valid PDF file.")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        logger.error(f"Failed to open PDF: {e}")
        raise InvalidDocumentError() from e

    if doc.needs_pass or doc.page_count == 0:
        logger.error(f"PDF is encrypted or has no pages (needs_pass={doc.needs_pass})")
        doc.close()
        raise InvalidDocumentError()

    return PDFDocument(doc)


def inspect_document(data: bytes, filename: Optional[str] = None) -> Tuple[int, PageRange]:
    """Return page count and the default range shown after upload"""
    with open_document(data, filename) as doc:
        total = doc.page_count
    logger.info(f"PDF ready: {total} pages")
    return total, PageRange(start=1, end=min(total, DEFAULT_PAGE_WINDOW))
