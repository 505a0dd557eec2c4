from typing import Callable, List, Optional, Tuple

from models.cancellation import CancelToken, check
from models.errors import GenerationCancelled, PageRangeError
from models.schemas import ExtractedPageText, LanguageMode, PageRange, PageSource
from data.loader import open_document
from data.ocr import ocr_language_code
from config.settings import OCR_MIN_CHARS, OCR_RENDER_SCALE
import logging

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def needs_recognition(text: Optional[str], min_chars: int = OCR_MIN_CHARS) -> bool:
    """True when the page looks scanned: fewer than min_chars non-whitespace characters"""
    if not text:
        return True
    return len("".join(text.split())) < min_chars


def page_marker(page_number: int) -> str:
    return f"--- Page {page_number} ---"


def combine_pages(pages: List[ExtractedPageText]) -> str:
    """Join page texts into one blob, each page preceded by its marker"""
    return "".join(f"{page_marker(p.page_number)}\n{p.text}\n\n" for p in pages)


class PageTextExtractor:
    """Extracts text page by page, falling back to OCR for image-only pages"""

    def __init__(
        self,
        recognizer=None,
        min_chars: int = OCR_MIN_CHARS,
        render_scale: float = OCR_RENDER_SCALE,
    ):
        if recognizer is None:
            from data.ocr import TesseractRecognizer
            recognizer = TesseractRecognizer()
        self.recognizer = recognizer
        self.min_chars = min_chars
        self.render_scale = render_scale

    def _report(self, progress: Optional[ProgressCallback], message: str):
        logger.info(message)
        if progress:
            progress(message)

    def _recognize_page(self, document, page_number: int, language: str, cancel: Optional[CancelToken]) -> str:
        """Render one page and OCR it. Returns "" when recognition fails."""
        image = None
        try:
            check(cancel, f"rendering page {page_number}")
            image = document.render_page(page_number, self.render_scale)
            check(cancel, f"OCR of page {page_number}")
            return self.recognizer.recognize(image, language) or ""
        except GenerationCancelled:
            raise
        except Exception as e:
            logger.error(f"OCR failed on page {page_number}: {e}")
            return ""
        finally:
            if image is not None:
                image.close()

    def extract_pages(
        self,
        document,
        page_range: PageRange,
        language_mode: LanguageMode,
        cancel: Optional[CancelToken] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> List[ExtractedPageText]:
        """
        Extract every page of an already clamped range, in ascending order.

        Pages are processed one at a time so at most one rendered image and one
        OCR call are alive at once.
        """
        language = ocr_language_code(language_mode)
        pages = []

        for page_number in page_range.pages():
            check(cancel, f"reading page {page_number}")
            self._report(progress, f"Extracting text from page {page_number}...")
            text = document.get_page_text(page_number)
            source = PageSource.NATIVE

            if needs_recognition(text, self.min_chars):
                self._report(progress, f"Running OCR on page {page_number}...")
                recognized = self._recognize_page(document, page_number, language, cancel)
                if recognized:
                    text = recognized
                    source = PageSource.RECOGNIZED
                else:
                    logger.warning(f"Page {page_number}: keeping native text ({len(text or '')} chars)")

            pages.append(ExtractedPageText(page_number=page_number, text=text or "", source=source))

        ocr_count = sum(1 for p in pages if p.source == PageSource.RECOGNIZED)
        logger.info(f"✓ Extracted {len(pages)} pages ({ocr_count} via OCR)")
        return pages

    def extract(
        self,
        data: bytes,
        page_range: PageRange,
        language_mode: LanguageMode,
        cancel: Optional[CancelToken] = None,
        progress: Optional[ProgressCallback] = None,
        filename: Optional[str] = None,
    ) -> Tuple[str, List[ExtractedPageText], PageRange]:
        """
        Open PDF bytes and extract a page range.

        Returns (combined text, per-page texts, clamped range). The combined
        text is not truncated here.

        Raises:
            InvalidDocumentError: the PDF cannot be opened
            PageRangeError: nothing left of the range after clamping
            GenerationCancelled: the cancel token fired
        """
        check(cancel, "opening the document")
        with open_document(data, filename) as document:
            clamped = page_range.clamp(document.page_count)
            if clamped.page_count == 0:
                raise PageRangeError(
                    f"Page range {page_range} is outside the document (1-{document.page_count})."
                )
            self._report(progress, f"Reading pages {clamped.start} to {clamped.end}...")
            pages = self.extract_pages(document, clamped, language_mode, cancel, progress)

        return combine_pages(pages), pages, clamped
