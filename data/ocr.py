"""Tesseract OCR for pages with no usable native text"""

import pytesseract
from PIL import Image

from models.schemas import LanguageMode
from config.settings import TESSERACT_CMD
import logging

logger = logging.getLogger(__name__)

if TESSERACT_CMD:
    pytesseract.pytesseract.tesseract_cmd = TESSERACT_CMD


def ocr_language_code(language_mode: LanguageMode) -> str:
    """Tesseract language hint for a quiz language mode"""
    if language_mode == LanguageMode.ENGLISH:
        return "eng"
    if language_mode == LanguageMode.HINDI:
        return "hin"
    return "eng+hin"


class TesseractRecognizer:
    """Runs pytesseract on a rendered page image"""

    def __init__(self, config: str = ""):
        self.config = config

    def recognize(self, image: Image.Image, language: str) -> str:
        """
        Return recognized text.

        Raises pytesseract.TesseractError (or TesseractNotFoundError) on failure;
        the caller decides whether that is fatal.
        """
        text = pytesseract.image_to_string(image, lang=language, config=self.config)
        return text.strip()
