"""Configuration settings for the quiz generator"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent.parent

# Gemini API
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com")
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "120"))

# Env names checked in order, first non-empty value wins
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
MODEL_ENV_VARS = ("GEMINI_MODEL", "GEMINI_MODEL_NAME")

# Prompt
# Combined page text is cut to this many characters before it goes into the prompt
MAX_PROMPT_CHARS = int(os.getenv("MAX_PROMPT_CHARS", "30000"))

# OCR
# Pages whose native text has fewer non-whitespace characters than this are OCR'd
OCR_MIN_CHARS = 30
OCR_RENDER_SCALE = 1.5
TESSERACT_CMD = os.getenv("TESSERACT_CMD")

# UI defaults
DEFAULT_PAGE_WINDOW = 10
MAX_QUESTION_COUNT = 20

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def _first_env(names) -> str:
    for name in names:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return ""


def get_api_key() -> str:
    """Read the Gemini API key at call time (empty string if unset)"""
    return _first_env(API_KEY_ENV_VARS)


def get_model_name() -> str:
    """Read the Gemini model name at call time"""
    return _first_env(MODEL_ENV_VARS) or DEFAULT_GEMINI_MODEL
