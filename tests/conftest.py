import json

import pytest
from PIL import Image

from models.schemas import LanguageMode, QuizConfig


class FakeDocument:
    """Stands in for data.loader.PDFDocument"""

    def __init__(self, page_texts):
        self.page_texts = list(page_texts)
        self.text_requests = []
        self.rendered = []
        self.closed = False

    @property
    def page_count(self):
        return len(self.page_texts)

    def get_page_text(self, page_number):
        self.text_requests.append(page_number)
        return self.page_texts[page_number - 1]

    def render_page(self, page_number, scale):
        self.rendered.append((page_number, scale))
        return Image.new("RGB", (20, 20), "white")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class FakeRecognizer:
    def __init__(self, text="Recognized text from a scanned page of the book.", error=None):
        self.text = text
        self.error = error
        self.languages = []

    def recognize(self, image, language):
        self.languages.append(language)
        if self.error is not None:
            raise self.error
        return self.text


class FakeClient:
    def __init__(self, response="[]", error=None):
        self.response = response
        self.error = error
        self.prompts = []

    def generate(self, prompt, model_name=None, api_key=None, cancel=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def long_text(page_number):
    return f"Page {page_number} explains photosynthesis in green plants in detail."


def make_record(n=1, **overrides):
    record = {
        "question": f"What is concept {n}?",
        "questionTranslation": f"अवधारणा {n} क्या है?",
        "translationLanguage": "Hindi",
        "options": [f"Answer {n}", "Wrong A", "Wrong B", "Wrong C"],
        "answer": f"Answer {n}",
        "context": f"Quote about concept {n}.",
        "type": "Multiple Choice",
        "language": "English",
    }
    record.update(overrides)
    return record


def records_json(count, **overrides):
    return json.dumps([make_record(i, **overrides) for i in range(1, count + 1)], ensure_ascii=False)


@pytest.fixture
def bilingual_config():
    return QuizConfig(question_count=3, language_mode=LanguageMode.BILINGUAL)


@pytest.fixture
def english_config():
    return QuizConfig(question_count=3, language_mode=LanguageMode.ENGLISH)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GEMINI_MODEL", "GEMINI_MODEL_NAME"):
        monkeypatch.delenv(name, raising=False)
