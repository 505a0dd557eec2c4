"""Pydantic models for quiz configuration, extracted pages and generated questions"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class QuestionType(str, Enum):
    """Question type requested for a quiz"""
    MIXED = "Mixed"
    MULTIPLE_CHOICE = "Multiple Choice"
    SHORT_ANSWER = "Short Answer"


class QuestionKind(str, Enum):
    """Type of a single generated question"""
    MULTIPLE_CHOICE = "Multiple Choice"
    SHORT_ANSWER = "Short Answer"


class LanguageMode(str, Enum):
    ENGLISH = "English"
    HINDI = "Hindi"
    BILINGUAL = "Bilingual"


class RecordLanguage(str, Enum):
    HINDI = "Hindi"
    ENGLISH = "English"
    OTHER = "Other"


class PageSource(str, Enum):
    NATIVE = "native"
    RECOGNIZED = "recognized"


class PageRange(BaseModel):
    """Inclusive, 1-indexed page range"""
    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @property
    def page_count(self) -> int:
        return max(0, self.end - self.start + 1)

    def pages(self) -> range:
        return range(self.start, self.end + 1)

    def clamp(self, total_pages: int) -> "PageRange":
        """Clamp to [1, total_pages] instead of failing on stale UI values"""
        start = min(max(1, self.start), max(1, total_pages))
        end = min(total_pages, self.end)
        return PageRange(start=start, end=end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


class QuizConfig(BaseModel):
    """Configuration for one generation request"""
    model_config = ConfigDict(frozen=True)

    difficulty: Difficulty = Difficulty.MEDIUM
    question_count: int = Field(default=5, ge=1)
    question_type: QuestionType = QuestionType.MIXED
    language_mode: LanguageMode = LanguageMode.BILINGUAL


class ExtractedPageText(BaseModel):
    """Text of one page and whether OCR produced it"""
    page_number: int
    text: str
    source: PageSource = PageSource.NATIVE


_KIND_ALIASES = {
    "multiple choice": QuestionKind.MULTIPLE_CHOICE,
    "multiple-choice": QuestionKind.MULTIPLE_CHOICE,
    "multiplechoice": QuestionKind.MULTIPLE_CHOICE,
    "mcq": QuestionKind.MULTIPLE_CHOICE,
    "short answer": QuestionKind.SHORT_ANSWER,
    "short-answer": QuestionKind.SHORT_ANSWER,
    "shortanswer": QuestionKind.SHORT_ANSWER,
    "short": QuestionKind.SHORT_ANSWER,
}


class QuestionRecord(BaseModel):
    """
    One generated question, as returned by the model.

    Field names follow the JSON schema in the prompt (camelCase aliases),
    python attribute names are snake_case.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str = Field(min_length=1)
    question_translation: Optional[str] = Field(default=None, alias="questionTranslation")
    translation_language: Optional[RecordLanguage] = Field(default=None, alias="translationLanguage")
    options: List[str] = Field(default_factory=list)
    answer: str
    context: str = ""
    type: QuestionKind
    language: RecordLanguage = RecordLanguage.OTHER

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        if isinstance(value, str):
            kind = _KIND_ALIASES.get(value.strip().lower())
            if kind is not None:
                return kind
        return value

    @field_validator("language", "translation_language", mode="before")
    @classmethod
    def normalize_language(cls, value, info: ValidationInfo):
        missing = None if info.field_name == "translation_language" else RecordLanguage.OTHER
        if isinstance(value, RecordLanguage):
            return value
        text = str(value).strip() if value is not None else ""
        if not text or text.lower() in ("null", "none"):
            return missing
        for language in RecordLanguage:
            if text.lower() == language.value.lower():
                return language
        return RecordLanguage.OTHER

    @field_validator("question_translation", mode="before")
    @classmethod
    def blank_translation_is_none(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
            return None
        return value

    @field_validator("answer", "context", mode="before")
    @classmethod
    def coerce_text(cls, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            return str(value)
        return value

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, value):
        if value is None:
            return []
        if isinstance(value, dict):
            # {"A": "...", "B": "..."} style
            return [str(v) for v in value.values()]
        if isinstance(value, list):
            return [str(v) for v in value]
        return value

    @model_validator(mode="after")
    def check_shape(self, info: ValidationInfo):
        if self.type == QuestionKind.MULTIPLE_CHOICE and not self.options:
            raise ValueError("multiple choice question has no options")

        language_mode = (info.context or {}).get("language_mode")
        if language_mode == LanguageMode.BILINGUAL:
            if not self.question_translation or self.translation_language is None:
                raise ValueError("bilingual question is missing its translation")
        return self

    @property
    def answer_in_options(self) -> bool:
        return self.answer in self.options

    def to_dict(self) -> dict:
        """JSON-ready dict using the wire field names"""
        return self.model_dump(mode="json", by_alias=True)


class GenerationResult(BaseModel):
    """Outcome of one end-to-end generation request"""
    questions: List[QuestionRecord]
    page_range: PageRange
    pages: List[ExtractedPageText] = Field(default_factory=list)
