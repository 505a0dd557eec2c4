"""LLM-based question generation from extracted PDF page text"""

from typing import Callable, List, Optional

from models.cancellation import CancelToken, check
from models.schemas import GenerationResult, PageRange, QuestionRecord, QuizConfig
from data.processor import PageTextExtractor
from generation.gemini_client import GeminiClient
from generation.prompt_builder import build_prompt
from generation.response_parser import parse_response
import logging

logger = logging.getLogger(__name__)


class QuestionGenerator:
    """Generates study questions from a PDF page range using Gemini"""

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        extractor: Optional[PageTextExtractor] = None,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        self.client = client or GeminiClient()
        self._extractor = extractor
        # None means "read from the environment at call time"
        self.model_name = model_name
        self.api_key = api_key

    @property
    def extractor(self) -> PageTextExtractor:
        if self._extractor is None:
            self._extractor = PageTextExtractor()
        return self._extractor

    def generate_questions(
        self,
        text: str,
        config: QuizConfig,
        page_range: PageRange,
        cancel: Optional[CancelToken] = None,
        progress: Optional[Callable[[str], None]] = None,
    ) -> List[QuestionRecord]:
        """
        Build the prompt, call Gemini and parse the answer.

        Errors propagate as QuizGenerationError subclasses; nothing partial is
        returned on failure.
        """
        prompt = build_prompt(text, config, page_range)
        message = "AI is generating questions..."
        logger.info(
            f"Generating {config.question_count} {config.difficulty.value} "
            f"{config.question_type.value} questions ({config.language_mode.value}) for pages {page_range}"
        )
        if progress:
            progress(message)

        raw_text = self.client.generate(prompt, self.model_name, self.api_key, cancel=cancel)
        check(cancel, "parsing the response")
        return parse_response(raw_text, config.question_count, config.language_mode)

    def generate_from_pdf(
        self,
        data: bytes,
        page_range: PageRange,
        config: QuizConfig,
        cancel: Optional[CancelToken] = None,
        progress: Optional[Callable[[str], None]] = None,
        filename: Optional[str] = None,
    ) -> GenerationResult:
        """Extract the page range, then generate questions from its text"""
        text, pages, clamped = self.extractor.extract(
            data, page_range, config.language_mode, cancel=cancel, progress=progress, filename=filename
        )
        questions = self.generate_questions(text, config, clamped, cancel=cancel, progress=progress)

        logger.info(f"✓ Generated {len(questions)} questions from pages {clamped}")
        return GenerationResult(questions=questions, page_range=clamped, pages=pages)
