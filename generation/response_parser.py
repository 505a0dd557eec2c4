"""Turns raw Gemini output into validated QuestionRecord objects"""

from typing import List, Optional

from pydantic import ValidationError

from models.errors import QuestionCountError, ResponseFormatError
from models.schemas import LanguageMode, QuestionKind, QuestionRecord
from generation.json_repair_utils import extract_json_array, loads_with_repair, strip_code_fences
import logging

logger = logging.getLogger(__name__)


def load_question_array(raw_text: str) -> list:
    """
    Strip fences, cut out the JSON array and decode it (repairing if needed).

    Raises:
        ResponseParseError: not recoverable JSON
        ResponseFormatError: decoded value is not an array
    """
    payload = extract_json_array(strip_code_fences(raw_text))
    parsed = loads_with_repair(payload)
    if not isinstance(parsed, list):
        logger.error(f"Expected a JSON array, got {type(parsed).__name__}")
        raise ResponseFormatError()
    return parsed


def check_count(actual: int, expected_count: int):
    if actual < expected_count:
        logger.error(f"Model returned {actual} of {expected_count} requested questions")
        raise QuestionCountError(actual, expected_count)


def validate_records(items: list, language_mode: Optional[LanguageMode] = None) -> List[QuestionRecord]:
    """
    Validate each item as a QuestionRecord. Items that fail are skipped with
    a warning; problems that do not make a record unusable are only logged.
    """
    records = []
    for idx, item in enumerate(items, 1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping question {idx}: expected an object, got {type(item).__name__}")
            continue
        try:
            record = QuestionRecord.model_validate(item, context={"language_mode": language_mode})
        except ValidationError as e:
            logger.warning(f"Skipping question {idx}: {e.error_count()} invalid field(s): {e.errors()[0]['msg']}")
            continue

        if record.type == QuestionKind.MULTIPLE_CHOICE and not record.answer_in_options:
            logger.warning(f"Question {idx}: answer does not match any option exactly")
        if language_mode in (LanguageMode.ENGLISH, LanguageMode.HINDI) and record.question_translation:
            # Not enforced: single-language quizzes keep whatever translation the model added
            logger.warning(f"Question {idx}: translation present in {language_mode.value}-only mode")

        records.append(record)
    return records


def parse_response(
    raw_text: str,
    expected_count: int,
    language_mode: Optional[LanguageMode] = None,
) -> List[QuestionRecord]:
    """
    Parse a raw model response into at least expected_count questions.

    The count is checked on the decoded array and again after invalid records
    are dropped; a short result is an error, never a partial list.

    Raises:
        ResponseParseError, ResponseFormatError, QuestionCountError
    """
    items = load_question_array(raw_text)
    check_count(len(items), expected_count)

    records = validate_records(items, language_mode)
    if len(records) < len(items):
        logger.warning(f"Dropped {len(items) - len(records)} malformed question(s)")
    check_count(len(records), expected_count)

    logger.info(f"✓ Parsed {len(records)} questions")
    return records
