"""Plain text and JSON export of generated questions"""

import json
from pathlib import Path
from typing import List

from models.schemas import QuestionRecord

SECTION_SEPARATOR = "-------------------\n\n"


def format_question(index: int, q: QuestionRecord) -> str:
    text = f"Q{index}: {q.question}\nType: {q.type.value}\n"
    if q.options:
        text += "Options:\n" + "\n".join(f"- {o}" for o in q.options) + "\n"
    if q.question_translation:
        language = q.translation_language.value if q.translation_language else "Other"
        text += f"Translated Question ({language}): {q.question_translation}\n"
    language = q.language.value if q.language else "Unknown"
    text += f"Answer: {q.answer}\nLanguage: {language}\nContext: {q.context}\n\n"
    return text


def export_questions(questions: List[QuestionRecord]) -> str:
    """One section per question, separated by a dashed line"""
    return SECTION_SEPARATOR.join(format_question(i, q) for i, q in enumerate(questions, 1))


def export_questions_json(questions: List[QuestionRecord]) -> str:
    return json.dumps([q.to_dict() for q in questions], indent=2, ensure_ascii=False)


def export_filename(source_name: str, suffix: str = ".txt") -> str:
    """book.pdf -> book_QA.txt"""
    return f"{Path(source_name).stem}_QA{suffix}"
