"""Prompt construction for Gemini question generation"""

from models.schemas import LanguageMode, PageRange, QuizConfig
from config.settings import MAX_PROMPT_CHARS

ENGLISH_INSTRUCTION = """Language preference: English only.
- Every question, option, answer, and explanation must be written entirely in natural English suitable for students.
- When the source passage is in Hindi or another language, produce an accurate translation that preserves the nuance and technical vocabulary. If a term has no direct translation, include the transliterated Hindi term in parentheses.
- Always include a short quote from the original language inside the "context" field followed by an English explanation so the learner can trace the source.
- Never include Hindi sentences in the question, options, or answer fields when English is requested.
- Set "questionTranslation" and "translationLanguage" to null when English-only."""

HINDI_INSTRUCTION = """Language preference: Hindi only.
- Every question, option, answer, and explanation must be written entirely in natural, student-friendly Hindi.
- When the source passage is in English or another language, translate the meaning into idiomatic Hindi while preserving the detail. If a concept lacks a standard Hindi term, include the English term in parentheses.
- Always include a short quote from the original language in "context" followed by a Hindi explanation.
- Never include English sentences in the question, options, or answer fields when Hindi is requested.
- Set "questionTranslation" and "translationLanguage" to null when Hindi-only."""

BILINGUAL_INSTRUCTION = """Language preference: Bilingual (Hindi + English).
- For every question you produce, provide two versions of the same question: one in Hindi and one in English. Both versions must convey the same meaning, level of detail, and tone.
- Use the "question" field for the version that best matches the original source snippet, and ALWAYS include a faithful translation in the other language in the "questionTranslation" field. The translation must be fluent, not word-for-word.
- Set "translationLanguage" to the language used in "questionTranslation" ("Hindi" if the translation is Hindi, "English" if it is English).
- Options, answer and context follow the language of the primary "question". When helpful, add short parenthetical translations for tricky terminology.
- Every object MUST include both languages."""

OUTPUT_SCHEMA = """[
  {
    "question": "Primary question text in the language indicated by 'language'",
    "questionTranslation": "Translated question text in the complementary language (must be filled when bilingual is requested, otherwise null)",
    "translationLanguage": "Hindi | English | null",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "answer": "Correct answer text (match one of the options exactly for MCQs)",
    "context": "A brief quote or concept from the text; include the original-language snippet plus a short explanation in the output language when translating",
    "type": "Multiple Choice | Short Answer",
    "language": "Hindi | English | Other"
  }
]"""


def language_instruction(language_mode: LanguageMode) -> str:
    """Instruction block for the selected output language(s)"""
    if language_mode == LanguageMode.ENGLISH:
        return ENGLISH_INSTRUCTION
    if language_mode == LanguageMode.HINDI:
        return HINDI_INSTRUCTION
    return BILINGUAL_INSTRUCTION


def truncate_text(text: str, max_chars: int = MAX_PROMPT_CHARS) -> str:
    return text[:max_chars]


def build_prompt(text: str, config: QuizConfig, page_range: PageRange, max_chars: int = MAX_PROMPT_CHARS) -> str:
    """Build the full generation prompt. Pure function of its arguments."""
    count = config.question_count

    return f"""Analyze the following text from a book (pages {page_range.start}-{page_range.end}).
Detect the languages present (focus on Hindi and English, but allow others).
The user selected: {config.language_mode.value}.
Generate {count} {config.difficulty.value} difficulty questions.
You MUST return exactly {count} question objects (no more, no less) unless there is literally no textual detail available; if the text feels repetitive, focus on finer-grained concepts rather than reducing the count. If absolutely impossible, provide your best attempt but still include a note in the "context" field explaining why the detail was limited.

{language_instruction(config.language_mode)}

The questions should be of type: {config.question_type.value}.
Multiple Choice questions have a non-empty "options" array; Short Answer questions use an empty "options" array.

Return the output strictly as a JSON array of objects with this format:
{OUTPUT_SCHEMA}

If the text is too short or nonsensical, return an empty array.

TEXT CONTENT:
{truncate_text(text, max_chars)}
"""
