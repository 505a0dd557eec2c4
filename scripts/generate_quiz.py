import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import LOG_LEVEL
from generation.exporter import export_filename, export_questions, export_questions_json
from generation.question_generator import QuestionGenerator
from models.cancellation import CancelToken
from models.errors import QuizGenerationError
from models.schemas import Difficulty, LanguageMode, PageRange, QuestionType, QuizConfig
import logging

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def generate_quiz(pdf_path: Path, page_range: PageRange, config: QuizConfig, output: Path = None,
                  as_json: bool = False, timeout: float = None) -> bool:
    """Run one generation request and write the export file"""

    logger.info("="*80)
    logger.info(f"QUIZ GENERATION: {pdf_path.name} pages {page_range}")
    logger.info("="*80)

    if not pdf_path.exists():
        logger.error(f"File not found: {pdf_path}")
        return False

    generator = QuestionGenerator()
    cancel = CancelToken(timeout=timeout)

    try:
        result = generator.generate_from_pdf(
            pdf_path.read_bytes(), page_range, config, cancel=cancel, filename=pdf_path.name
        )
    except QuizGenerationError as e:
        logger.error(f"✗ {e}")
        return False

    if as_json:
        content = export_questions_json(result.questions)
        output = output or pdf_path.with_name(export_filename(pdf_path.name, ".json"))
    else:
        content = export_questions(result.questions)
        output = output or pdf_path.with_name(export_filename(pdf_path.name))

    output.write_text(content, encoding="utf-8")
    logger.info(f"✓ Wrote {len(result.questions)} questions to {output}")
    return True


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Generate study questions from a PDF page range")
    parser.add_argument("pdf", type=Path, help="PDF textbook")
    parser.add_argument("--start", type=int, default=1, help="First page (1-based)")
    parser.add_argument("--end", type=int, default=5, help="Last page (inclusive)")
    parser.add_argument("--count", type=int, default=5, help="Number of questions")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default="Medium")
    parser.add_argument("--type", dest="question_type", choices=[t.value for t in QuestionType], default="Mixed")
    parser.add_argument("--language", choices=[m.value for m in LanguageMode], default="Bilingual")
    parser.add_argument("--output", type=Path, help="Output file (default: <pdf>_QA.txt next to the PDF)")
    parser.add_argument("--json", action="store_true", help="Write JSON instead of plain text")
    parser.add_argument("--timeout", type=float, help="Give up after this many seconds")
    args = parser.parse_args()

    if args.count < 1:
        parser.error("--count must be at least 1")

    quiz_config = QuizConfig(
        difficulty=Difficulty(args.difficulty),
        question_count=args.count,
        question_type=QuestionType(args.question_type),
        language_mode=LanguageMode(args.language),
    )

    success = generate_quiz(
        args.pdf,
        PageRange(start=args.start, end=args.end),
        quiz_config,
        output=args.output,
        as_json=args.json,
        timeout=args.timeout,
    )

    if not success:
        sys.exit(1)
