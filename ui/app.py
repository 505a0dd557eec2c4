"""
Streamlit UI: upload a PDF textbook, pick a page range and quiz settings,
get study questions generated by Gemini.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

import streamlit as st

from config.settings import LOG_LEVEL, MAX_QUESTION_COUNT, REQUEST_TIMEOUT
from data.loader import inspect_document, upload_fingerprint
from generation.exporter import export_filename, export_questions, export_questions_json
from generation.question_generator import QuestionGenerator
from models.cancellation import CancelToken
from models.errors import QuizGenerationError
from models.schemas import (
    Difficulty,
    LanguageMode,
    PageRange,
    QuestionKind,
    QuestionType,
    QuizConfig,
)

import logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

LANGUAGE_LABELS = {
    LanguageMode.ENGLISH: "English only",
    LanguageMode.HINDI: "Hindi only",
    LanguageMode.BILINGUAL: "Bilingual (Hindi + English)",
}

# Page config
st.set_page_config(
    page_title="Book2Quiz",
    page_icon="📘",
    layout="centered"
)


def load_upload(uploaded_file):
    """Inspect a new upload once and remember its page count"""
    data = uploaded_file.getvalue()
    fingerprint = upload_fingerprint(uploaded_file.name, data)
    if st.session_state.get("file_fingerprint") == fingerprint:
        return True

    try:
        with st.spinner("Analyzing PDF structure..."):
            total_pages, default_range = inspect_document(data, uploaded_file.name)
    except QuizGenerationError as e:
        st.error(f"❌ {e}")
        return False

    st.session_state["file_fingerprint"] = fingerprint
    st.session_state["file_name"] = uploaded_file.name
    st.session_state["file_bytes"] = data
    st.session_state["total_pages"] = total_pages
    st.session_state["default_range"] = default_range
    st.session_state.pop("result", None)
    logger.info(f"Loaded {uploaded_file.name}: {total_pages} pages")
    return True


def run_generation(page_range: PageRange, config: QuizConfig):
    # A new request supersedes whatever was running before
    previous = st.session_state.get("cancel_token")
    if previous is not None:
        previous.cancel()
    cancel = CancelToken(timeout=REQUEST_TIMEOUT * 2)
    st.session_state["cancel_token"] = cancel
    st.session_state.pop("result", None)

    status_text = st.empty()
    generator = QuestionGenerator()

    try:
        with st.spinner("Working..."):
            result = generator.generate_from_pdf(
                st.session_state["file_bytes"],
                page_range,
                config,
                cancel=cancel,
                progress=status_text.text,
                filename=st.session_state["file_name"],
            )
    except QuizGenerationError as e:
        status_text.empty()
        st.error(f"❌ {e}")
        return

    st.session_state["result"] = result
    status_text.success("Questions generated successfully.")


def display_questions(result):
    questions = result.questions
    st.header(f"📝 Questions (pages {result.page_range})")

    for i, q in enumerate(questions, 1):
        with st.container(border=True):
            st.caption(f"{q.type.value} · {q.language.value}")
            st.markdown(f"**Q{i}. {q.question}**")
            if q.question_translation:
                language = q.translation_language.value if q.translation_language else "Other"
                st.markdown(f"_{language}:_ {q.question_translation}")

            if q.type == QuestionKind.MULTIPLE_CHOICE:
                for option in q.options:
                    st.markdown(f"- {option}")

            with st.expander("Show answer"):
                st.markdown(f"**Answer:** {q.answer}")
                if q.context:
                    st.caption(q.context)

    st.markdown("---")
    st.header("💾 Download")
    col1, col2 = st.columns(2)
    source_name = st.session_state.get("file_name", "questions.pdf")

    with col1:
        st.download_button(
            "📥 Text",
            export_questions(questions),
            export_filename(source_name),
            "text/plain"
        )
    with col2:
        st.download_button(
            "📥 JSON",
            export_questions_json(questions),
            export_filename(source_name, ".json"),
            "application/json"
        )


def main():
    st.title("📘 Book2Quiz")
    st.markdown("Upload a textbook PDF, pick the pages to study, and generate questions.")

    uploaded_file = st.file_uploader("PDF textbook", type=["pdf"])
    if uploaded_file is None:
        st.info("👆 Upload a PDF to get started")
        return

    if not load_upload(uploaded_file):
        return

    total_pages = st.session_state["total_pages"]
    default_range = st.session_state["default_range"]

    st.header("Quiz settings")
    if total_pages > 1:
        start_page, end_page = st.slider(
            "Page range",
            min_value=1,
            max_value=total_pages,
            value=(default_range.start, default_range.end),
        )
    else:
        start_page, end_page = 1, 1
        st.caption("Single-page document")

    col1, col2 = st.columns(2)
    difficulty = col1.selectbox(
        "Difficulty", list(Difficulty), index=1, format_func=lambda d: d.value
    )
    question_type = col2.selectbox(
        "Question type", list(QuestionType), format_func=lambda t: t.value
    )
    question_count = col1.slider("Number of questions", 1, MAX_QUESTION_COUNT, 5)
    language_mode = col2.selectbox(
        "Question language",
        list(LanguageMode),
        index=2,
        format_func=lambda m: LANGUAGE_LABELS[m],
    )

    if st.button("🚀 Generate Questions", type="primary", use_container_width=True):
        config = QuizConfig(
            difficulty=difficulty,
            question_count=question_count,
            question_type=question_type,
            language_mode=language_mode,
        )
        run_generation(PageRange(start=start_page, end=end_page), config)

    if "result" in st.session_state:
        display_questions(st.session_state["result"])


if __name__ == "__main__":
    main()
