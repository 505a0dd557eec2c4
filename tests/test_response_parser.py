import json

import pytest

from conftest import make_record, records_json
from generation.response_parser import load_question_array, parse_response
from models.errors import QuestionCountError, ResponseFormatError, ResponseParseError
from models.schemas import LanguageMode, QuestionKind, RecordLanguage


def test_fenced_response_matches_plain_json():
    raw = records_json(3)
    fenced = f"Sure! Here you go:\n```json\n{raw}\n```\n"

    assert parse_response(fenced, 3) == parse_response(raw, 3)
    assert load_question_array(fenced) == json.loads(raw)


def test_missing_closing_bracket_is_repaired():
    raw = records_json(3)
    assert raw.endswith("]")

    repaired = parse_response(raw[:-1], 3)

    assert repaired == parse_response(raw, 3)
    assert [q.question for q in repaired] == ["What is concept 1?", "What is concept 2?", "What is concept 3?"]


def test_under_count_names_both_numbers():
    with pytest.raises(QuestionCountError) as excinfo:
        parse_response(records_json(2), 5)

    assert excinfo.value.actual == 2
    assert excinfo.value.expected == 5
    assert "2" in str(excinfo.value) and "5" in str(excinfo.value)


def test_extra_questions_are_kept():
    assert len(parse_response(records_json(4), 3)) == 4


def test_non_array_payload():
    with pytest.raises(ResponseFormatError):
        parse_response('{"question": "Not a list"}', 1)


def test_unrecoverable_payload():
    with pytest.raises(ResponseParseError):
        parse_response("The text is unreadable, no questions.", 1)


def test_empty_array_is_under_count():
    with pytest.raises(QuestionCountError):
        parse_response("[]", 1)


def test_records_are_typed():
    raw = json.dumps([
        make_record(1),
        make_record(2, type="Short Answer", options=[], questionTranslation=None, translationLanguage=None,
                    language="Hindi"),
    ])

    mcq, short = parse_response(raw, 2)

    assert mcq.type == QuestionKind.MULTIPLE_CHOICE
    assert mcq.translation_language == RecordLanguage.HINDI
    assert mcq.answer in mcq.options
    assert short.type == QuestionKind.SHORT_ANSWER
    assert short.options == []
    assert short.question_translation is None
    assert short.language == RecordLanguage.HINDI


def test_bilingual_mode_drops_untranslated_records():
    items = [make_record(i) for i in range(1, 4)]
    items[1]["questionTranslation"] = None

    with pytest.raises(QuestionCountError) as excinfo:
        parse_response(json.dumps(items), 3, LanguageMode.BILINGUAL)
    assert excinfo.value.actual == 2

    records = parse_response(json.dumps(items), 2, LanguageMode.BILINGUAL)
    assert [q.question for q in records] == ["What is concept 1?", "What is concept 3?"]


def test_multiple_choice_without_options_is_dropped():
    items = [make_record(1), make_record(2, options=[]), "not an object"]

    records = parse_response(json.dumps(items), 1)

    assert len(records) == 1


def test_english_mode_translation_is_not_enforced():
    records = parse_response(records_json(3), 3, LanguageMode.ENGLISH)

    assert all(q.question_translation for q in records)


def test_answer_mismatch_is_kept():
    raw = json.dumps([make_record(1, answer="Something else")])

    assert parse_response(raw, 1)[0].answer == "Something else"


def test_loose_field_values_are_normalized():
    raw = json.dumps([make_record(1, type="MCQ", language="Marathi", answer=42, translationLanguage="null",
                                  questionTranslation="")])

    record = parse_response(raw, 1)[0]

    assert record.type == QuestionKind.MULTIPLE_CHOICE
    assert record.language == RecordLanguage.OTHER
    assert record.answer == "42"
    assert record.question_translation is None
    assert record.translation_language is None


def test_unescaped_quote_inside_question_is_repaired():
    middle = ('{"question": "What does "chlorophyll mean?", "options": [], "answer": "A green pigment", '
              '"context": "Leaves contain chlorophyll.", "type": "Short Answer", "language": "English"}')
    raw = f"[{json.dumps(make_record(1))}, {middle}, {json.dumps(make_record(3))}]"

    records = parse_response(raw, 3)

    assert [q.question for q in records] == ["What is concept 1?", 'What does "chlorophyll mean?', "What is concept 3?"]
    assert records[1].answer == "A green pigment"
