"""
Tests for the Markdown quiz runner.

Run with: pytest tests/test_quiz.py -v
"""

import pytest

from katas.exceptions import DocumentParseError, ExecutionError, ExtractionError
from katas.models import QuestionAnswer
from katas.runner.quiz import (
    ANSWER_PROMPT,
    ask_question,
    extract_question_and_answer,
    parse_document,
    run_quiz,
)


def extract(text: str) -> QuestionAnswer:
    return extract_question_and_answer(parse_document(text))


class TestExtractQuestionAndAnswer:
    """Tests for pulling the question and answer out of a document."""

    def test_heading_paragraph_and_code_block(self):
        qa = extract("# Q\n\nmore\n\n```\n42\n```\n")

        assert qa.question == "Qmore"
        assert qa.answer == "42"

    def test_heading_without_code_block_fails(self):
        with pytest.raises(ExtractionError):
            extract("# Q\n\nmore\n")

    def test_code_block_without_heading_fails(self):
        with pytest.raises(ExtractionError):
            extract("Just a paragraph.\n\n```\n42\n```\n")

    def test_empty_code_block_fails(self):
        with pytest.raises(ExtractionError):
            extract("# Q\n\n```\n```\n")

    def test_first_code_block_wins(self):
        qa = extract("# Q\n\n```\nfirst\n```\n\n```\nsecond\n```\n")
        assert qa.answer == "first"

    def test_paragraphs_after_answer_are_ignored(self):
        qa = extract("# Q\n\n```\n1\n```\n\nafterwards\n")
        assert qa.question == "Q"

    def test_paragraph_before_heading_is_ignored(self):
        qa = extract("Intro text.\n\n# Q\n\n```\nA\n```\n")
        assert qa.question == "Q"

    def test_other_heading_levels_are_ignored(self):
        qa = extract("# Q\n\n## Details\n\nmore\n\n```\n1\n```\n")
        assert qa.question == "Qmore"

    def test_nested_inline_markup_is_ignored(self):
        qa = extract("# Q\n\nplain *emph* tail\n\n```\n1\n```\n")
        assert qa.question == "Qplain  tail"

    def test_soft_line_breaks_are_kept(self):
        qa = extract("# Q\n\nline one\nline two\n\n```\nx\n```\n")
        assert qa.question == "Qline one\nline two"

    def test_indented_code_block_is_an_answer(self):
        qa = extract("# Q\n\n    7\n")
        assert qa.answer == "7"

    def test_multiline_answer_keeps_inner_lines(self):
        qa = extract("# Q\n\n```rust\nlet x = 1;\nlet y = 2;\n```\n")
        assert qa.answer == "let x = 1;\nlet y = 2;"


class TestAskQuestion:
    """Tests for the interactive compare."""

    def test_matching_reply_ignores_surrounding_whitespace(self):
        qa = QuestionAnswer(question="  What is 6 * 7?\n", answer=" 42 ")
        output = bytearray()
        prompts = []

        def read_answer(prompt):
            prompts.append(prompt)
            return "42"

        assert ask_question(qa, output, read_answer) is True
        assert prompts == [ANSWER_PROMPT]
        assert output == bytearray(b"What is 6 * 7?\nCorrect!\n")

    def test_wrong_reply_shows_canonical_answer(self):
        qa = QuestionAnswer(question="What is 6 * 7?", answer=" 42 ")
        output = bytearray()

        assert ask_question(qa, output, lambda _: "43") is False
        assert b"Incorrect. The correct answer was: 42\n" in output

    def test_compare_is_case_sensitive(self):
        qa = QuestionAnswer(question="Keyword?", answer="let")
        assert ask_question(qa, bytearray(), lambda _: "LET") is False

    def test_missing_input_raises(self):
        def closed_stdin(prompt):
            raise EOFError

        qa = QuestionAnswer(question="Q", answer="A")
        with pytest.raises(ExecutionError):
            ask_question(qa, bytearray(), closed_stdin)


class TestRunQuiz:
    """Tests for running a quiz file end to end."""

    def test_correct_answer(self, quiz_file):
        output = bytearray()

        assert run_quiz(quiz_file, output, lambda _: " 42\n") is True
        assert output.startswith(b"What is six times seven?Answer with digits only.\n")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DocumentParseError) as exc_info:
            run_quiz(tmp_path / "nope.md", bytearray(), lambda _: "")
        assert exc_info.value.file_path.endswith("nope.md")

    def test_malformed_document_raises(self, tmp_path):
        path = tmp_path / "broken.md"
        path.write_text("No heading and no code.\n", encoding="utf-8")

        with pytest.raises(ExtractionError):
            run_quiz(path, bytearray(), lambda _: "")
