"""Quiz runner - asks the question stored in a Markdown exercise.

A quiz document is expected to look like::

    # What does `1 + 1` evaluate to?

    Optional paragraphs that belong to the question.

    ```
    2
    ```

The level-1 heading and the paragraphs after it form the question, the first
code block is the answer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from katas.exceptions import DocumentParseError, ExecutionError, ExtractionError
from katas.models import QuestionAnswer

logger = logging.getLogger(__name__)

ANSWER_PROMPT = "Your answer: "

_CODE_BLOCKS = {"fence", "code_block"}


def _markdown() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def parse_document(text: str, file_path: Optional[str] = None) -> SyntaxTreeNode:
    """Parse Markdown text into a syntax tree rooted at a `root` node."""
    try:
        return SyntaxTreeNode(_markdown().parse(text))
    except Exception as e:
        raise DocumentParseError(
            f"Failed to parse Markdown document: {e}",
            file_path=file_path,
            cause=e,
        ) from e


def _inline_text(block: SyntaxTreeNode) -> str:
    """Text runs directly inside a block. Nested markup is skipped."""
    parts = []
    for inline in block.children:
        if inline.type != "inline":
            continue
        for child in inline.children:
            if child.type == "text":
                parts.append(child.content)
            elif child.type == "softbreak":
                parts.append("\n")
    return "".join(parts)


def _code_literal(block: SyntaxTreeNode) -> str:
    content = block.content
    # The parser keeps the final line ending of a code block.
    if content.endswith("\n"):
        content = content[:-1]
    return content


def extract_question_and_answer(
    tree: SyntaxTreeNode,
    file_path: Optional[str] = None,
) -> QuestionAnswer:
    """
    Pull the question and canonical answer out of a parsed quiz document.

    Args:
        tree: Root node returned by `parse_document`.
        file_path: Used in error messages only.

    Returns:
        The untrimmed question and answer text.

    Raises:
        ExtractionError: If there is no level-1 heading question or no code
            block answer.
    """
    question = ""
    answer = ""
    in_question = False

    for block in tree.children:
        if block.type == "heading" and block.tag == "h1":
            in_question = True
            question += _inline_text(block)
        elif block.type == "paragraph" and in_question:
            question += _inline_text(block)
        elif block.type in _CODE_BLOCKS:
            answer = _code_literal(block)
            break

    if not question or not answer:
        raise ExtractionError(
            "Failed to extract question or answer from markdown",
            file_path=file_path,
        )

    return QuestionAnswer(question=question, answer=answer)


def ask_question(
    qa: QuestionAnswer,
    output: bytearray,
    read_answer: Callable[[str], str] = input,
) -> bool:
    """Show the question, read one reply and record whether it matched."""
    output.extend(f"{qa.display_question}\n".encode())

    try:
        reply = read_answer(ANSWER_PROMPT)
    except EOFError as e:
        raise ExecutionError("No answer could be read from standard input", cause=e) from e

    success = qa.is_correct(reply)
    if success:
        output.extend(b"Correct!\n")
    else:
        output.extend(f"Incorrect. The correct answer was: {qa.expected_answer}\n".encode())

    logger.info("Quiz answer %s", "correct" if success else "incorrect")
    return success


def run_quiz(
    path: Path,
    output: bytearray,
    read_answer: Callable[[str], str] = input,
) -> bool:
    """Read, parse and ask the quiz stored at `path`."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"Failed to read {path}: {e}", file_path=str(path), cause=e) from e

    tree = parse_document(content, file_path=str(path))
    qa = extract_question_and_answer(tree, file_path=str(path))
    return ask_question(qa, output, read_answer)
