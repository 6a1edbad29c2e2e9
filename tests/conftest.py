import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import quiz_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from quiz_toolkit.core.models import ExtractedQuestion, ExtractedQuiz, QuestionType  # noqa: E402


# Common test fixtures
@pytest.fixture
def mcq_text() -> str:
    """Two lettered multiple-choice questions with inline answers."""
    return (
        "1. What is the capital of France?\n"
        "A) London\n"
        "B) Paris\n"
        "C) Berlin\n"
        "D) Madrid\n"
        "Answer: B\n"
        "\n"
        "2. Which planet is known as the Red Planet?\n"
        "A) Venus\n"
        "B) Mars\n"
        "C) Jupiter\n"
        "D) Saturn\n"
        "Answer: B\n"
    )


@pytest.fixture
def true_false_text() -> str:
    """Statements followed by bare True/False lines."""
    return (
        "1. The sky is blue on a clear day.\n"
        "True\n"
        "False\n"
        "2. Fish can breathe on dry land.\n"
        "True\n"
        "False\n"
        "3. Water boils at 100 degrees Celsius at sea level.\n"
        "True\n"
        "False\n"
    )


@pytest.fixture
def prose_text() -> str:
    """Text with no question markers at all."""
    return (
        "Photosynthesis converts light energy into chemical energy in plants. "
        "Chlorophyll absorbs mostly red and blue light from the sun. "
        "Oxygen is released as a by-product of the light reactions. "
        "The Calvin cycle fixes carbon dioxide into simple sugars."
    )


@pytest.fixture
def sample_question() -> ExtractedQuestion:
    """A well-formed four-option question."""
    return ExtractedQuestion(
        id="q1",
        text="What is the capital of France?",
        type=QuestionType.MULTIPLE_CHOICE,
        options=("London", "Paris", "Berlin", "Madrid"),
        correct_answer="Paris",
        points=1,
    )


@pytest.fixture
def sample_quiz(sample_question) -> ExtractedQuiz:
    """A small quiz mixing question types."""
    return ExtractedQuiz(
        title="Geography Review",
        description="Capitals and facts",
        subject="Geography",
        questions=(
            sample_question,
            ExtractedQuestion(
                id="q2",
                text="The Nile is the longest river in Africa.",
                type=QuestionType.TRUE_FALSE,
                options=("True", "False"),
                correct_answer="True",
            ),
            ExtractedQuestion(
                id="q3",
                text="Name the largest ocean.",
                type=QuestionType.SHORT_ANSWER,
                correct_answer="Pacific",
                points=2,
            ),
        ),
    )
