import os

# Keep test runs from writing log files into the working directory.
os.environ.setdefault("BOARDPREP_LOG_TO_FILE", "0")

import fakeredis
import pytest

from boardprep.models import Question


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def physics_questions():
    correct = [1, 2, 0, 3]
    return [
        Question(
            id=f"phy-{i + 1}",
            question_text=f"Physics question {i + 1}?",
            options=["A", "B", "C", "D"],
            correct_answer_index=index,
            explanation=f"Because {index}.",
            category="physics",
        )
        for i, index in enumerate(correct)
    ]


class FakeBank:
    """Question lookup over a fixed list."""

    def __init__(self, questions):
        self._by_id = {q.id: q for q in questions}

    def get_question(self, question_id):
        return self._by_id.get(question_id)


@pytest.fixture
def physics_bank(physics_questions):
    return FakeBank(physics_questions)
