from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator


# --- Question bank ---
class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question_text: str
    options: List[str]
    correct_answer_index: int
    explanation: str = ""
    category: str
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def check_options(self) -> "Question":
        if len(self.options) < 2:
            raise ValueError(f"Question {self.id} needs at least two options")
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError(
                f"Question {self.id}: correct index {self.correct_answer_index} "
                f"is outside {len(self.options)} options"
            )
        return self


class QuizCategory(BaseModel):
    slug: str
    name: str
    description: str = ""
    count: int = 0


# --- Attempts ---
class UserAnswer(BaseModel):
    question_id: str
    selected_answer_index: Optional[int] = None

    @property
    def answered(self) -> bool:
        return self.selected_answer_index is not None


class AttemptDraft(BaseModel):
    """A finished attempt that has not been stamped by the store yet."""

    model_config = ConfigDict(frozen=True)

    score: int
    total_questions: int
    answers: List[UserAnswer]
    category: str

    @model_validator(mode="after")
    def check_counts(self):
        if self.total_questions != len(self.answers):
            raise ValueError("total_questions must equal the number of answers")
        if not 0 <= self.score <= self.total_questions:
            raise ValueError("score must be between 0 and total_questions")
        return self

    def stamp(self, date: int) -> "QuizAttempt":
        return QuizAttempt(date=date, **self.model_dump())


class QuizAttempt(AttemptDraft):
    date: int  # epoch milliseconds

    def without_date(self) -> AttemptDraft:
        return AttemptDraft(**self.model_dump(exclude={"date"}))


# --- Session ---
class SessionState(str, Enum):
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    REVIEW_PENDING = "review_pending"
    FINALIZED = "finalized"


class SessionData(BaseModel):
    category: str
    user_id: Optional[str] = None
    question_ids: List[str]
    answers: List[UserAnswer]
    current_index: int = 0
    state: SessionState = SessionState.IN_PROGRESS
    created_at: datetime


class ReviewSummary(BaseModel):
    total: int
    answered: int
    unanswered: int
