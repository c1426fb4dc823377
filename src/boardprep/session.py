import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

import redis
from pydantic import ValidationError

from .config import settings
from .errors import (
    InvalidAnswerError,
    NoQuestionsError,
    QuestionNotFoundError,
    SessionStateError,
)
from .models import (
    AttemptDraft,
    Question,
    QuizAttempt,
    ReviewSummary,
    SessionData,
    SessionState,
    UserAnswer,
)
from .question_bank import QuestionBank
from .scoring import review_summary, score_answers
from .shuffle import fisher_yates
from .storage import AttemptStore, now_ms

logger = logging.getLogger(__name__)


@dataclass
class QuizOutcome:
    attempt: QuizAttempt
    saved: bool


# --- Quiz Session Controller ---
class QuizSession:
    """One pass through a category's questions.

    Loading -> InProgress -> (ReviewPending) -> Finalized. The question order
    is shuffled once in ``start`` and answers are kept by position in that
    order, so scoring pairs answer ``i`` with question ``i``.
    """

    def __init__(
        self,
        category: str,
        user_id: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        self.category = category
        self.user_id = user_id
        self.state = SessionState.LOADING
        self.questions: List[Question] = []
        self.answers: List[UserAnswer] = []
        self.current_index = 0
        self.created_at = datetime.now()
        self._rng = rng

    def owned_by(self, user_id: Optional[str]) -> bool:
        return (self.user_id or "").strip() == (user_id or "").strip()

    def _require(self, *states: SessionState):
        if self.state not in states:
            raise SessionStateError(f"Not allowed while the quiz is {self.state.value}")

    def start(self, questions: Sequence[Question]) -> None:
        self._require(SessionState.LOADING)
        if not questions:
            raise NoQuestionsError(f"No questions for {self.category}")
        self.questions = fisher_yates(list(questions), self._rng)
        self.answers = [UserAnswer(question_id=q.id) for q in self.questions]
        self.current_index = 0
        self.state = SessionState.IN_PROGRESS

    # --- Navigation ---
    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        self._require(SessionState.IN_PROGRESS, SessionState.REVIEW_PENDING)
        return self.questions[self.current_index]

    @property
    def current_answer(self) -> UserAnswer:
        self._require(SessionState.IN_PROGRESS, SessionState.REVIEW_PENDING)
        return self.answers[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index == self.total - 1

    def go_to(self, index: int) -> int:
        self._require(SessionState.IN_PROGRESS)
        self.current_index = max(0, min(index, self.total - 1))
        return self.current_index

    def next(self) -> int:
        return self.go_to(self.current_index + 1)

    def previous(self) -> int:
        return self.go_to(self.current_index - 1)

    # --- Answers ---
    def select_answer(self, option_index: int) -> None:
        self._require(SessionState.IN_PROGRESS)
        question = self.questions[self.current_index]
        if not 0 <= option_index < len(question.options):
            raise InvalidAnswerError(
                f"Option {option_index} does not exist for question {question.id}"
            )
        self.answers[self.current_index].selected_answer_index = option_index

    def summary(self) -> ReviewSummary:
        return review_summary(self.answers)

    def request_review(self) -> ReviewSummary:
        self._require(SessionState.IN_PROGRESS)
        if not self.is_last:
            raise SessionStateError("Review is only available on the last question")
        self.state = SessionState.REVIEW_PENDING
        return self.summary()

    def resume(self) -> None:
        self._require(SessionState.REVIEW_PENDING)
        self.state = SessionState.IN_PROGRESS

    # --- Finish ---
    def finish(self, store: Optional[AttemptStore] = None) -> QuizOutcome:
        """Score the quiz and hand the attempt to ``store``.

        A failed or skipped save still returns the scored attempt.
        """
        self._require(SessionState.IN_PROGRESS, SessionState.REVIEW_PENDING)
        if self.state == SessionState.IN_PROGRESS and not self.is_last:
            raise SessionStateError("The quiz can only be submitted from the last question")

        draft = AttemptDraft(
            score=score_answers(self.answers, self.questions),
            total_questions=self.total,
            answers=[a.model_copy() for a in self.answers],
            category=self.category,
        )
        self.state = SessionState.FINALIZED

        attempt = store.append(self.category, draft) if store is not None else None
        if attempt is None:
            logger.warning(f"Attempt for {self.category} was not saved.")
            return QuizOutcome(attempt=draft.stamp(now_ms()), saved=False)
        return QuizOutcome(attempt=attempt, saved=True)

    # --- Persistence between requests ---
    def to_data(self) -> SessionData:
        return SessionData(
            category=self.category,
            user_id=self.user_id,
            question_ids=[q.id for q in self.questions],
            answers=self.answers,
            current_index=self.current_index,
            state=self.state,
            created_at=self.created_at,
        )

    @classmethod
    def from_data(cls, data: SessionData, bank: QuestionBank) -> "QuizSession":
        """Rebuild a session in its saved order, without shuffling again."""
        session = cls(data.category, data.user_id)
        questions = []
        for question_id in data.question_ids:
            question = bank.get_question(question_id)
            if question is None:
                raise QuestionNotFoundError(f"Question {question_id} is no longer available")
            questions.append(question)
        if len(data.answers) != len(questions):
            raise SessionStateError("Saved answers do not match the saved questions")

        session.questions = questions
        session.answers = [a.model_copy() for a in data.answers]
        session.current_index = max(0, min(data.current_index, len(questions) - 1))
        session.state = data.state
        session.created_at = data.created_at
        return session


# --- Session persistence ---
class SessionRepository:
    """Keeps in-progress quiz sessions in Redis, keyed by the session cookie."""

    def __init__(
        self,
        client: redis.Redis,
        prefix: str = settings.KEY_PREFIX,
        timeout_minutes: int = settings.SESSION_TIMEOUT_MINUTES,
    ):
        self.client = client
        self.prefix = prefix
        self.timeout = timedelta(minutes=timeout_minutes)

    def key(self, session_id: str) -> str:
        return f"{self.prefix}:session:{session_id}"

    def save(self, session_id: str, session: QuizSession) -> None:
        try:
            self.client.set(
                self.key(session_id), session.to_data().model_dump_json(), ex=self.timeout
            )
        except redis.RedisError as e:
            logger.error(f"Could not save session {session_id}: {e}")

    def load(self, session_id: Optional[str]) -> Optional[SessionData]:
        if not session_id:
            return None
        try:
            raw = self.client.get(self.key(session_id))
        except redis.RedisError as e:
            logger.error(f"Could not read session {session_id}: {e}")
            return None
        if not raw:
            return None
        try:
            data = SessionData.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Dropping unreadable session {session_id}: {e}")
            self.delete(session_id)
            return None

        if datetime.now() - data.created_at > self.timeout:
            self.delete(session_id)
            return None
        return data

    def delete(self, session_id: str) -> None:
        try:
            self.client.delete(self.key(session_id))
        except redis.RedisError as e:
            logger.error(f"Could not delete session {session_id}: {e}")
