from typing import Any, Dict, List, Optional, Sequence

from .models import Question, QuizAttempt, ReviewSummary, UserAnswer
from .question_bank import QuestionBank


# --- Scoring ---
def is_correct(answer: UserAnswer, question: Question) -> bool:
    if answer.question_id != question.id:
        # The answer does not belong to the question at this position.
        return False
    if answer.selected_answer_index is None:
        return False
    return answer.selected_answer_index == question.correct_answer_index


def score_answers(answers: Sequence[UserAnswer], questions: Sequence[Question]) -> int:
    """Count correct answers, pairing answers and questions by position."""
    return sum(1 for answer, question in zip(answers, questions) if is_correct(answer, question))


def review_summary(answers: Sequence[UserAnswer]) -> ReviewSummary:
    answered = sum(1 for answer in answers if answer.answered)
    return ReviewSummary(
        total=len(answers), answered=answered, unanswered=len(answers) - answered
    )


# --- Derived statistics for the results, progress and review pages ---
def percentage(score: int, total: int) -> int:
    if total <= 0:
        return 0
    return round(score / total * 100)


def score_band(percent: int) -> str:
    if percent >= 80:
        return "high"
    if percent >= 50:
        return "medium"
    return "low"


def build_feedback(attempt: QuizAttempt, bank: QuestionBank) -> List[Dict[str, Any]]:
    """Per-question detail for a stored attempt.

    Answers whose question is no longer in the bank are left out.
    """
    feedback = []
    for number, answer in enumerate(attempt.answers, start=1):
        question: Optional[Question] = bank.get_question(answer.question_id)
        if question is None:
            continue
        feedback.append(
            {
                "number": number,
                "question_id": question.id,
                "question_text": question.question_text,
                "image_url": question.image_url,
                "options": question.options,
                "selected_answer_index": answer.selected_answer_index,
                "correct_answer_index": question.correct_answer_index,
                "is_correct": is_correct(answer, question),
                "explanation": question.explanation,
            }
        )
    return feedback


def progress_series(attempts: Sequence[QuizAttempt]) -> List[Dict[str, int]]:
    """Chart points, oldest attempt first."""
    return [
        {
            "date": attempt.date,
            "score": attempt.score,
            "total_questions": attempt.total_questions,
            "percentage": percentage(attempt.score, attempt.total_questions),
        }
        for attempt in reversed(attempts)
    ]
