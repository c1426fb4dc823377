import logging
import os
import random
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

import uvicorn
from redis import Redis
from fastapi import (
    Cookie,
    Depends,
    FastAPI,
    Form,
    Request,
)
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .config import settings
from .errors import InvalidAnswerError, QuizError
from .models import QuizAttempt, SessionState
from .question_bank import QuestionBank
from .redis_client import get_redis
from .scoring import build_feedback, percentage, progress_series, score_band
from .session import QuizSession, SessionRepository
from .storage import AttemptStore

# --- Logging Setup ---
logger = logging.getLogger(__name__)
package_logger = logging.getLogger("boardprep")
package_logger.setLevel(logging.INFO)

if settings.LOG_TO_FILE:
    if not os.path.exists(settings.LOG_DIR):
        os.makedirs(settings.LOG_DIR)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    package_logger.addHandler(file_handler)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    question_bank.load_all()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

templates = Jinja2Templates(
    directory=os.path.join(os.path.dirname(__file__), "templates")
)
templates.env.filters["timestamp"] = lambda ms: datetime.fromtimestamp(ms / 1000).strftime(
    "%Y-%m-%d %H:%M"
)

question_bank = QuestionBank(settings.QUESTIONS_DIR)


# --- Dependencies ---
def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[str]:
    return session_id


def get_user_id(
    user_id: Optional[str] = Cookie(None, alias=settings.USER_COOKIE_NAME),
) -> Optional[str]:
    return user_id


def get_store(
    user_id: Optional[str] = Depends(get_user_id),
    client: Redis = Depends(get_redis),
) -> AttemptStore:
    return AttemptStore(client, user_id)


def get_sessions(client: Redis = Depends(get_redis)) -> SessionRepository:
    return SessionRepository(client)


def get_active_session(
    session_id: Optional[str] = Depends(get_session_id),
    user_id: Optional[str] = Depends(get_user_id),
    sessions: SessionRepository = Depends(get_sessions),
) -> Optional[QuizSession]:
    data = sessions.load(session_id)
    if data is None:
        return None
    try:
        session = QuizSession.from_data(data, question_bank)
    except QuizError as e:
        logger.warning(f"Discarding session {session_id}: {e}")
        sessions.delete(session_id)
        return None
    if not session.owned_by(user_id):
        # Started under another account; its answers must not reach this history.
        logger.warning(f"Discarding session {session_id}: user changed to {user_id}")
        sessions.delete(session_id)
        return None
    return session


def _attempt_view(attempt: QuizAttempt) -> dict:
    percent = percentage(attempt.score, attempt.total_questions)
    return {
        "attempt": attempt,
        "percentage": percent,
        "band": score_band(percent),
        "feedback": build_feedback(attempt, question_bank),
    }


# --- Identity ---
@app.post("/login", response_class=RedirectResponse)
def login(
    name: str = Form(...),
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionRepository = Depends(get_sessions),
):
    redirect = RedirectResponse(url="/", status_code=302)
    user_id = name.strip()
    if not user_id:
        return redirect
    if session_id:
        sessions.delete(session_id)
        redirect.delete_cookie(settings.SESSION_COOKIE_NAME)
    redirect.set_cookie(
        key=settings.USER_COOKIE_NAME,
        value=user_id,
        httponly=True,
        samesite="Lax",
    )
    logger.info(f"User signed in: {user_id}")
    return redirect


@app.post("/logout", response_class=RedirectResponse)
def logout(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionRepository = Depends(get_sessions),
):
    if session_id:
        sessions.delete(session_id)
    redirect = RedirectResponse(url="/", status_code=302)
    redirect.delete_cookie(settings.SESSION_COOKIE_NAME)
    redirect.delete_cookie(settings.USER_COOKIE_NAME)
    return redirect


# --- JSON API ---
@app.get("/api/categories")
async def get_categories():
    return question_bank.get_categories()


@app.get("/api/quiz")
def get_question_data(session: Optional[QuizSession] = Depends(get_active_session)):
    if not session:
        return JSONResponse({"error": "Session invalid"}, status_code=401)

    question = session.current_question
    return {
        "category": session.category,
        "state": session.state,
        "current_index": session.current_index,
        "total_questions": session.total,
        "question_id": question.id,
        "question_text": question.question_text,
        "image_url": question.image_url,
        "options": question.options,
        "selected_answer_index": session.current_answer.selected_answer_index,
        "summary": session.summary(),
    }


@app.get("/api/results/{category}")
def get_result_data(category: str, store: AttemptStore = Depends(get_store)):
    attempt = store.get_latest_attempt(category)
    if attempt is None:
        return JSONResponse({"error": "No attempts"}, status_code=404)
    return _attempt_view(attempt)


@app.get("/api/attempts/{category}")
def get_attempts(category: str, store: AttemptStore = Depends(get_store)):
    return store.get_attempts(category)


@app.get("/api/attempts/{category}/{index}")
def get_attempt(category: str, index: int, store: AttemptStore = Depends(get_store)):
    attempt = store.get_attempt(category, index)
    if attempt is None:
        return JSONResponse({"error": "Attempt not found"}, status_code=404)
    return _attempt_view(attempt)


@app.get("/api/progress")
def get_progress(store: AttemptStore = Depends(get_store)):
    return {
        category: {"attempts": attempts, "series": progress_series(attempts)}
        for category, attempts in store.get_all_attempts_for_user().items()
    }


@app.post("/progress/clear", response_class=RedirectResponse)
def clear_progress(store: AttemptStore = Depends(get_store)):
    store.clear()
    return RedirectResponse(url="/progress", status_code=302)


# --- Pages ---
@app.get("/", response_class=HTMLResponse)
async def home(request: Request, user_id: Optional[str] = Depends(get_user_id)):
    return templates.TemplateResponse(
        request,
        "home.html",
        {"user_id": user_id, "categories": question_bank.get_categories()},
    )


@app.post("/start", response_class=RedirectResponse)
def start_quiz_session(
    category: str = Form(...),
    user_id: Optional[str] = Depends(get_user_id),
    sessions: SessionRepository = Depends(get_sessions),
):
    questions = question_bank.get_questions(category)
    if not questions:
        return RedirectResponse(url="/", status_code=302)
    if settings.QUIZ_SIZE and len(questions) > settings.QUIZ_SIZE:
        questions = random.sample(questions, settings.QUIZ_SIZE)

    session = QuizSession(category, user_id)
    session.start(questions)

    new_id = str(uuid.uuid4())
    sessions.save(new_id, session)
    logger.info(f"New session: {new_id} [Category: {category}, User: {user_id}]")

    redirect = RedirectResponse(url="/quiz", status_code=302)
    redirect.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=new_id,
        httponly=True,
        samesite="Lax",
    )
    return redirect


@app.get("/quiz", response_class=HTMLResponse)
def display_question_page(
    request: Request,
    session: Optional[QuizSession] = Depends(get_active_session),
):
    if not session:
        return RedirectResponse(url="/", status_code=302)
    category = question_bank.get_category(session.category)
    return templates.TemplateResponse(
        request,
        "quiz.html",
        {
            "session": session,
            "category": category,
            "question": session.current_question,
            "answer": session.current_answer,
            "summary": session.summary(),
            "review_pending": session.state == SessionState.REVIEW_PENDING,
        },
    )


@app.post("/quiz/answer")
def submit_answer(
    request: Request,
    action: str = Form("next"),
    selected_option_index: Optional[int] = Form(None),
    goto_index: Optional[int] = Form(None),
    session_id: Optional[str] = Depends(get_session_id),
    session: Optional[QuizSession] = Depends(get_active_session),
    sessions: SessionRepository = Depends(get_sessions),
    store: AttemptStore = Depends(get_store),
):
    if not session:
        return RedirectResponse(url="/", status_code=302)

    try:
        if action == "resume":
            session.resume()
        if selected_option_index is not None and session.state == SessionState.IN_PROGRESS:
            session.select_answer(selected_option_index)

        if action == "previous":
            session.previous()
        elif action == "next":
            session.next()
        elif action == "goto" and goto_index is not None:
            session.go_to(goto_index)
        elif action == "review":
            session.request_review()
        elif action == "submit":
            outcome = session.finish(store)
            sessions.delete(session_id)
            if outcome.saved:
                return RedirectResponse(url=f"/results/{session.category}", status_code=302)
            return templates.TemplateResponse(
                request,
                "results.html",
                {
                    "category": question_bank.get_category(session.category),
                    "saved": False,
                    **_attempt_view(outcome.attempt),
                },
            )
    except InvalidAnswerError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except QuizError as e:
        logger.info(f"Rejected {action} for session {session_id}: {e}")
        return JSONResponse({"error": str(e)}, status_code=409)

    sessions.save(session_id, session)
    return RedirectResponse(url="/quiz", status_code=302)


@app.get("/results/{category}", response_class=HTMLResponse)
def result_page(
    request: Request, category: str, store: AttemptStore = Depends(get_store)
):
    attempt = store.get_latest_attempt(category)
    if attempt is None:
        # Nothing to show, e.g. after a refresh without a saved attempt.
        return RedirectResponse(url="/", status_code=302)
    return templates.TemplateResponse(
        request,
        "results.html",
        {
            "category": question_bank.get_category(category),
            "saved": True,
            **_attempt_view(attempt),
        },
    )


@app.get("/progress", response_class=HTMLResponse)
def progress_page(request: Request, store: AttemptStore = Depends(get_store)):
    history = store.get_all_attempts_for_user()
    rows = [
        {
            "category": question_bank.get_category(category),
            "slug": category,
            "series": progress_series(attempts),
        }
        for category, attempts in history.items()
    ]
    return templates.TemplateResponse(request, "progress.html", {"rows": rows})


@app.get("/review", response_class=HTMLResponse)
def review_page(request: Request, store: AttemptStore = Depends(get_store)):
    history = store.get_all_attempts_for_user()
    groups = [
        {
            "category": question_bank.get_category(category),
            "slug": category,
            "attempts": [
                (attempt, percentage(attempt.score, attempt.total_questions))
                for attempt in attempts
            ],
        }
        for category, attempts in history.items()
    ]
    return templates.TemplateResponse(request, "review.html", {"groups": groups})


@app.get("/review/{category}/{index}", response_class=HTMLResponse)
def review_attempt_page(
    request: Request,
    category: str,
    index: int,
    store: AttemptStore = Depends(get_store),
):
    attempt = store.get_attempt(category, index)
    if attempt is None:
        return RedirectResponse(url="/review", status_code=302)
    return templates.TemplateResponse(
        request,
        "results.html",
        {
            "category": question_bank.get_category(category),
            "saved": True,
            "reviewing": True,
            **_attempt_view(attempt),
        },
    )


if __name__ == "__main__":
    uvicorn.run("boardprep.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
