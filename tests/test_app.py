import logging
from logging.handlers import RotatingFileHandler

import pytest
import redis
from fastapi.testclient import TestClient

from boardprep import main
from boardprep.config import settings
from boardprep.redis_client import get_redis
from boardprep.session import QuizSession, SessionRepository


@pytest.fixture
def client(redis_client):
    main.app.dependency_overrides[get_redis] = lambda: redis_client
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


def _login(client, name="u1"):
    response = client.post("/login", data={"name": name}, follow_redirects=False)
    assert response.status_code == 302


def _start(client, category="physics"):
    response = client.post("/start", data={"category": category}, follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/quiz"


def _play(client, correct=True):
    """Answer every question, moving forward until the last one."""
    while True:
        state = client.get("/api/quiz").json()
        question = main.question_bank.get_question(state["question_id"])
        pick = question.correct_answer_index
        if not correct:
            pick = (pick + 1) % len(question.options)
        last = state["current_index"] == state["total_questions"] - 1
        if last:
            return pick
        client.post(
            "/quiz/answer",
            data={"selected_option_index": pick, "action": "next"},
            follow_redirects=False,
        )


def test_categories(client) -> None:
    categories = client.get("/api/categories").json()
    assert "physics" in [c["slug"] for c in categories]


def test_full_quiz_is_saved_and_reported(client) -> None:
    _login(client)
    _start(client)
    pick = _play(client)

    response = client.post(
        "/quiz/answer",
        data={"selected_option_index": pick, "action": "submit"},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"] == "/results/physics"

    total = main.question_bank.get_category("physics").count
    result = client.get("/api/results/physics").json()
    assert result["attempt"]["score"] == total
    assert result["percentage"] == 100
    assert result["band"] == "high"
    assert len(result["feedback"]) == total

    assert client.get("/results/physics").status_code == 200
    assert client.get("/api/quiz").status_code == 401

    progress = client.get("/api/progress").json()
    assert list(progress) == ["physics"]
    assert progress["physics"]["series"][0]["score"] == total

    assert client.get("/api/attempts/physics/0").status_code == 200
    assert client.get("/api/attempts/physics/1").status_code == 404
    assert len(client.get("/api/attempts/physics").json()) == 1


def test_review_and_resume(client) -> None:
    _login(client)
    _start(client)
    _play(client)

    client.post("/quiz/answer", data={"action": "review"}, follow_redirects=False)
    assert client.get("/api/quiz").json()["state"] == "review_pending"
    assert "Review your answers" in client.get("/quiz").text

    client.post("/quiz/answer", data={"action": "resume"}, follow_redirects=False)
    assert client.get("/api/quiz").json()["state"] == "in_progress"


def test_answers_survive_navigation(client) -> None:
    _start(client)
    client.post(
        "/quiz/answer",
        data={"selected_option_index": 1, "action": "next"},
        follow_redirects=False,
    )
    client.post("/quiz/answer", data={"action": "previous"}, follow_redirects=False)

    state = client.get("/api/quiz").json()
    assert state["current_index"] == 0
    assert state["selected_answer_index"] == 1
    assert state["summary"]["answered"] == 1


def test_invalid_option_is_rejected(client) -> None:
    _start(client)
    response = client.post(
        "/quiz/answer", data={"selected_option_index": 42, "action": "next"}
    )
    assert response.status_code == 400


def test_submit_before_last_question_is_rejected(client) -> None:
    _start(client)
    response = client.post("/quiz/answer", data={"action": "submit"})
    assert response.status_code == 409


def test_guest_results_are_shown_but_not_saved(client) -> None:
    _start(client)
    _play(client)

    response = client.post("/quiz/answer", data={"action": "submit"}, follow_redirects=False)

    assert response.status_code == 200
    assert "could not be saved" in response.text
    assert client.get("/api/results/physics").status_code == 404


def test_missing_history_redirects(client) -> None:
    _login(client)
    response = client.get("/results/physics", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/"

    response = client.get("/review/physics/0", follow_redirects=False)
    assert response.headers["location"] == "/review"

    assert client.get("/quiz", follow_redirects=False).headers["location"] == "/"


def test_unknown_category_goes_home(client) -> None:
    response = client.post("/start", data={"category": "astrology"}, follow_redirects=False)
    assert response.headers["location"] == "/"


def test_histories_do_not_leak_between_users(client) -> None:
    _login(client, "u1")
    _start(client)
    pick = _play(client)
    client.post(
        "/quiz/answer",
        data={"selected_option_index": pick, "action": "submit"},
        follow_redirects=False,
    )

    client.post("/logout", follow_redirects=False)
    _login(client, "u2")

    assert client.get("/api/progress").json() == {}
    assert client.get("/api/attempts/physics").json() == []


def test_pages_render(client) -> None:
    _login(client)
    assert "Choose a category" in client.get("/").text
    assert "No quiz attempts yet" in client.get("/progress").text
    assert "No attempts to review yet" in client.get("/review").text

    _start(client)
    pick = _play(client)
    client.post(
        "/quiz/answer",
        data={"selected_option_index": pick, "action": "submit"},
        follow_redirects=False,
    )
    assert "Physics" in client.get("/progress").text
    assert "View details" in client.get("/review").text
    assert "Back to review" in client.get("/review/physics/0").text

    client.post("/progress/clear", follow_redirects=False)
    assert client.get("/api/progress").json() == {}


def test_switching_accounts_discards_running_quiz(client) -> None:
    _login(client, "u1")
    _start(client)
    pick = _play(client)

    _login(client, "u2")
    response = client.post(
        "/quiz/answer",
        data={"selected_option_index": pick, "action": "submit"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/"
    assert client.get("/api/attempts/physics").json() == []
    _login(client, "u1")
    assert client.get("/api/attempts/physics").json() == []


def test_session_of_another_user_is_not_served(redis_client) -> None:
    sessions = SessionRepository(redis_client)
    quiz = QuizSession("physics", "u1")
    quiz.start(main.question_bank.get_questions("physics"))
    sessions.save("abc", quiz)

    assert main.get_active_session("abc", "u2", sessions) is None
    assert sessions.load("abc") is None


def test_quiz_page_survives_redis_outage(client, redis_client, monkeypatch) -> None:
    _login(client)
    _start(client)

    def broken(*args, **kwargs):
        raise redis.ConnectionError("redis down")

    monkeypatch.setattr(redis_client, "get", broken)

    response = client.get("/quiz", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/"


def test_scored_quiz_renders_when_session_cleanup_fails(
    client, redis_client, monkeypatch
) -> None:
    _start(client)
    _play(client)

    def broken(*args, **kwargs):
        raise redis.ConnectionError("redis down")

    monkeypatch.setattr(redis_client, "delete", broken)

    response = client.post("/quiz/answer", data={"action": "submit"}, follow_redirects=False)
    assert response.status_code == 200
    assert "could not be saved" in response.text


def test_file_logging_is_off_for_tests() -> None:
    handlers = logging.getLogger("boardprep").handlers
    assert settings.LOG_TO_FILE is False
    assert not any(isinstance(h, RotatingFileHandler) for h in handlers)
