import os


class Settings:
    PROJECT_NAME: str = "boardprep"
    DEBUG: bool = os.environ.get("BOARDPREP_DEBUG", "") == "1"
    LOG_DIR: str = "log"
    LOG_FILE: str = "boardprep.log"
    LOG_TO_FILE: bool = os.environ.get("BOARDPREP_LOG_TO_FILE", "1") == "1"
    REDIS_URL: str = os.environ.get("BOARDPREP_REDIS_URL", "redis://localhost:6379/0")
    KEY_PREFIX: str = "boardPrepPro"
    QUESTIONS_DIR: str = "questions"
    QUIZ_SIZE: int = 0
    MAX_ATTEMPTS: int = 10
    SESSION_COOKIE_NAME: str = "quiz_session_id"
    USER_COOKIE_NAME: str = "boardprep_user"
    SESSION_TIMEOUT_MINUTES: int = 120


settings = Settings()
